from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from attendance_agent.models.conversation import ChatTurn, Conversation, MessageSender
from attendance_agent.services.memory import JsonFileSlot, MemoryService, MongoSlot


class _FakeCollection:
    """Just enough of a pymongo collection for MongoSlot."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        return self.docs.get(query["_id"])

    def replace_one(self, query: dict[str, Any], doc: dict[str, Any], upsert: bool = False) -> None:
        assert upsert
        self.docs[query["_id"]] = doc

    def delete_one(self, query: dict[str, Any]) -> None:
        self.docs.pop(query["_id"], None)


class _BrokenSlot:
    def read(self) -> str:
        raise OSError("disk gone")

    def write(self, payload: str) -> None:
        raise OSError("disk gone")

    def remove(self) -> None:
        raise OSError("disk gone")


def _sample() -> list[Conversation]:
    return [
        Conversation(
            id="1700000000001",
            title="Check attendance in Data Structures for ...",
            messages=[
                ChatTurn(sender=MessageSender.AGENT, text="Hello!"),
                ChatTurn(sender=MessageSender.USER, text="Check attendance in Data Structures for 2021UIT5678"),
            ],
        ),
        Conversation(id="1700000000000", title="hi", messages=[]),
    ]


def test_file_slot_round_trip(tmp_path: Path) -> None:
    memory = MemoryService(JsonFileSlot(tmp_path, "chatHistory"))
    assert memory.load() == []

    assert memory.save(_sample())
    stored = json.loads((tmp_path / "chatHistory.json").read_text(encoding="utf-8"))
    assert [c["id"] for c in stored] == ["1700000000001", "1700000000000"]
    assert stored[0]["messages"][1]["sender"] == "user"

    assert memory.load() == _sample()


def test_file_slot_clear_removes_file(tmp_path: Path) -> None:
    memory = MemoryService(JsonFileSlot(tmp_path))
    memory.save(_sample())
    assert memory.clear()
    assert list(tmp_path.iterdir()) == []
    assert memory.load() == []


def test_mongo_slot_round_trip() -> None:
    collection = _FakeCollection()
    memory = MemoryService(MongoSlot(collection, "chatHistory"))

    memory.save(_sample())
    assert set(collection.docs) == {"chatHistory"}
    assert memory.load() == _sample()

    memory.clear()
    assert collection.docs == {}
    assert memory.load() == []


def test_malformed_history_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "chatHistory.json").write_text("{not json", encoding="utf-8")
    assert MemoryService(JsonFileSlot(tmp_path)).load() == []

    (tmp_path / "chatHistory.json").write_text(json.dumps([{"id": "x"}]), encoding="utf-8")
    assert MemoryService(JsonFileSlot(tmp_path)).load() == []


def test_storage_failures_are_swallowed() -> None:
    memory = MemoryService(_BrokenSlot())
    assert memory.load() == []
    assert memory.save(_sample()) is False
    assert memory.clear() is False
