# attendance_agent/services/memory.py
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from pymongo import MongoClient

from attendance_agent.config import HISTORY_BACKEND, HISTORY_DIR, HISTORY_SLOT, MONGODB_DB, MONGODB_URI
from attendance_agent.models.conversation import Conversation, ConversationStore

logger = logging.getLogger(__name__)


class JsonFileSlot:
    """A named slot stored as a single JSON file"""

    def __init__(self, directory, name: str = HISTORY_SLOT):
        self.path = Path(directory) / f"{name}.json"

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")

    def remove(self) -> None:
        if self.path.exists():
            self.path.unlink()


class MongoSlot:
    """A named slot stored as one document in a MongoDB collection"""

    def __init__(self, collection, name: str = HISTORY_SLOT):
        self.collection = collection
        self.name = name

    def read(self) -> Optional[str]:
        doc = self.collection.find_one({"_id": self.name})
        return doc.get("payload") if doc else None

    def write(self, payload: str) -> None:
        self.collection.replace_one({"_id": self.name}, {"_id": self.name, "payload": payload}, upsert=True)

    def remove(self) -> None:
        self.collection.delete_one({"_id": self.name})


def create_history_slot(backend: str = HISTORY_BACKEND):
    """Build the configured slot backend"""
    if backend == "mongo":
        client = MongoClient(MONGODB_URI)
        return MongoSlot(client[MONGODB_DB].chat_history)
    if backend != "file":
        logger.warning("Unknown HISTORY_BACKEND %r, falling back to file storage", backend)
    return JsonFileSlot(HISTORY_DIR)


class MemoryService:
    """Loads and snapshots the whole conversation store.

    Storage problems are logged and swallowed so the chat keeps working
    without durable history.
    """

    def __init__(self, slot=None):
        self.slot = slot if slot is not None else create_history_slot()

    def load(self) -> List[Conversation]:
        try:
            payload = self.slot.read()
        except Exception:
            logger.exception("Failed to load chat history")
            return []
        if not payload:
            return []
        try:
            return ConversationStore.validate_json(payload)
        except ValidationError:
            logger.exception("Stored chat history is malformed; starting empty")
            return []

    def save(self, conversations: List[Conversation]) -> bool:
        try:
            self.slot.write(ConversationStore.dump_json(conversations).decode("utf-8"))
            return True
        except Exception:
            logger.exception("Failed to save chat history")
            return False

    def clear(self) -> bool:
        try:
            self.slot.remove()
            return True
        except Exception:
            logger.exception("Failed to clear chat history")
            return False
