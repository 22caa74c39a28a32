from __future__ import annotations

from typing import Any

import pytest

from attendance_agent.services.attendance import AttendanceService


class ScriptedChatModel:
    """Stands in for a chat model: replays queued replies and records requests."""

    def __init__(self, replies: list[Any]) -> None:
        self.replies = list(replies)
        self.requests: list[list[Any]] = []
        self.tools_used: list[bool] = []
        self.bound_tools: list[dict[str, Any]] | None = None

    def bind_tools(self, tools: list[dict[str, Any]]) -> "_ToolBoundModel":
        self.bound_tools = tools
        return _ToolBoundModel(self)

    async def ainvoke(self, messages: list[Any]) -> Any:
        return self._reply(messages, with_tools=False)

    def _reply(self, messages: list[Any], with_tools: bool) -> Any:
        self.requests.append(list(messages))
        self.tools_used.append(with_tools)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class _ToolBoundModel:
    def __init__(self, model: ScriptedChatModel) -> None:
        self.model = model

    async def ainvoke(self, messages: list[Any]) -> Any:
        return self.model._reply(messages, with_tools=True)


@pytest.fixture
def scripted_llm():
    return ScriptedChatModel


@pytest.fixture
def attendance_service() -> AttendanceService:
    return AttendanceService(latency_s=0)
