# attendance_agent/services/agent.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import json
import logging

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_ollama import ChatOllama

from attendance_agent.services.attendance import AttendanceService, to_tool_payload
from attendance_agent.utils.prompts import AGENT_APOLOGY, ATTENDANCE_AGENT_PROMPT

logger = logging.getLogger(__name__)

GET_ATTENDANCE = "getAttendance"

GET_ATTENDANCE_TOOL = {
    "type": "function",
    "function": {
        "name": GET_ATTENDANCE,
        "description": "Get attendance records for a student, optionally for a single subject.",
        "parameters": {
            "type": "object",
            "properties": {
                "studentId": {
                    "type": "string",
                    "description": "Student ID, e.g. 2021UCA1234",
                },
                "subject": {
                    "type": "string",
                    "description": "Subject name, e.g. Data Structures. Omit to get every subject.",
                },
            },
            "required": ["studentId"],
        },
    },
}


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class ToolCall:
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    call_id: Optional[str] = None


LlmReply = Union[PlainText, ToolCall]


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Some providers return a list of content parts
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            parts.append(part["text"])
    return "".join(parts)


def classify_reply(message: AIMessage) -> LlmReply:
    """Reduce a model reply to plain text or its first requested tool call"""
    tool_calls = getattr(message, "tool_calls", None) or []
    if not tool_calls:
        return PlainText(_message_text(message))
    if len(tool_calls) > 1:
        logger.info("Model requested %d tool calls; honouring only the first", len(tool_calls))
    first = tool_calls[0]
    return ToolCall(name=first["name"], args=dict(first.get("args") or {}), call_id=first.get("id"))


class AttendanceAgent:
    def __init__(self, llm=None, attendance_service: Optional[AttendanceService] = None):
        self.chat_llm = llm if llm is not None else self._create_ollama_llm()
        self.llm = self.chat_llm.bind_tools([GET_ATTENDANCE_TOOL])
        self.attendance_service = attendance_service or AttendanceService()

    def _create_ollama_llm(self):
        """Create an Ollama chat model instance"""
        from attendance_agent.config import LLM_TEMPERATURE, LLM_TIMEOUT_S, OLLAMA_BASE_URL, OLLAMA_MODEL

        return ChatOllama(
            base_url=OLLAMA_BASE_URL,
            model=OLLAMA_MODEL,
            temperature=LLM_TEMPERATURE,
            client_kwargs={"timeout": LLM_TIMEOUT_S},
        )

    async def converse(self, prompt_text: str) -> str:
        """Answer a prompt, resolving at most one getAttendance call along the way"""
        messages: List[BaseMessage] = [
            SystemMessage(content=ATTENDANCE_AGENT_PROMPT),
            HumanMessage(content=prompt_text),
        ]
        try:
            first = await self.llm.ainvoke(messages)
            reply = classify_reply(first)

            if isinstance(reply, PlainText):
                return reply.text

            payload = await self._run_tool(reply)
            call_id = reply.call_id or reply.name
            messages.append(AIMessage(
                content=_message_text(first),
                tool_calls=[{"name": reply.name, "args": reply.args, "id": call_id}],
            ))
            messages.append(ToolMessage(content=json.dumps(payload), tool_call_id=call_id))

            # Summarise without tools so the model has to answer in text
            second = await self.chat_llm.ainvoke(messages)
            if isinstance(classify_reply(second), ToolCall):
                logger.warning("Model requested another tool call instead of answering")
                return AGENT_APOLOGY
            return _message_text(second)
        except Exception:
            logger.exception("Attendance agent round trip failed")
            return AGENT_APOLOGY

    async def _run_tool(self, call: ToolCall):
        if call.name != GET_ATTENDANCE:
            logger.warning("Model requested unknown function %r", call.name)
            return {"error": f"Unknown function '{call.name}'."}

        student_id = str(call.args.get("studentId") or "")
        subject = call.args.get("subject")
        subject = str(subject) if subject else None
        logger.info("getAttendance(studentId=%r, subject=%r)", student_id, subject)
        result = await self.attendance_service.get_attendance(student_id, subject)
        return to_tool_payload(result)
