# attendance_agent/services/session.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from attendance_agent.models.conversation import ChatTurn, Conversation, MessageSender
from attendance_agent.services.agent import AttendanceAgent
from attendance_agent.services.memory import MemoryService
from attendance_agent.utils.prompts import SESSION_ERROR_TEXT, WELCOME_TEXT

logger = logging.getLogger(__name__)

WELCOME_TURN = ChatTurn(sender=MessageSender.AGENT, text=WELCOME_TEXT)


@dataclass
class SessionState:
    active_conversation_id: Optional[str] = None
    busy: bool = False
    turns: List[ChatTurn] = field(default_factory=lambda: [WELCOME_TURN])


class ChatSession:
    """Drives one user's chat: active conversation, busy flag and stored history.

    History is read once on construction and written back in full after
    every mutation.
    """

    def __init__(self, agent: Optional[AttendanceAgent] = None, memory_service: Optional[MemoryService] = None):
        self.agent = agent or AttendanceAgent()
        self.memory_service = memory_service or MemoryService()
        self.state = SessionState()
        self.history: List[Conversation] = self.memory_service.load()

    @property
    def busy(self) -> bool:
        return self.state.busy

    def _find(self, conversation_id: Optional[str]) -> Optional[Conversation]:
        if conversation_id is None:
            return None
        for conversation in self.history:
            if conversation.id == conversation_id:
                return conversation
        return None

    def _persist(self) -> None:
        self.memory_service.save(self.history)

    def _append(self, conversation: Conversation, turn: ChatTurn) -> None:
        conversation.messages.append(turn)
        self.state.turns = list(conversation.messages)
        self._persist()

    async def submit(self, text: str) -> Optional[ChatTurn]:
        """Send one user message; returns the agent's turn, or None if rejected"""
        prompt = (text or "").strip()
        if not prompt:
            return None
        if self.state.busy:
            logger.debug("Rejected submission while a request is in flight")
            return None

        user_turn = ChatTurn(sender=MessageSender.USER, text=prompt)
        conversation = self._find(self.state.active_conversation_id)
        if conversation is None:
            conversation = Conversation.start(prompt, [WELCOME_TURN, user_turn])
            self.history.insert(0, conversation)
            self.state.active_conversation_id = conversation.id
            self.state.turns = list(conversation.messages)
            self._persist()
        else:
            self._append(conversation, user_turn)

        self.state.busy = True
        try:
            try:
                reply = await self.agent.converse(prompt)
                agent_turn = ChatTurn(sender=MessageSender.AGENT, text=reply)
            except Exception:
                logger.exception("Failed to get response from agent")
                agent_turn = ChatTurn(sender=MessageSender.AGENT, text=SESSION_ERROR_TEXT)
            self._append(conversation, agent_turn)
        finally:
            self.state.busy = False
        return agent_turn

    def select_conversation(self, conversation_id: str) -> bool:
        conversation = self._find(conversation_id)
        if conversation is None:
            logger.warning("Conversation %s not found in history", conversation_id)
            return False
        self.state.active_conversation_id = conversation.id
        self.state.turns = list(conversation.messages)
        return True

    def new_conversation(self) -> None:
        self.state.active_conversation_id = None
        self.state.turns = [WELCOME_TURN]

    def clear_history(self) -> None:
        self.history = []
        self.new_conversation()
        self.memory_service.clear()
