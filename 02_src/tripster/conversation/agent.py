"""ConversationAgent implementation."""

from typing import Protocol

from ..llm import ILLMProvider
from ..logging_config import get_logger
from ..models import MAX_TURNS, ChatTurn
from ..storage import IStorage
from ..tracker import ITracker

logger = get_logger(__name__)

PERSONA_PROMPT = (
    "คุณคือ Tripster เป็นผู้ชาย, ผู้ช่วยด้านการท่องเที่ยวภาคเหนือของประเทศไทย.\n"
    "ตอบให้สั้น เข้าใจง่าย ใช้ภาษาสุภาพ เหมาะกับทุกเพศทุกวัย และตอบตามข้อเท็จจริง.\n"
    "ใช้ประวัติการสนทนาก่อนหน้าเพื่อปรับคำแนะนำตามความชอบของผู้ใช้.\n"
    "หากไม่มีข้อมูลเพียงพอ ให้แนะนำสถานที่ยอดนิยมในภาคเหนือของประเทศไทยและแจ้งว่าเป็นข้อมูลทั่วไป."
)

COMPLETION_FAILED_TEXT = "ระบบมีปัญหา กรุณาลองใหม่"
EMPTY_COMPLETION_TEXT = "ขออภัย ฉันไม่สามารถให้ข้อมูลได้"

_ROLE_MAP = {"user": "user", "model": "assistant"}


class IConversationAgent(Protocol):
    """Completion with per-user memory."""

    async def complete(self, user_id: str, prompt: str) -> str:
        """Answer `prompt` in the context of the user's recent turns."""
        ...

    async def has_history(self, user_id: str) -> bool:
        """Whether the user has talked to the assistant before."""
        ...


class ConversationAgent:
    """Runs completions with the persona and the user's bounded history."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        storage: IStorage,
        tracker: ITracker,
        max_tokens: int = 1024,
    ):
        self._llm = llm_provider
        self._storage = storage
        self._tracker = tracker
        self._max_tokens = max_tokens

    async def has_history(self, user_id: str) -> bool:
        return await self._storage.get_chat_history(user_id) is not None

    async def complete(self, user_id: str, prompt: str) -> str:
        """
        Answer `prompt` in the context of the user's recent turns.

        The prompt and the reply are appended to the history as a pair. A
        failed completion returns an apology text and leaves history untouched.
        """
        history = await self._storage.get_chat_history(user_id)
        prior = history.trimmed(MAX_TURNS) if history else []

        messages = [
            {"role": _ROLE_MAP[turn.role], "content": turn.text} for turn in prior
        ]
        # The Messages API requires the conversation to open with a user turn
        while messages and messages[0]["role"] != "user":
            messages.pop(0)
        messages.append({"role": "user", "content": prompt})

        try:
            response_text = await self._llm.complete(
                messages=messages,
                system=PERSONA_PROMPT,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.error(f"LLM error for {user_id}: {e}", exc_info=True)
            await self._tracker.track(
                event_type="remote_call_failed",
                actor="conversation_agent",
                data={"user_id": user_id, "service": "completion", "error": str(e)},
            )
            return COMPLETION_FAILED_TEXT

        response_text = response_text.strip() or EMPTY_COMPLETION_TEXT
        logger.debug(f"Generated response for {user_id}: {response_text[:50]}...")

        await self._storage.append_turns(
            user_id,
            [ChatTurn(role="user", text=prompt), ChatTurn(role="model", text=response_text)],
        )

        await self._tracker.track(
            event_type="completion_generated",
            actor="conversation_agent",
            data={
                "user_id": user_id,
                "prompt": prompt[:200],
                "history_turns": len(prior),
            },
        )

        return response_text
