import asyncio
from typing import Protocol, Sequence

from loguru import logger

from medchat.errors import MedChatError, TurnFailed
from medchat.extractors import normalize_risk, parse_diagnosis, parse_urgency
from medchat.prompts import (
    CHAT_SYSTEM_PROMPT,
    DIAGNOSIS_SYSTEM_PROMPT,
    URGENCY_SYSTEM_PROMPT,
    risk_system_prompt,
)
from medchat.schemas import (
    RISK_MORE_INFO,
    ChatMessage,
    ChatResponse,
    RiskAssessment,
)

DEFAULT_CONDITIONS = ("Hypertension", "Diabetes", "Depression")

TEXT_FIELD = "text"
URGENCY_FIELD = "urgency"
DIAGNOSIS_FIELD = "diagnosis"


class CompletionClient(Protocol):
    async def complete(self, messages: Sequence[ChatMessage]) -> str: ...


def _system(content: str) -> ChatMessage:
    return ChatMessage(role="system", content=content.strip())


def risk_field(condition: str) -> str:
    return f"risk:{condition}"


def build_chat_messages(conversation: Sequence[ChatMessage]) -> list[ChatMessage]:
    return [_system(CHAT_SYSTEM_PROMPT), *conversation]


def build_risk_messages(condition: str, conversation: Sequence[ChatMessage]) -> list[ChatMessage]:
    return [_system(risk_system_prompt(condition)), *conversation]


def build_urgency_messages(conversation: Sequence[ChatMessage]) -> list[ChatMessage]:
    return [_system(URGENCY_SYSTEM_PROMPT), *conversation]


def build_diagnosis_messages(
    conversation: Sequence[ChatMessage],
    last_diagnosis: Sequence[ChatMessage] = (),
) -> list[ChatMessage]:
    """
    History first, then the previous diagnosis list, then the newest message,
    so the model revises its last answer in light of the latest input.
    """
    history, latest = list(conversation[:-1]), list(conversation[-1:])
    return [_system(DIAGNOSIS_SYSTEM_PROMPT), *history, *last_diagnosis, *latest]


class ConversationOrchestrator:
    """
    Runs one chat turn: a reply, one risk call per condition, an urgency call
    and a diagnosis call, all issued concurrently against the same snapshot.
    """

    def __init__(self, client: CompletionClient, conditions: Sequence[str] = DEFAULT_CONDITIONS):
        self.client = client
        # one risk call per distinct condition, in configured order
        self.conditions = list(dict.fromkeys(conditions))

    async def run_turn(
        self,
        conversation: Sequence[ChatMessage],
        last_diagnosis: Sequence[ChatMessage] = (),
    ) -> ChatResponse:
        """
        Returns a ChatResponse with whatever succeeded. A failed call leaves its
        field as a placeholder (None / [] / "[MORE_INFO]") and is listed under
        ``errors``. Raises TurnFailed only when every call failed.
        """
        calls = {
            TEXT_FIELD: build_chat_messages(conversation),
            **{risk_field(c): build_risk_messages(c, conversation) for c in self.conditions},
            URGENCY_FIELD: build_urgency_messages(conversation),
            DIAGNOSIS_FIELD: build_diagnosis_messages(conversation, last_diagnosis),
        }

        results = await asyncio.gather(
            *(self.client.complete(messages) for messages in calls.values()),
            return_exceptions=True,
        )

        replies: dict[str, str] = {}
        errors: dict[str, str] = {}
        for field, result in zip(calls, results):
            if isinstance(result, MedChatError):
                logger.warning(f"⚠️ Model call for '{field}' failed: {result}")
                errors[field] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                replies[field] = result

        if not replies:
            raise TurnFailed(errors)

        response = ChatResponse(
            text=replies.get(TEXT_FIELD),
            urgency=parse_urgency(replies[URGENCY_FIELD]) if URGENCY_FIELD in replies else None,
            diagnosis=parse_diagnosis(replies[DIAGNOSIS_FIELD]) if DIAGNOSIS_FIELD in replies else [],
            risks=[
                RiskAssessment(
                    condition=c,
                    risk_level=normalize_risk(replies[risk_field(c)]) if risk_field(c) in replies else RISK_MORE_INFO,
                )
                for c in self.conditions
            ],
            errors=errors,
        )

        logger.info(
            f"🩺 Turn complete: {len(conversation)} messages, "
            f"urgency={response.urgency.code if response.urgency else None}, "
            f"{len(response.diagnosis)} diagnoses, {len(errors)}/{len(calls)} calls failed"
        )
        return response
