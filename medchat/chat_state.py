"""
Client-side chat state for the MedChat UI.

The UI never mutates state in place: every change goes through
``reduce(state, event)``, which returns a new ChatState. This keeps the chat
log and sidebar logic testable without a rendering environment.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Union

import httpx
from loguru import logger

from medchat.extractors import serialize_diagnosis
from medchat.schemas import (
    ChatMessage,
    ChatResponse,
    DiagnosisEntry,
    RiskAssessment,
    UrgencyResult,
)


@dataclass(frozen=True)
class ChatState:
    messages: tuple[ChatMessage, ...] = ()
    urgency: Optional[UrgencyResult] = None
    diagnosis: tuple[DiagnosisEntry, ...] = ()
    risks: tuple[RiskAssessment, ...] = ()
    pending: bool = False
    error: Optional[str] = None
    # field-level failures reported by the last turn
    field_errors: dict = field(default_factory=dict)


@dataclass(frozen=True)
class UserSubmitted:
    text: str


@dataclass(frozen=True)
class TurnCompleted:
    response: ChatResponse


@dataclass(frozen=True)
class TurnErrored:
    message: str


Event = Union[UserSubmitted, TurnCompleted, TurnErrored]


def reduce(state: ChatState, event: Event) -> ChatState:
    if isinstance(event, UserSubmitted):
        text = event.text.strip()
        # one turn in flight at a time
        if not text or state.pending:
            return state
        return replace(
            state,
            messages=state.messages + (ChatMessage(role="user", content=text),),
            pending=True,
            error=None,
        )

    if isinstance(event, TurnCompleted):
        response = event.response
        messages = state.messages
        if response.text:
            messages = messages + (ChatMessage(role="assistant", content=response.text),)
        failed = response.errors
        # a failed call keeps the last good value; diagnosis seeds the next prompt
        previous_risks = {r.condition: r for r in state.risks}
        risks = tuple(
            previous_risks.get(r.condition, r) if f"risk:{r.condition}" in failed else r
            for r in response.risks
        )
        return replace(
            state,
            messages=messages,
            urgency=state.urgency if "urgency" in failed else response.urgency,
            diagnosis=state.diagnosis if "diagnosis" in failed else tuple(response.diagnosis),
            risks=risks,
            pending=False,
            error=None,
            field_errors=dict(response.errors),
        )

    if isinstance(event, TurnErrored):
        return replace(state, pending=False, error=event.message)

    raise TypeError(f"Unknown chat event: {event!r}")


def last_diagnosis_messages(state: ChatState) -> list[ChatMessage]:
    """Previous diagnosis list as a synthetic assistant message (empty on the first turn)."""
    if not state.diagnosis:
        return []
    return [ChatMessage(role="assistant", content=serialize_diagnosis(state.diagnosis))]


def build_request(state: ChatState) -> dict:
    """JSON body for POST /api/chat."""
    return {
        "conversation": [m.as_dict() for m in state.messages],
        "lastDiagnosis": [m.as_dict() for m in last_diagnosis_messages(state)],
    }


STATUS_LABELS = {
    "TRUE": "Diagnosed",
    "ALSO_POSSIBLE": "Also possible",
    "MORE_INFO": "More information needed",
}


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def response_event(resp: httpx.Response) -> Event:
    """
    Turn the API's HTTP response into the event to dispatch.

    Any reply that can't be read as a ChatResponse becomes TurnErrored, so a
    pending turn is always closed.
    """
    if resp.status_code >= 400:
        detail = resp.text
        try:
            body = resp.json()
            if isinstance(body, dict) and "detail" in body:
                detail = body["detail"]
        except ValueError:
            pass
        return TurnErrored(f"The assistant is unavailable right now ({resp.status_code}): {detail}")

    try:
        return TurnCompleted(ChatResponse.model_validate(resp.json()))
    except ValueError as e:
        logger.warning(f"⚠️ Unexpected MedChat API response: {e}")
        return TurnErrored("The MedChat API sent a response that could not be read.")
