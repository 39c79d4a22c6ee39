from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger

from medchat.errors import TurnFailed
from medchat.orchestrator import ConversationOrchestrator
from medchat.schemas import ChatRequest, ChatResponse

router = APIRouter(prefix="/api")


def get_orchestrator(request: Request) -> ConversationOrchestrator:
    """The orchestrator is built once at startup and kept on app.state."""
    return request.app.state.orchestrator


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, orchestrator: ConversationOrchestrator = Depends(get_orchestrator)):
    """
    Run one turn over the full conversation.

    Partial model failures come back as 200 with ``errors`` filled in; only a
    turn where every call failed is turned into a 502.
    """
    try:
        return await orchestrator.run_turn(payload.conversation, payload.last_diagnosis)
    except TurnFailed as e:
        logger.error(f"❌ Turn failed, no model call succeeded: {e}")
        raise HTTPException(status_code=502, detail=str(e))
