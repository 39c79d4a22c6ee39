"""
MedChat - patient chat UI
=========================
Chat window plus an assessment sidebar (urgency, diagnoses, risk factors).
Every turn sends the whole conversation and the previous diagnosis list to
the MedChat API and replaces the sidebar with what comes back.

Run: streamlit run ui/chat_app.py
"""

import sys
from pathlib import Path

import httpx
import streamlit as st
from loguru import logger

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from medchat.chat_state import (
    ChatState,
    TurnErrored,
    UserSubmitted,
    build_request,
    reduce,
    response_event,
    status_label,
)
from medchat.config import settings

CHAT_ENDPOINT = f"{settings.MEDCHAT_API_URL}/api/chat"
REQUEST_TIMEOUT = settings.MODEL_TIMEOUT + 10

URGENCY_COLORS = {
    "EMERGENCY": "#dc2626",
    "URGENT_CARE": "#f97316",
    "PRIMARY_CARE": "#eab308",
    "MONITOR": "#22c55e",
    "SAFE": "#16a34a",
}
RISK_LABELS = {
    "[LOW]": "Low",
    "[MEDIUM]": "Elevated",
    "[HIGH]": "High",
    "[MORE_INFO]": "Need more info",
}

st.set_page_config(page_title="MedChat Assistant", page_icon="🩺", layout="wide")

if "chat" not in st.session_state:
    st.session_state.chat = ChatState()


def dispatch(event) -> ChatState:
    st.session_state.chat = reduce(st.session_state.chat, event)
    return st.session_state.chat


def send_turn(state: ChatState) -> None:
    """POST the conversation and fold the result (or the failure) back into state."""
    try:
        with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
            resp = client.post(CHAT_ENDPOINT, json=build_request(state))
        dispatch(response_event(resp))
    except httpx.HTTPError as e:
        logger.warning(f"⚠️ MedChat API request failed: {e}")
        dispatch(TurnErrored(f"Could not reach the MedChat API: {e}"))
    except Exception as e:
        # never leave the turn pending, or the input stays disabled
        logger.exception("MedChat turn failed unexpectedly")
        dispatch(TurnErrored(f"Something went wrong: {e}"))


# ---------------------------------------------------------------------------
# Sidebar: assessment summary
# ---------------------------------------------------------------------------
def render_sidebar(state: ChatState) -> None:
    with st.sidebar:
        st.header("Assessment Summary")

        if state.urgency:
            color = URGENCY_COLORS.get(state.urgency.code, "#6b7280")
            st.subheader("Urgency")
            st.markdown(
                f"<div style='background:{color};color:white;padding:10px;border-radius:8px;"
                f"text-align:center;font-weight:600'>{state.urgency.text}</div>",
                unsafe_allow_html=True,
            )

        if state.diagnosis:
            st.subheader("Diagnoses")
            for entry in state.diagnosis:
                st.markdown(f"**{entry.name}** · {status_label(entry.status)}")

        if state.risks:
            st.subheader("Risk Factors")
            for risk in state.risks:
                st.markdown(f"**{risk.condition}** · {RISK_LABELS.get(risk.risk_level, risk.risk_level)}")

        if state.field_errors:
            st.caption("Some indicators could not be updated: " + ", ".join(state.field_errors))


# ---------------------------------------------------------------------------
# Main chat column
# ---------------------------------------------------------------------------
state = st.session_state.chat

st.title("🩺 MedChat Assistant")
st.caption("AI-powered symptom assessment. This is not a substitute for professional medical advice.")

for message in state.messages:
    with st.chat_message(message.role):
        st.write(message.content)

if state.error:
    st.error(state.error)

render_sidebar(state)

user_input = st.chat_input("Describe your symptoms...", disabled=state.pending)
if user_input:
    state = dispatch(UserSubmitted(user_input))
    if state.pending:
        with st.spinner("Thinking..."):
            send_turn(state)
        st.rerun()
