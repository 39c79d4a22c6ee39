import pytest

from medchat.errors import ModelUnavailable

CANNED_REPLIES = {
    "chat": "How long have you had the fever?",
    "urgency": "[URGENT_CARE] Seek urgent care soon (serious but not life-threatening).",
    "diagnosis": "1. Influenza - [TRUE]\n2. Pneumonia - [ALSO_POSSIBLE]",
    "risk": "[LOW]",
}


def classify(messages) -> str:
    """Tell which prompt a message list was built from by its system message."""
    system = messages[0].content
    if "assesses the risk of" in system:
        return "risk"
    if "how urgently" in system:
        return "urgency"
    if "suggests potential conditions" in system:
        return "diagnosis"
    return "chat"


class FakeClient:
    """Stands in for ModelClient: canned replies per prompt kind, records every call."""

    def __init__(self, replies=None, fail=()):
        self.replies = {**CANNED_REPLIES, **(replies or {})}
        self.fail = set(fail)
        self.calls = []

    async def complete(self, messages, stop=None, max_tokens=None):
        self.calls.append(list(messages))
        kind = classify(messages)
        condition = None
        if kind == "risk":
            condition = next(c for c in ("Hypertension", "Diabetes", "Depression", "Asthma") if c in messages[0].content)
        if kind in self.fail or f"risk:{condition}" in self.fail:
            raise ModelUnavailable(f"{kind} call failed", status_code=500)
        reply = self.replies.get(f"risk:{condition}", self.replies[kind]) if condition else self.replies[kind]
        return reply


@pytest.fixture
def fake_client():
    return FakeClient()
