from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

URGENCY_CODES = ("EMERGENCY", "URGENT_CARE", "PRIMARY_CARE", "MONITOR", "SAFE")
RISK_LEVELS = ("[LOW]", "[MEDIUM]", "[HIGH]")
RISK_MORE_INFO = "[MORE_INFO]"
DIAGNOSIS_STATUSES = ("TRUE", "ALSO_POSSIBLE", "MORE_INFO")


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class RiskAssessment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    condition: str
    risk_level: str = Field(alias="riskLevel")  # one of RISK_LEVELS or RISK_MORE_INFO


class DiagnosisEntry(BaseModel):
    name: str
    status: str  # TRUE / ALSO_POSSIBLE / MORE_INFO, as emitted by the model


class UrgencyResult(BaseModel):
    code: Optional[str] = None  # None when the reply had no leading [TAG]
    text: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation: list[ChatMessage] = Field(min_length=1)
    last_diagnosis: list[ChatMessage] = Field(
        default_factory=list,
        alias="lastDiagnosis",
        description="Previous turn's diagnosis list, re-encoded as assistant message(s)",
    )


class ChatResponse(BaseModel):
    text: Optional[str] = None
    urgency: Optional[UrgencyResult] = None
    diagnosis: list[DiagnosisEntry] = []
    risks: list[RiskAssessment] = []
    errors: dict[str, str] = Field(default_factory=dict, description="Per-field failures, empty on full success")
