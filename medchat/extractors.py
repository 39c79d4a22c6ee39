import re
from typing import Iterable

from loguru import logger

from medchat.errors import ExtractionAmbiguous
from medchat.schemas import (
    RISK_LEVELS,
    RISK_MORE_INFO,
    URGENCY_CODES,
    DiagnosisEntry,
    UrgencyResult,
)

URGENCY_PATTERN = re.compile(r"^\[(\w+)\]\s*(.*)$", re.DOTALL)
DIAGNOSIS_LINE_PATTERN = re.compile(r"^(\d+)\.\s*(.+?)\s*-\s*\[(.+?)\]$")


def _ambiguous(field: str, detail: str) -> None:
    logger.warning(f"⚠️ {ExtractionAmbiguous.__name__} [{field}]: {detail}")


def parse_urgency(reply: str) -> UrgencyResult:
    """
    Parse the urgency reply.

    Expected format (one of five fixed sentences):
    [EMERGENCY] Go to Emergency Room (life-threatening).

    The code is the bracketed tag; text is always the full reply. A reply
    without a leading tag gets code None. A tag outside URGENCY_CODES is
    passed through as-is and logged.
    """
    match = URGENCY_PATTERN.match(reply.strip())
    if not match:
        _ambiguous("urgency", "reply has no leading [TAG]")
        return UrgencyResult(code=None, text=reply)

    code = match.group(1)
    if code not in URGENCY_CODES:
        _ambiguous("urgency", f"unknown urgency tag [{code}]")

    return UrgencyResult(code=code, text=reply)


def parse_diagnosis(reply: str) -> list[DiagnosisEntry]:
    """
    Parse a numbered diagnosis list, one entry per line:

    1. Disease A - [TRUE]
    2. Disease B - [ALSO_POSSIBLE]
    3. Disease C - [MORE_INFO]

    Lines that don't fit the pattern are dropped; order is kept.
    """
    entries = []
    for line in reply.split("\n"):
        match = DIAGNOSIS_LINE_PATTERN.match(line.strip())
        if match:
            entries.append(DiagnosisEntry(name=match.group(2), status=match.group(3)))

    if reply.strip() and not entries:
        _ambiguous("diagnosis", "no line matched '<n>. <name> - [<status>]'")
    return entries


def serialize_diagnosis(entries: Iterable[DiagnosisEntry]) -> str:
    """Inverse of parse_diagnosis, used to feed the last list back to the model."""
    return "\n".join(
        f"{i}. {entry.name} - [{entry.status}]" for i, entry in enumerate(entries, start=1)
    )


def normalize_risk(reply: str) -> str:
    # Anything but an exact tag means "not enough information".
    if reply in RISK_LEVELS:
        return reply
    return RISK_MORE_INFO
