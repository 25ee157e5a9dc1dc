"""Enumerations shared by verdicts, scores and the disposition."""

import enum


class Status(str, enum.Enum):
    """Lift/transport status carried by every verdict.

    Ordered by severity:
        safe < caution < escalate
    """

    SAFE = "safe"
    CAUTION = "caution"
    ESCALATE = "escalate"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


class Flag(str, enum.Enum):
    """Binary outcome of the checklist instruments (ISTUMBLE, FAST)."""

    CLEAR = "clear"
    FLAGGED = "flagged"


class RiskBand(str, enum.Enum):
    """Ordered severity band derived from a numeric score.

    ``minimal`` only appears when a rule table declares it (some FRAT
    variants use it for totals below the instrument floor).
    """

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _BAND_RANK[self]


_STATUS_RANK = {Status.SAFE: 0, Status.CAUTION: 1, Status.ESCALATE: 2}
_BAND_RANK = {
    RiskBand.MINIMAL: 0,
    RiskBand.LOW: 1,
    RiskBand.MEDIUM: 2,
    RiskBand.HIGH: 3,
}
