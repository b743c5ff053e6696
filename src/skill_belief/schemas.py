"""Schema definitions for skill-belief inference.

Evidence signals come in from an ingestion layer that has already
classified each item by source type and attached a raw 0-100 score.
The engine folds them into a ``BetaPosterior`` and reports an immutable
``SkillBelief``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SignalSourceType(str, Enum):
    """Closed set of evidence categories."""

    PROCTORED_EXAM = "PROCTORED_EXAM"
    PROJECT_DELIVERY = "PROJECT_DELIVERY"
    CODE_REPOSITORY = "CODE_REPOSITORY"
    PEER_REVIEW = "PEER_REVIEW"
    SOCIAL_PROOF = "SOCIAL_PROOF"
    SELF_ATTESTATION = "SELF_ATTESTATION"


# Default trust factor per source type
SOURCE_RELIABILITY: dict[SignalSourceType, float] = {
    SignalSourceType.PROCTORED_EXAM: 0.95,
    SignalSourceType.PROJECT_DELIVERY: 0.85,
    SignalSourceType.CODE_REPOSITORY: 0.75,
    SignalSourceType.PEER_REVIEW: 0.60,
    SignalSourceType.SOCIAL_PROOF: 0.30,
    SignalSourceType.SELF_ATTESTATION: 0.10,
}


class Trend(str, Enum):
    """Trajectory label for a skill belief."""

    RISING = "RISING"
    STABLE = "STABLE"
    DECAYING = "DECAYING"


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class EvidenceSignal:
    """A single piece of evidence about proficiency in one skill.

    Scores and reliabilities are not validated here; the updater clamps
    them into range so fuzzy real-world inputs still yield an estimate.

    Attributes:
        skill_id: Skill being assessed.
        source_type: Evidence category. Unknown strings are kept as-is and
            resolve to the fallback reliability.
        raw_score: The source's own proficiency assessment, nominally 0-100.
        timestamp: When the evidence was produced (not ingested).
        reliability: Trust factor in [0, 1]; None means use the source default.
        description: Provenance note, display-only.
        signal_id: Stable identifier from the ingestion layer.
        source_name: Human-readable source (e.g. "GitHub"), display-only.
    """

    skill_id: str
    source_type: SignalSourceType | str
    raw_score: float
    timestamp: datetime
    reliability: float | None = None
    description: str = ""
    signal_id: str = ""
    source_name: str = ""

    def __post_init__(self) -> None:
        if not self.skill_id:
            raise ValueError("skill_id must be non-empty")
        valid_types = {t.value for t in SignalSourceType}
        if not isinstance(self.source_type, SignalSourceType) and self.source_type in valid_types:
            object.__setattr__(self, "source_type", SignalSourceType(self.source_type))
        # Naive timestamps are taken to be UTC so ordering never mixes offsets
        object.__setattr__(self, "timestamp", as_utc(self.timestamp))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        source_type = self.source_type
        if isinstance(source_type, SignalSourceType):
            source_type = source_type.value
        return {
            "signal_id": self.signal_id,
            "skill_id": self.skill_id,
            "source_type": source_type,
            "source_name": self.source_name,
            "timestamp": self.timestamp.isoformat(),
            "raw_score": self.raw_score,
            "reliability": self.reliability,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EvidenceSignal":
        """Create an EvidenceSignal from a dictionary.

        Accepts ISO-8601 timestamps, including a trailing ``Z``.

        Raises:
            KeyError: If required fields are missing.
        """
        reliability = data.get("reliability")
        return cls(
            skill_id=data["skill_id"],
            source_type=data["source_type"],
            raw_score=float(data["raw_score"]),
            timestamp=_parse_timestamp(data["timestamp"]),
            reliability=float(reliability) if reliability is not None else None,
            description=data.get("description", ""),
            signal_id=data.get("signal_id", ""),
            source_name=data.get("source_name", ""),
        )


@dataclass(frozen=True)
class BetaPosterior:
    """Beta(alpha, beta) belief over the true proficiency fraction in [0, 1]."""

    alpha: float = 1.0
    beta: float = 1.0

    def __post_init__(self) -> None:
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")

    @property
    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    @property
    def variance(self) -> float:
        total = self.alpha + self.beta
        return (self.alpha * self.beta) / (total * total * (total + 1.0))

    @property
    def n_effective(self) -> float:
        """Pseudo-observations accumulated over the uniform prior."""
        return self.alpha + self.beta - 2.0


@dataclass(frozen=True)
class SkillBelief:
    """Calibrated belief about one skill, computed fresh on every call.

    Attributes:
        skill_id: Skill the belief is about.
        proficiency_mean: Rounded posterior mean x 100, in [0, 100].
        confidence_interval: Half-width of the 95% credible interval in points.
        last_updated: When the belief was computed.
        evidence_chain: Input signals, most recent first, unmodified.
        trend: RISING, STABLE or DECAYING.
    """

    skill_id: str
    proficiency_mean: int
    confidence_interval: int
    last_updated: datetime
    evidence_chain: tuple[EvidenceSignal, ...] = field(default_factory=tuple)
    trend: Trend = Trend.STABLE

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary for display or API responses."""
        return {
            "skill_id": self.skill_id,
            "proficiency_mean": self.proficiency_mean,
            "confidence_interval": self.confidence_interval,
            "last_updated": self.last_updated.isoformat(),
            "evidence_chain": [s.to_dict() for s in self.evidence_chain],
            "trend": self.trend.value,
        }
