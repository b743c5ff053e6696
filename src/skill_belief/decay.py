"""Temporal decay and trend classification.

Decay is a single post-hoc erosion of the posterior toward the prior,
driven by how stale the most recent evidence is:

    factor = 0.5 ** (days_since_last_evidence / half_life_days)
    alpha' = prior_alpha + (alpha - prior_alpha) * factor

It is only applied once the evidence is older than the grace period.
Individual signals are never down-weighted by age during accumulation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import BetaPosterior, EvidenceSignal, Trend, as_utc
from src.skill_belief.updater import clamp

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400.0


def days_since_last_evidence(
    sorted_signals: Sequence[EvidenceSignal],
    now: datetime,
) -> float:
    """Days between the newest signal and ``now``.

    Zero when there is no evidence. Future-dated evidence also counts as zero.
    A naive ``now`` is taken to be UTC, like naive signal timestamps.
    """
    if not sorted_signals:
        return 0.0
    last = sorted_signals[-1].timestamp
    return max(0.0, (as_utc(now) - last).total_seconds() / _SECONDS_PER_DAY)


def apply_decay(
    posterior: BetaPosterior,
    days: float,
    config: SkillBeliefConfig | None = None,
) -> BetaPosterior:
    """Erode a posterior toward the prior if the evidence is past the grace period."""
    cfg = config or SkillBeliefConfig()
    if days <= cfg.decay_grace_days:
        return posterior

    factor = 0.5 ** (days / cfg.half_life_days)
    decayed = BetaPosterior(
        alpha=cfg.prior_alpha + (posterior.alpha - cfg.prior_alpha) * factor,
        beta=cfg.prior_beta + (posterior.beta - cfg.prior_beta) * factor,
    )
    logger.debug(
        "Decayed posterior after %.1f days (factor=%.4f): mean %.3f -> %.3f",
        days, factor, posterior.mean, decayed.mean,
    )
    return decayed


def recent_average(
    sorted_signals: Sequence[EvidenceSignal],
    window: int = 3,
) -> float | None:
    """Mean clamped raw score of the last ``window`` signals, or None with no evidence."""
    recent = sorted_signals[-window:]
    if not recent:
        return None
    return sum(clamp(s.raw_score, 0.0, 100.0) for s in recent) / len(recent)


def classify_trend(
    sorted_signals: Sequence[EvidenceSignal],
    mean: float,
    days: float,
    config: SkillBeliefConfig | None = None,
) -> Trend:
    """Label the trajectory of a skill.

    Args:
        sorted_signals: Evidence, oldest first.
        mean: Pre-decay posterior mean on the 0-100 scale.
        days: Days since the most recent evidence.
        config: Thresholds.

    Returns:
        DECAYING when the evidence is stale, whatever the scores say.
        Otherwise RISING or DECAYING when the recent average leaves the
        band around the mean, and STABLE inside it (edges included).
    """
    cfg = config or SkillBeliefConfig()

    average = recent_average(sorted_signals, cfg.trend_window)
    if average is None:
        return Trend.STABLE

    if days > cfg.stale_trend_days:
        return Trend.DECAYING
    if average > mean + cfg.trend_band:
        return Trend.RISING
    if average < mean - cfg.trend_band:
        return Trend.DECAYING
    return Trend.STABLE


def decay_and_classify(
    posterior: BetaPosterior,
    sorted_signals: Sequence[EvidenceSignal],
    now: datetime,
    config: SkillBeliefConfig | None = None,
) -> tuple[BetaPosterior, Trend, float]:
    """Run both stages. Returns (decayed posterior, trend, days since evidence)."""
    cfg = config or SkillBeliefConfig()
    days = days_since_last_evidence(sorted_signals, now)
    trend = classify_trend(sorted_signals, posterior.mean * 100.0, days, cfg)
    return apply_decay(posterior, days, cfg), trend, days
