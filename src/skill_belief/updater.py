"""Evidence-to-belief updater.

Folds evidence signals into Beta posterior parameters by conjugate
updating. Each signal counts as ``reliability * evidence_scale``
pseudo-observations, split between alpha and beta by its normalized
score:

    alpha += score/100 * reliability * scale
    beta  += (1 - score/100) * reliability * scale

The update is order-independent; signals are still sorted oldest-first
because the decay and trend stages need "most recent" semantics.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import (
    SOURCE_RELIABILITY,
    BetaPosterior,
    EvidenceSignal,
    SignalSourceType,
)

logger = logging.getLogger(__name__)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp into [low, high]; NaN maps to ``low``."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def default_reliability_for(
    source_type: SignalSourceType | str,
    config: SkillBeliefConfig | None = None,
) -> float:
    """Look up the default reliability for a source type.

    Unknown source types get the configured fallback (0.5 by default).
    """
    try:
        return SOURCE_RELIABILITY[SignalSourceType(source_type)]
    except ValueError:
        cfg = config or SkillBeliefConfig()
        return cfg.fallback_reliability


def effective_reliability(
    signal: EvidenceSignal,
    config: SkillBeliefConfig | None = None,
) -> float:
    """Signal reliability, falling back to the source default, clamped to [0, 1]."""
    reliability = signal.reliability
    if reliability is None or math.isnan(reliability):
        reliability = default_reliability_for(signal.source_type, config)
    return clamp(reliability, 0.0, 1.0)


def sort_signals(signals: Iterable[EvidenceSignal]) -> list[EvidenceSignal]:
    """Sort oldest-first. ``sorted`` is stable, so ties keep input order."""
    return sorted(signals, key=lambda s: s.timestamp)


def update_posterior(
    posterior: BetaPosterior,
    signal: EvidenceSignal,
    config: SkillBeliefConfig | None = None,
) -> BetaPosterior:
    """Apply one signal to a posterior and return the updated posterior."""
    cfg = config or SkillBeliefConfig()

    normalized = clamp(signal.raw_score / 100.0, 0.0, 1.0)
    observations = effective_reliability(signal, cfg) * cfg.evidence_scale

    return BetaPosterior(
        alpha=posterior.alpha + normalized * observations,
        beta=posterior.beta + (1.0 - normalized) * observations,
    )


def accumulate(
    signals: Iterable[EvidenceSignal],
    config: SkillBeliefConfig | None = None,
) -> BetaPosterior:
    """Fold a full evidence history into a posterior, starting from the prior.

    An empty history returns the prior unchanged.
    """
    cfg = config or SkillBeliefConfig()
    posterior = BetaPosterior(alpha=cfg.prior_alpha, beta=cfg.prior_beta)

    ordered = sort_signals(signals)
    for signal in ordered:
        posterior = update_posterior(posterior, signal, cfg)

    logger.debug(
        "Accumulated %d signals: alpha=%.3f beta=%.3f",
        len(ordered), posterior.alpha, posterior.beta,
    )
    return posterior
