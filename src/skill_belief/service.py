"""Skill-belief inference service.

Turns an evidence history into a ``SkillBelief``:

1. Accumulate signals into a Beta posterior from the uniform prior.
2. Classify the trend against the pre-decay mean, then erode the
   posterior toward the prior if the evidence is stale.
3. Report the decayed posterior's mean and credible half-width.

The service keeps no state between calls. The clock is read only when
the caller does not pass ``now``, so results are reproducible in tests.
"""

from __future__ import annotations

import random
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timezone

from src.observability.logging import get_logger, log_context
from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.decay import apply_decay, decay_and_classify, days_since_last_evidence
from src.skill_belief.schemas import BetaPosterior, EvidenceSignal, SkillBelief, as_utc
from src.skill_belief.uncertainty import (
    PosteriorSampler,
    SampleSummary,
    credible_interval,
    summarize_samples,
)
from src.skill_belief.updater import accumulate, sort_signals

logger = get_logger(__name__)


class SkillBeliefService:
    """Compute calibrated skill beliefs from unreliable evidence.

    Usage:
        service = SkillBeliefService()
        belief = service.infer_belief("react", signals)

        # Reproducible decay and sampling:
        service = SkillBeliefService(rng=random.Random(7))
        belief = service.infer_belief("react", signals, now=fixed_now)
    """

    def __init__(
        self,
        config: SkillBeliefConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or SkillBeliefConfig()
        self._sampler = PosteriorSampler(rng)

    def infer_belief(
        self,
        skill_id: str,
        signals: Iterable[EvidenceSignal],
        *,
        now: datetime | None = None,
    ) -> SkillBelief:
        """Infer the current belief about one skill.

        Args:
            skill_id: Skill being assessed.
            signals: Full evidence history, in any order. May be empty.
            now: Reference time for decay and trend (default: UTC now).
                Naive datetimes are taken to be UTC.

        Returns:
            A new SkillBelief. ``last_updated`` is ``now``.
        """
        now = datetime.now(timezone.utc) if now is None else as_utc(now)

        cfg = self._config
        ordered = sort_signals(signals)

        with log_context(skill_id=skill_id):
            posterior = accumulate(ordered, cfg)
            posterior, trend, days = decay_and_classify(posterior, ordered, now, cfg)
            interval = credible_interval(posterior, cfg)

            belief = SkillBelief(
                skill_id=skill_id,
                proficiency_mean=round(interval.mean),
                confidence_interval=interval.half_width,
                last_updated=now,
                evidence_chain=tuple(reversed(ordered)),
                trend=trend,
            )
            logger.debug(
                "Belief inferred",
                signals=len(ordered),
                proficiency_mean=belief.proficiency_mean,
                confidence_interval=belief.confidence_interval,
                trend=trend.value,
                days_since_evidence=round(days, 1),
            )
        return belief

    def infer_beliefs(
        self,
        signals: Iterable[EvidenceSignal],
        *,
        now: datetime | None = None,
    ) -> dict[str, SkillBelief]:
        """Infer beliefs for every skill in a mixed evidence list.

        Skills are inferred independently; one ``now`` is shared by the batch.
        """
        now = datetime.now(timezone.utc) if now is None else as_utc(now)

        by_skill: dict[str, list[EvidenceSignal]] = defaultdict(list)
        for signal in signals:
            by_skill[signal.skill_id].append(signal)

        return {
            skill_id: self.infer_belief(skill_id, skill_signals, now=now)
            for skill_id, skill_signals in by_skill.items()
        }

    def posterior_for(
        self,
        signals: Iterable[EvidenceSignal],
        *,
        now: datetime | None = None,
    ) -> BetaPosterior:
        """Final (possibly decayed) posterior for an evidence history."""
        now = datetime.now(timezone.utc) if now is None else as_utc(now)
        ordered = sort_signals(signals)
        posterior = accumulate(ordered, self._config)
        return apply_decay(posterior, days_since_last_evidence(ordered, now), self._config)

    def sample_posterior(
        self,
        posterior: BetaPosterior,
        n: int | None = None,
    ) -> list[float]:
        """Draw ``n`` Monte-Carlo samples in [0, 100] from a posterior."""
        if n is None:
            n = self._config.default_sample_count
        return self._sampler.sample(posterior, n)

    def summarize_posterior(
        self,
        posterior: BetaPosterior,
        n: int | None = None,
    ) -> SampleSummary:
        """Sample a posterior and summarize the draws."""
        return summarize_samples(self.sample_posterior(posterior, n))
