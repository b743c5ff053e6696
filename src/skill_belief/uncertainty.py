"""Uncertainty estimation for Beta posteriors.

Two views of the same posterior:

- ``credible_interval``: analytic 95% interval from a normal
  approximation, mean +/- z * std. This is an approximation, not an exact
  Beta quantile; it is close once alpha and beta have grown with realistic
  evidence volumes, and bounds are clamped to [0, 100].
- ``PosteriorSampler``: Monte-Carlo draws via the Gamma-ratio
  construction, X ~ Gamma(alpha), Y ~ Gamma(beta), X / (X + Y) ~ Beta.
  Gamma deviates use Marsaglia-Tsang rejection sampling on Box-Muller
  normals.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any

import numpy as np

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import BetaPosterior
from src.skill_belief.updater import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredibleInterval:
    """Normal-approximation credible interval on the 0-100 scale.

    Attributes:
        mean: Posterior mean x 100 (unrounded).
        lower: Lower bound, clamped to [0, 100].
        upper: Upper bound, clamped to [0, 100].
        half_width: round((upper - lower) / 2).
    """

    mean: float
    lower: float
    upper: float
    half_width: int


def credible_interval(
    posterior: BetaPosterior,
    config: SkillBeliefConfig | None = None,
) -> CredibleInterval:
    """Compute the approximate credible interval for a posterior."""
    cfg = config or SkillBeliefConfig()

    total = posterior.alpha + posterior.beta
    # Unreachable from the engine: the prior is positive and updates only add
    assert total + 1.0 > 0.0, "degenerate posterior: alpha + beta + 1 <= 0"

    mean = posterior.alpha / total
    variance = (posterior.alpha * posterior.beta) / (total * total * (total + 1.0))
    std = math.sqrt(variance)

    lower = clamp(mean - cfg.z_score * std, 0.0, 1.0) * 100.0
    upper = clamp(mean + cfg.z_score * std, 0.0, 1.0) * 100.0

    return CredibleInterval(
        mean=mean * 100.0,
        lower=lower,
        upper=upper,
        half_width=round((upper - lower) / 2.0),
    )


class PosteriorSampler:
    """Draw samples from a Beta posterior.

    The random source is injected so tests can seed it; production code
    passes (or defaults to) an unseeded ``random.Random``.

    Usage:
        sampler = PosteriorSampler(random.Random(42))
        samples = sampler.sample(BetaPosterior(alpha=5, beta=3), 200)
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def _uniform_open(self) -> float:
        # (0, 1] so log() and 1/shape powers never see zero
        return 1.0 - self._rng.random()

    def sample_normal(self) -> float:
        """Standard normal deviate via Box-Muller."""
        u1 = self._uniform_open()
        u2 = self._rng.random()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def sample_gamma(self, shape: float) -> float:
        """Gamma(shape, 1) deviate via Marsaglia-Tsang.

        Shapes below 1 are boosted: Gamma(a) = Gamma(a + 1) * U ** (1 / a).

        Raises:
            ValueError: If shape is not positive.
        """
        if not shape > 0.0:
            raise ValueError(f"Gamma shape must be positive, got {shape!r}")
        if shape < 1.0:
            return self.sample_gamma(shape + 1.0) * self._uniform_open() ** (1.0 / shape)

        d = shape - 1.0 / 3.0
        c = 1.0 / math.sqrt(9.0 * d)

        while True:
            x = self.sample_normal()
            v = 1.0 + c * x
            while v <= 0.0:
                x = self.sample_normal()
                v = 1.0 + c * x

            v = v * v * v
            u = self._uniform_open()

            # Squeeze check first, full log test only on rejection
            if u < 1.0 - 0.0331 * x * x * x * x:
                return d * v
            if math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
                return d * v

    def sample_beta(self, posterior: BetaPosterior) -> float:
        """One Beta draw in [0, 1] via the Gamma ratio."""
        gamma_a = self.sample_gamma(posterior.alpha)
        gamma_b = self.sample_gamma(posterior.beta)
        total = gamma_a + gamma_b
        if total <= 0.0:
            # Both gammas underflowed (tiny shapes); fall back to the mean
            return posterior.mean
        return gamma_a / total

    def sample(self, posterior: BetaPosterior, n: int) -> list[float]:
        """Draw ``n`` samples on the 0-100 scale. ``n <= 0`` yields an empty list."""
        return [self.sample_beta(posterior) * 100.0 for _ in range(max(0, n))]


@dataclass(frozen=True)
class SampleSummary:
    """Distribution summary of posterior samples on the 0-100 scale."""

    count: int
    mean: float
    std: float
    p2_5: float
    median: float
    p97_5: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "mean": self.mean,
            "std": self.std,
            "p2_5": self.p2_5,
            "median": self.median,
            "p97_5": self.p97_5,
        }


def summarize_samples(samples: list[float]) -> SampleSummary:
    """Summarize posterior samples for visualization.

    Raises:
        ValueError: If there are no samples.
    """
    if not samples:
        raise ValueError("Cannot summarize an empty sample list")

    arr = np.asarray(samples, dtype=np.float64)
    p2_5, median, p97_5 = np.percentile(arr, [2.5, 50.0, 97.5])
    return SampleSummary(
        count=int(arr.size),
        mean=float(arr.mean()),
        std=float(arr.std()),
        p2_5=float(p2_5),
        median=float(median),
        p97_5=float(p97_5),
    )
