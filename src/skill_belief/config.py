"""Configuration for the skill-belief inference engine.

Holds the policy constants of the Beta-Bernoulli updater, the half-life
decay and the trend classifier. The defaults are behavioral contracts:
changing one is a policy decision, not a bug fix. All settings can be
overridden via ``SKILL_BELIEF_*`` environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SkillBeliefConfig(BaseSettings):
    """Configuration for skill-belief inference."""

    model_config = SettingsConfigDict(
        env_prefix="SKILL_BELIEF_",
        case_sensitive=False,
        extra="ignore",
    )

    # Uninformative Beta(1, 1) prior
    prior_alpha: float = Field(
        default=1.0,
        gt=0.0,
        description="Prior alpha (pseudo-successes) every inference starts from.",
    )
    prior_beta: float = Field(
        default=1.0,
        gt=0.0,
        description="Prior beta (pseudo-failures) every inference starts from.",
    )

    # Evidence weighting
    evidence_scale: float = Field(
        default=10.0,
        gt=0.0,
        description="Unit observations contributed by one fully reliable signal.",
    )
    fallback_reliability: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Reliability used for source types missing from the lookup table.",
    )

    # Half-life decay toward the prior
    decay_grace_days: float = Field(
        default=30.0,
        ge=0.0,
        description="Days without evidence before decay is applied at all.",
    )
    half_life_days: float = Field(
        default=365.0,
        gt=0.0,
        description="Days of inactivity that halve the posterior's pseudo-counts.",
    )

    # Trend classification
    stale_trend_days: float = Field(
        default=180.0,
        ge=0.0,
        description="Days without evidence after which the trend is DECAYING.",
    )
    trend_window: int = Field(
        default=3,
        ge=1,
        description="Number of most recent signals averaged for the trend.",
    )
    trend_band: float = Field(
        default=5.0,
        ge=0.0,
        description="Points the recent average must clear the mean by to leave STABLE.",
    )

    # Uncertainty
    z_score: float = Field(
        default=1.96,
        gt=0.0,
        description="Normal quantile for the credible interval (1.96 = 95%).",
    )
    default_sample_count: int = Field(
        default=100,
        ge=1,
        description="Posterior samples drawn when the caller does not specify n.",
    )
