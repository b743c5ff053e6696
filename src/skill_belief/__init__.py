"""Probabilistic skill-belief inference.

Components:
- SkillBeliefConfig: Pydantic settings for the policy constants
- EvidenceSignal: One piece of evidence about a skill (input)
- BetaPosterior: Beta(alpha, beta) belief over proficiency
- SkillBelief: Immutable mean / credible half-width / trend (output)
- SkillBeliefService: Stateless inference and posterior sampling
- PosteriorSampler: Seedable Gamma-ratio Beta sampler
"""

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import (
    SOURCE_RELIABILITY,
    BetaPosterior,
    EvidenceSignal,
    SignalSourceType,
    SkillBelief,
    Trend,
)
from src.skill_belief.service import SkillBeliefService
from src.skill_belief.uncertainty import (
    CredibleInterval,
    PosteriorSampler,
    SampleSummary,
    credible_interval,
)

__all__ = [
    "SOURCE_RELIABILITY",
    "BetaPosterior",
    "CredibleInterval",
    "EvidenceSignal",
    "PosteriorSampler",
    "SampleSummary",
    "SignalSourceType",
    "SkillBelief",
    "SkillBeliefConfig",
    "SkillBeliefService",
    "Trend",
    "credible_interval",
]
