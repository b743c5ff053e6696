"""
Mock evidence for testing and development.

Generates synthetic evidence histories that mimic what the ingestion
layer produces. Useful for:
- Demoing belief output without real assessment data
- Exercising decay and trend paths in tests
"""

import random
from datetime import datetime, timedelta, timezone

from src.skill_belief.schemas import SOURCE_RELIABILITY, EvidenceSignal, SignalSourceType

# (source_type, source_name, timestamp, raw_score, description)
SAMPLE_HISTORY = [
    (
        SignalSourceType.SELF_ATTESTATION,
        "LinkedIn Profile",
        datetime(2023, 1, 15, 10, 0, tzinfo=timezone.utc),
        90.0,
        'Claimed "Expert" on LinkedIn',
    ),
    (
        SignalSourceType.CODE_REPOSITORY,
        "GitHub Analysis",
        datetime(2023, 6, 20, 14, 30, tzinfo=timezone.utc),
        75.0,
        "Analyzed 15 PRs in the main repo. Good modularity.",
    ),
    (
        SignalSourceType.PEER_REVIEW,
        "360 Feedback",
        datetime(2024, 2, 10, 9, 0, tzinfo=timezone.utc),
        88.0,
        "Commended for complex state management logic.",
    ),
    (
        SignalSourceType.PROCTORED_EXAM,
        "HackerRank (Advanced)",
        datetime(2025, 11, 5, 16, 0, tzinfo=timezone.utc),
        94.0,
        "Passed architecture certification with distinction.",
    ),
]

SOURCE_NAMES = {
    SignalSourceType.PROCTORED_EXAM: ["HackerRank", "Codility", "Certification Board"],
    SignalSourceType.PROJECT_DELIVERY: ["Jira Delivery Report", "Client Sign-off"],
    SignalSourceType.CODE_REPOSITORY: ["GitHub Analysis", "GitLab Analysis"],
    SignalSourceType.PEER_REVIEW: ["360 Feedback", "Manager Review"],
    SignalSourceType.SOCIAL_PROOF: ["Endorsements", "Conference Talk"],
    SignalSourceType.SELF_ATTESTATION: ["LinkedIn Profile", "Resume"],
}


def generate_mock_signals(
    skill_id: str,
    *,
    count: int | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> list[EvidenceSignal]:
    """
    Generate a mock evidence history for a skill.

    Args:
        skill_id: Skill the evidence is about.
        count: Number of random signals to draw. None returns the fixed
            four-signal demo history (self-attestation through proctored exam).
        rng: Random source for the random history (seed it for tests).
        now: Newest allowed timestamp for the random history (default: UTC now).

    Returns:
        Signals in chronological order.
    """
    if count is None:
        return [
            EvidenceSignal(
                signal_id=f"sig_{i}",
                skill_id=skill_id,
                source_type=source_type,
                source_name=source_name,
                timestamp=timestamp,
                raw_score=raw_score,
                reliability=SOURCE_RELIABILITY[source_type],
                description=description,
            )
            for i, (source_type, source_name, timestamp, raw_score, description)
            in enumerate(SAMPLE_HISTORY, start=1)
        ]

    rng = rng or random.Random()
    if now is None:
        now = datetime.now(timezone.utc)

    source_types = list(SignalSourceType)
    signals = []
    for i in range(count):
        source_type = rng.choice(source_types)
        signals.append(
            EvidenceSignal(
                signal_id=f"mock_{skill_id}_{i + 1}",
                skill_id=skill_id,
                source_type=source_type,
                source_name=rng.choice(SOURCE_NAMES[source_type]),
                timestamp=now - timedelta(days=rng.randint(0, 720), hours=rng.randint(0, 23)),
                raw_score=round(rng.uniform(40.0, 100.0), 1),
                # Leave reliability unset on some signals to exercise the source default
                reliability=None if rng.random() < 0.5 else round(rng.uniform(0.05, 1.0), 2),
                description=f"Synthetic {source_type.value.lower().replace('_', ' ')} evidence",
            )
        )
    return sorted(signals, key=lambda s: s.timestamp)
