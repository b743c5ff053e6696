"""Shared fixtures for skill-belief tests."""

import random
from datetime import datetime, timedelta, timezone

import pytest
import structlog
import structlog.testing

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import EvidenceSignal, SignalSourceType
from src.skill_belief.service import SkillBeliefService
from src.skill_belief.uncertainty import PosteriorSampler


@pytest.fixture
def config():
    """Default skill-belief config."""
    return SkillBeliefConfig()


@pytest.fixture
def now():
    """Fixed reference time."""
    return datetime(2026, 2, 8, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def service(config, rng):
    """SkillBeliefService with a seeded sampler."""
    return SkillBeliefService(config=config, rng=rng)


@pytest.fixture
def sampler(rng):
    """PosteriorSampler with a seeded random source."""
    return PosteriorSampler(rng)


@pytest.fixture
def make_signal(now):
    """Factory for evidence signals dated relative to ``now``."""

    def _make(
        raw_score: float,
        reliability: float | None = None,
        *,
        days_ago: float = 1.0,
        source_type: SignalSourceType | str = SignalSourceType.CODE_REPOSITORY,
        skill_id: str = "python",
        signal_id: str = "",
    ) -> EvidenceSignal:
        return EvidenceSignal(
            skill_id=skill_id,
            source_type=source_type,
            raw_score=raw_score,
            reliability=reliability,
            timestamp=now - timedelta(days=days_ago),
            description="test evidence",
            signal_id=signal_id,
        )

    return _make


@pytest.fixture
def corroborating_signals(make_signal):
    """Three recent, mutually consistent signals from different sources."""
    return [
        make_signal(85, 0.7, days_ago=20, source_type=SignalSourceType.CODE_REPOSITORY, signal_id="sig_1"),
        make_signal(88, 0.6, days_ago=10, source_type=SignalSourceType.PEER_REVIEW, signal_id="sig_2"),
        make_signal(90, 0.9, days_ago=2, source_type=SignalSourceType.PROCTORED_EXAM, signal_id="sig_3"),
    ]


@pytest.fixture
def rising_signals(make_signal):
    """Scores climbing 60 -> 75 -> 92 from modestly reliable sources."""
    return [
        make_signal(60, 0.2, days_ago=60, signal_id="early"),
        make_signal(75, 0.2, days_ago=30, signal_id="mid"),
        make_signal(92, 0.2, days_ago=5, signal_id="recent"),
    ]


@pytest.fixture
def captured_logs():
    """Capture structlog events with bound context merged in."""
    capture = structlog.testing.LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture.entries
    structlog.reset_defaults()
