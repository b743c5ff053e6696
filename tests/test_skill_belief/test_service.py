"""Tests for the skill-belief inference service."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from src.skill_belief.config import SkillBeliefConfig
from src.skill_belief.schemas import BetaPosterior, EvidenceSignal, SignalSourceType, Trend
from src.skill_belief.service import SkillBeliefService


class TestInferBelief:
    """Tests for the primary entry point."""

    def test_no_evidence_is_uninformative(self, service, now):
        belief = service.infer_belief("skill_1", [], now=now)
        assert 40 <= belief.proficiency_mean <= 60
        assert belief.confidence_interval == 50
        assert belief.trend == Trend.STABLE
        assert belief.evidence_chain == ()

    def test_high_reliability_pulls_mean(self, service, make_signal, now):
        signals = [make_signal(95, 0.95, source_type=SignalSourceType.PROCTORED_EXAM, skill_id="react")]
        belief = service.infer_belief("react", signals, now=now)
        assert belief.proficiency_mean > 70

    def test_reliability_weighting(self, service, make_signal, now):
        high = service.infer_belief(
            "react",
            [make_signal(90, 0.95, source_type=SignalSourceType.PROCTORED_EXAM)],
            now=now,
        )
        low = service.infer_belief(
            "react",
            [make_signal(90, 0.1, source_type=SignalSourceType.SELF_ATTESTATION)],
            now=now,
        )
        assert high.proficiency_mean == 83
        assert low.proficiency_mean == 63
        assert high.proficiency_mean > low.proficiency_mean

    def test_source_default_reliability_applied(self, service, make_signal, now):
        exam = service.infer_belief(
            "react", [make_signal(90, None, source_type=SignalSourceType.PROCTORED_EXAM)], now=now
        )
        claim = service.infer_belief(
            "react", [make_signal(90, None, source_type=SignalSourceType.SELF_ATTESTATION)], now=now
        )
        assert exam.proficiency_mean > claim.proficiency_mean

    def test_accumulation_narrows_interval(self, service, corroborating_signals, now):
        single = service.infer_belief("python", corroborating_signals[:1], now=now)
        multiple = service.infer_belief("python", corroborating_signals, now=now)
        assert single.confidence_interval == 24
        assert multiple.confidence_interval == 14
        assert multiple.confidence_interval <= single.confidence_interval

    def test_rising_trend(self, service, rising_signals, now):
        belief = service.infer_belief("sql", rising_signals, now=now)
        assert belief.trend == Trend.RISING

    def test_stale_high_score_not_rising(self, service, make_signal, now):
        signals = [make_signal(95, 0.95, days_ago=200)]
        belief = service.infer_belief("react", signals, now=now)
        assert belief.trend == Trend.DECAYING

    def test_far_staleness_pulls_mean_toward_half(self, service, make_signal, now):
        fresh = service.infer_belief("react", [make_signal(95, 0.95, days_ago=1)], now=now)
        stale = service.infer_belief("react", [make_signal(95, 0.95, days_ago=1500)], now=now)
        assert fresh.proficiency_mean == 87
        assert stale.proficiency_mean == 60
        assert abs(stale.proficiency_mean - 50) < abs(fresh.proficiency_mean - 50)
        assert stale.confidence_interval > fresh.confidence_interval

    def test_evidence_chain_most_recent_first(self, service, make_signal, now):
        old = make_signal(70, 0.5, days_ago=50, signal_id="old")
        new = make_signal(80, 0.5, days_ago=5, signal_id="new")
        mid = make_signal(75, 0.5, days_ago=20, signal_id="mid")
        belief = service.infer_belief("python", [old, new, mid], now=now)
        assert [s.signal_id for s in belief.evidence_chain] == ["new", "mid", "old"]
        assert belief.evidence_chain[0] is new

    def test_last_updated_is_now(self, service, now):
        assert service.infer_belief("python", [], now=now).last_updated == now

    def test_deterministic_apart_from_last_updated(self, corroborating_signals, now):
        first = SkillBeliefService().infer_belief("python", corroborating_signals, now=now).to_dict()
        second = SkillBeliefService().infer_belief("python", list(corroborating_signals), now=now).to_dict()
        first.pop("last_updated")
        second.pop("last_updated")
        assert first == second

    def test_input_list_not_mutated(self, service, make_signal, now):
        signals = [make_signal(80, days_ago=1), make_signal(70, days_ago=9)]
        snapshot = list(signals)
        service.infer_belief("python", signals, now=now)
        assert signals == snapshot

    def test_output_bounds_for_garbage_input(self, service, make_signal, now):
        signals = [make_signal(500, 3.0), make_signal(-500, -3.0), make_signal(float("nan"), None)]
        belief = service.infer_belief("python", signals, now=now)
        assert 0 <= belief.proficiency_mean <= 100
        assert 0 <= belief.confidence_interval <= 50

    def test_naive_now_treated_as_utc(self, service):
        signal = EvidenceSignal(
            skill_id="py",
            source_type=SignalSourceType.PEER_REVIEW,
            raw_score=80,
            timestamp=datetime(2025, 1, 1),
        )
        naive = service.infer_belief("py", [signal], now=datetime(2025, 3, 1))
        aware = service.infer_belief("py", [signal], now=datetime(2025, 3, 1, tzinfo=timezone.utc))
        assert naive.last_updated == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert naive == aware

    def test_logs_with_skill_context(self, service, make_signal, now, captured_logs):
        service.infer_belief("react", [make_signal(80, 0.5)], now=now)
        events = [e for e in captured_logs if e["event"] == "Belief inferred"]
        assert len(events) == 1
        assert events[0]["skill_id"] == "react"
        assert events[0]["signals"] == 1

    def test_defaults_to_wall_clock(self, service, make_signal):
        belief = service.infer_belief("python", [make_signal(80, 0.5)])
        assert belief.last_updated.tzinfo is not None

    def test_custom_policy(self, make_signal, now):
        # A shorter staleness window turns a month-old signal into DECAYING
        cfg = SkillBeliefConfig(stale_trend_days=20.0)
        belief = SkillBeliefService(config=cfg).infer_belief(
            "python", [make_signal(80, 0.5, days_ago=25)], now=now
        )
        assert belief.trend == Trend.DECAYING


class TestInferBeliefs:
    def test_groups_by_skill(self, service, make_signal, now):
        signals = [
            make_signal(90, 0.9, skill_id="python"),
            make_signal(40, 0.9, skill_id="rust"),
            make_signal(88, 0.6, skill_id="python", days_ago=3),
        ]
        beliefs = service.infer_beliefs(signals, now=now)
        assert set(beliefs) == {"python", "rust"}
        assert len(beliefs["python"].evidence_chain) == 2
        assert beliefs["python"].proficiency_mean > beliefs["rust"].proficiency_mean
        assert beliefs["rust"].last_updated == now

    def test_naive_now_accepted(self, service, make_signal, now):
        beliefs = service.infer_beliefs([make_signal(70, 0.5)], now=now.replace(tzinfo=None))
        assert beliefs["python"].last_updated == now

    def test_empty_batch(self, service, now):
        assert service.infer_beliefs([], now=now) == {}


class TestPosteriorFor:
    def test_fresh_posterior_matches_accumulation(self, service, make_signal, now):
        posterior = service.posterior_for([make_signal(80, 0.5)], now=now)
        assert posterior.alpha == pytest.approx(5.0)
        assert posterior.beta == pytest.approx(2.0)

    def test_naive_now_accepted(self, service, make_signal, now):
        posterior = service.posterior_for([make_signal(80, 0.5, days_ago=365)], now=now.replace(tzinfo=None))
        assert posterior.alpha == pytest.approx(3.0)

    def test_stale_posterior_decayed(self, service, make_signal, now):
        posterior = service.posterior_for([make_signal(80, 0.5, days_ago=365)], now=now)
        assert posterior.alpha == pytest.approx(3.0)
        assert posterior.beta == pytest.approx(1.5)


class TestSamplePosterior:
    def test_returns_n_values_in_range(self, service):
        samples = service.sample_posterior(BetaPosterior(alpha=5.0, beta=5.0), 50)
        assert len(samples) == 50
        assert all(0.0 <= s <= 100.0 for s in samples)

    def test_default_count(self, service):
        assert len(service.sample_posterior(BetaPosterior(alpha=2.0, beta=2.0))) == 100

    def test_injected_rng_is_reproducible(self):
        posterior = BetaPosterior(alpha=6.0, beta=2.0)
        first = SkillBeliefService(rng=random.Random(5)).sample_posterior(posterior, 30)
        second = SkillBeliefService(rng=random.Random(5)).sample_posterior(posterior, 30)
        assert first == second

    def test_summarize_posterior(self, service, make_signal, now):
        posterior = service.posterior_for([make_signal(90, 0.9, days_ago=2)], now=now)
        summary = service.summarize_posterior(posterior, 400)
        assert summary.count == 400
        assert 0.0 <= summary.p2_5 <= summary.median <= summary.p97_5 <= 100.0

    def test_sampling_does_not_change_belief(self, service, corroborating_signals, now):
        before = service.infer_belief("python", corroborating_signals, now=now)
        service.sample_posterior(BetaPosterior(alpha=3.0, beta=3.0), 25)
        after = service.infer_belief("python", corroborating_signals, now=now + timedelta(0))
        assert before == after
