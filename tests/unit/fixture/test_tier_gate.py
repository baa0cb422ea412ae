from simfixture.config import RunConfig
from simfixture.fixture import should_skip, skip_reason


class TestShouldSkip:
    def test_untiered_tests_always_run(self):
        assert should_skip(None, RunConfig(skip_tiers=True)) is False
        assert should_skip(None, RunConfig(run_tiers=frozenset({1}))) is False

    def test_default_config_runs_everything(self):
        assert should_skip(3, RunConfig()) is False

    def test_skip_tiers_skips_tiers_above_zero(self):
        assert should_skip(1, RunConfig(skip_tiers=True)) is True

    def test_skip_tiers_keeps_baseline_tier(self):
        assert should_skip(0, RunConfig(skip_tiers=True)) is False

    def test_run_tiers_filters_tiers(self):
        config = RunConfig(run_tiers=frozenset({1, 3}))

        assert should_skip(2, config) is True
        assert should_skip(3, config) is False

    def test_run_tiers_applies_to_baseline_tier(self):
        assert should_skip(0, RunConfig(run_tiers=frozenset({2}))) is True


class TestSkipReason:
    def test_reason_names_tier(self):
        assert skip_reason(2) == "Tier 2 skipped"
