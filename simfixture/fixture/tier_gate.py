from simfixture.config import RunConfig


def should_skip(tier: int | None, config: RunConfig) -> bool:
    if tier is None:
        return False

    # tier 0 is the baseline and always runs
    if config.skip_tiers and tier > 0:
        return True

    return len(config.run_tiers) > 0 and tier not in config.run_tiers


def skip_reason(tier: int) -> str:
    return f"Tier {tier} skipped"
