from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class RunConfig:
    skip_tiers: bool = False
    run_tiers: frozenset[int] = field(default_factory=frozenset)
