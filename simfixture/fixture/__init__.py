from .assertion_gate import AssertionGate as AssertionGate
from .completion_signal import CompletionSignal as CompletionSignal
from .models import (
    FixtureOutcome as FixtureOutcome,
    FixtureResult as FixtureResult,
    SimulationHandle as SimulationHandle,
)
from .names import extract_tier as extract_tier, normalize_name as normalize_name
from .report_emitter import ReportEmitter as ReportEmitter
from .run_coordinator import RunCoordinator as RunCoordinator
from .runtime_lifecycle import RuntimeLifecycle as RuntimeLifecycle
from .simulation_fixture import (
    TERMINATION_TIMEOUT_SECONDS as TERMINATION_TIMEOUT_SECONDS,
    SimulationFixture as SimulationFixture,
)
from .tier_gate import should_skip as should_skip, skip_reason as skip_reason
