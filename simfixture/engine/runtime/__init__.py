from .controller import Controller as Controller
from .messages import (
    AwaitRun as AwaitRun,
    Failure as Failure,
    Run as Run,
    Success as Success,
)
from .runtime import Runtime as Runtime
from .simulation_runner import SimulationRunner as SimulationRunner
