from dataclasses import dataclass

from simfixture.engine.simulation import Simulation


@dataclass(slots=True, frozen=True)
class SimulationHandle:
    name: str
    timeout_seconds: int
    payload: Simulation
