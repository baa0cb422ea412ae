from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from simfixture.config import TimeParser
from simfixture.exceptions import SimulationDefinitionError

from .assertions import Assertion
from .timings import Timings

StepFunction = Callable[[Dict[str, Any]], Awaitable[Any]]


@dataclass(slots=True, frozen=True)
class Step:
    name: str
    call: StepFunction


class Simulation:
    """A load simulation definition.

    Test bodies receive a fresh ``Simulation`` and configure it: set ``vus``,
    ``duration`` (or ``iterations``) and ``ramp_up``, register steps with
    :meth:`step` and declare expectations with :meth:`assertions`. Each
    virtual user runs every step in registration order, passing its own
    ``session`` dict, until the duration elapses or its iterations are done.
    """

    vus: int = 1
    duration: str | int | float = "10s"
    iterations: int | None = None
    ramp_up: str | int | float | None = None

    def __init__(self, name: str) -> None:
        self.name = name
        self._steps: List[Step] = []
        self._assertions: List[Assertion] = []
        self._timings: Timings | None = None

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    @property
    def declared_assertions(self) -> List[Assertion]:
        return list(self._assertions)

    @property
    def ready(self) -> bool:
        return self._timings is not None

    @property
    def timings(self) -> Timings:
        if self._timings is None:
            raise SimulationDefinitionError(
                f"Simulation {self.name} has not been set up"
            )

        return self._timings

    def step(self, name: str | None = None):
        def wrapper(func: StepFunction):
            self.add_step(func, name=name)
            return func

        return wrapper

    def add_step(self, func: StepFunction, name: str | None = None):
        self._require_mutable()

        if inspect.iscoroutinefunction(func) is False:
            raise SimulationDefinitionError(
                f"Step {getattr(func, '__name__', func)!r} must be an async function"
            )

        step_name = name or func.__name__
        if step_name in {step.name for step in self._steps}:
            raise SimulationDefinitionError(f"Duplicate step name {step_name!r}")

        self._steps.append(Step(name=step_name, call=func))

    def assertions(self, *assertions: Assertion):
        self._require_mutable()

        for assertion in assertions:
            if not isinstance(assertion, Assertion):
                raise SimulationDefinitionError(
                    f"Expected an Assertion, got {assertion!r}"
                )

            self._assertions.append(assertion)

        return self

    def set_up(self) -> Timings:
        if self._timings is not None:
            return self._timings

        if len(self._steps) == 0:
            raise SimulationDefinitionError(
                f"Simulation {self.name} does not define any steps"
            )

        if self.vus < 1:
            raise SimulationDefinitionError("vus must be at least 1")

        if self.iterations is not None and self.iterations < 1:
            raise SimulationDefinitionError("iterations must be at least 1")

        try:
            duration_seconds = TimeParser(self.duration).time
            ramp_up_seconds = (
                TimeParser(self.ramp_up).time if self.ramp_up is not None else 0.0
            )

        except ValueError as err:
            raise SimulationDefinitionError(str(err)) from err

        self._timings = Timings(
            vus=self.vus,
            duration_seconds=duration_seconds,
            iterations=self.iterations,
            ramp_up_seconds=ramp_up_seconds,
        )

        return self._timings

    def _require_mutable(self):
        if self._timings is not None:
            raise SimulationDefinitionError(
                f"Simulation {self.name} is already set up and can no longer change"
            )
