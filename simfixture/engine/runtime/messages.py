from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from simfixture.engine.timings import Timings

if TYPE_CHECKING:
    from simfixture.engine.simulation import Simulation

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Run:
    simulation: Simulation
    simulation_id: str
    description: str
    timings: Timings


@dataclass(slots=True, frozen=True)
class AwaitRun:
    run_id: str


@dataclass(slots=True, frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class Failure:
    error: BaseException


def send_reply(reply: Future, value: Any) -> bool:
    if reply.done() or not reply.set_running_or_notify_cancel():
        return False

    reply.set_result(value)
    return True


def fail_reply(reply: Future, error: BaseException) -> bool:
    if reply.done() or not reply.set_running_or_notify_cancel():
        return False

    reply.set_exception(error)
    return True
