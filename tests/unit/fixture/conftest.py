import threading
from concurrent.futures import Future
from typing import Any, Callable, List

import pytest

from simfixture.engine.simulation import Simulation


class FakeRuntime:
    """Stands in for a runtime, answering asks from a scripted reply list.

    An empty script leaves replies pending forever. Replies may be callables
    taking the asked message.
    """

    def __init__(
        self,
        replies: List[Any] | None = None,
        terminates: bool = True,
    ) -> None:
        self.replies = list(replies or [])
        self.terminates = terminates
        self.asked: List[Any] = []
        self.pending: List[Future] = []
        self.start_calls = 0
        self.start_thread: int | None = None
        self.shutdown_calls = 0
        self._callbacks: List[Callable[[], Any]] = []

    def register_on_termination(self, callback: Callable[[], Any]):
        self._callbacks.append(callback)

    def start(self):
        self.start_calls += 1
        self.start_thread = threading.get_ident()

    def ask(self, message: Any, timeout: float | None = None) -> Future:
        self.asked.append(message)
        reply: Future = Future()

        if len(self.replies) == 0:
            self.pending.append(reply)
            return reply

        value = self.replies.pop(0)
        if callable(value):
            value = value(message)

        reply.set_result(value)
        return reply

    def shutdown(self):
        self.shutdown_calls += 1

        if self.terminates:
            for callback in self._callbacks:
                callback()


@pytest.fixture
def fake_runtime_factory():
    created: List[FakeRuntime] = []

    def create(replies: List[Any] | None = None, terminates: bool = True):
        def factory() -> FakeRuntime:
            runtime = FakeRuntime(replies=replies, terminates=terminates)
            created.append(runtime)
            return runtime

        factory.created = created
        return factory

    return create


@pytest.fixture
def checkout_simulation() -> Simulation:
    simulation = Simulation("checkout_flow")
    simulation.iterations = 1

    @simulation.step()
    async def browse(session):
        return session

    return simulation
