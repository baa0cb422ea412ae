import gc
from typing import Callable

import psutil

from simfixture.engine.runtime import Runtime

from .completion_signal import CompletionSignal

RuntimeFactory = Callable[[], Runtime]


class RuntimeLifecycle:
    def __init__(
        self,
        runtime_factory: RuntimeFactory,
        collect_garbage: bool = False,
    ) -> None:
        self._runtime_factory = runtime_factory
        self._collect_garbage = collect_garbage
        self._runtime: Runtime | None = None
        self._signal: CompletionSignal | None = None
        self._stopped = False
        self.rss_before_start: int | None = None

    @property
    def started(self) -> bool:
        return self._runtime is not None

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def runtime(self) -> Runtime:
        if self._runtime is None:
            raise RuntimeError("Runtime has not been started")

        return self._runtime

    @property
    def signal(self) -> CompletionSignal:
        if self._signal is None:
            raise RuntimeError("Runtime has not been started")

        return self._signal

    def start(self) -> CompletionSignal:
        if self._runtime is not None:
            raise RuntimeError("Runtime was already started")

        signal = CompletionSignal()

        runtime = self._runtime_factory()
        runtime.register_on_termination(signal.fulfill)

        if self._collect_garbage:
            for _ in range(3):
                gc.collect()

            self.rss_before_start = psutil.Process().memory_info().rss

        self._runtime = runtime
        self._signal = signal
        runtime.start()

        return signal

    def stop(self):
        if self._runtime is None:
            raise RuntimeError("Cannot stop a runtime that was never started")

        if self._stopped:
            raise RuntimeError("Runtime was already stopped")

        self._stopped = True
        self._runtime.shutdown()

    async def await_termination(
        self,
        signal: CompletionSignal,
        timeout: float,
    ):
        await signal.wait_async(timeout)
