import asyncio
import threading

from simfixture.exceptions import TerminationTimeout


class CompletionSignal:
    """Fires exactly once, when the runtime it is bound to has terminated."""

    __slots__ = ("_event", "_lock", "_fulfilled")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._fulfilled = False

    @property
    def fulfilled(self) -> bool:
        return self._event.is_set()

    def fulfill(self):
        with self._lock:
            if self._fulfilled:
                raise RuntimeError("Completion signal was already fulfilled")

            self._fulfilled = True

        self._event.set()

    def wait(self, timeout: float):
        if not self._event.wait(timeout):
            raise TerminationTimeout(timeout)

    async def wait_async(self, timeout: float):
        loop = asyncio.get_running_loop()
        if not await loop.run_in_executor(None, self._event.wait, timeout):
            raise TerminationTimeout(timeout)
