from __future__ import annotations

import asyncio
import contextvars
import threading
from concurrent.futures import Future
from typing import Any, Callable, List, Literal

from simfixture.engine.results import ResultsStore
from simfixture.exceptions import AskTimeout

from .cancel_and_release_task import cancel_and_release_task
from .controller import Controller
from .messages import fail_reply

RuntimeState = Literal["created", "running", "stopping", "terminated"]


class Runtime:
    """Concurrent execution context hosting the engine controller.

    The runtime owns an asyncio event loop running on its own daemon thread.
    Callers on other threads talk to the controller through :meth:`ask` and
    learn about full termination through callbacks registered with
    :meth:`register_on_termination`, fired from the runtime thread after the
    loop has been closed.
    """

    def __init__(
        self,
        store: ResultsStore,
        name: str = "simfixture-runtime",
        start_timeout: float = 10,
    ) -> None:
        self.name = name
        self.store = store
        self._start_timeout = start_timeout
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._controller: Controller | None = None
        self._shutdown_task: asyncio.Task | None = None
        self._on_termination: List[Callable[[], Any]] = []
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._state: RuntimeState = "created"
        self._startup_error: BaseException | None = None

    @property
    def state(self) -> RuntimeState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == "running"

    @property
    def terminated(self) -> bool:
        return self._state == "terminated"

    def register_on_termination(self, callback: Callable[[], Any]):
        with self._lock:
            if self._state != "terminated":
                self._on_termination.append(callback)
                return

        callback()

    def start(self):
        with self._lock:
            if self._state != "created":
                raise RuntimeError(f"Runtime {self.name} was already started")

            self._state = "running"

        self._loop = asyncio.new_event_loop()

        # log level and output set by the caller carry over to the runtime thread
        context = contextvars.copy_context()
        self._thread = threading.Thread(
            target=context.run,
            args=(self._run,),
            name=self.name,
            daemon=True,
        )
        self._thread.start()

        if not self._ready.wait(self._start_timeout):
            raise RuntimeError(
                f"Runtime {self.name} did not start within {self._start_timeout} seconds"
            )

        if self._startup_error is not None:
            self._thread.join(self._start_timeout)
            raise RuntimeError(
                f"Runtime {self.name} failed to start"
            ) from self._startup_error

    def ask(
        self,
        message: Any,
        timeout: float | None = None,
    ) -> Future:
        reply: Future = Future()

        with self._lock:
            if self._state != "running":
                reply.set_exception(
                    RuntimeError(f"Runtime {self.name} is not running")
                )
                return reply

            self._loop.call_soon_threadsafe(self._deliver, message, reply, timeout)

        return reply

    def shutdown(self):
        with self._lock:
            if self._state == "created":
                raise RuntimeError(f"Runtime {self.name} was never started")

            if self._state != "running":
                return

            self._state = "stopping"
            self._loop.call_soon_threadsafe(self._begin_shutdown)

    def _deliver(
        self,
        message: Any,
        reply: Future,
        timeout: float | None,
    ):
        if timeout is not None:
            self._loop.call_later(timeout, fail_reply, reply, AskTimeout(timeout))

        self._controller.tell(message, reply)

    def _begin_shutdown(self):
        self._shutdown_task = self._loop.create_task(self._shutdown())

    async def _shutdown(self):
        try:
            await self._controller.close()

        finally:
            self._loop.stop()

    def _run(self):
        asyncio.set_event_loop(self._loop)

        try:
            self._controller = Controller(self.store, name=f"{self.name}.controller")
            self._loop.run_until_complete(self._controller.start())
            self._ready.set()
            self._loop.run_forever()

        except Exception as err:
            self._startup_error = err

        finally:
            self._ready.set()
            self._close_loop()
            self._terminate()

    def _close_loop(self):
        pending = [
            task for task in asyncio.all_tasks(self._loop) if task is not self._shutdown_task
        ]

        for task in pending:
            cancel_and_release_task(task)

        if len(pending) > 0:
            self._loop.run_until_complete(
                asyncio.gather(*pending, return_exceptions=True)
            )

        self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        self._loop.run_until_complete(self._loop.shutdown_default_executor())
        self._loop.close()

    def _terminate(self):
        with self._lock:
            self._state = "terminated"
            callbacks, self._on_termination = self._on_termination, []

        for callback in callbacks:
            callback()
