import asyncio
import time
from concurrent.futures import Future
from typing import Any, Dict

from simfixture.engine.results import ResultsStore
from simfixture.logging import Logger
from simfixture.logging.simfixture_logging_models import RuntimeDebug, RuntimeFatal

from .cancel_and_release_task import cancel_and_release_task
from .messages import AwaitRun, Failure, Run, Success, send_reply
from .simulation_runner import SimulationRunner


class Controller:
    """Mailbox-driven controller living on the runtime loop.

    Messages are processed one at a time in arrival order. ``Run`` replies
    as soon as the simulation has started executing, ``AwaitRun`` replies
    once the run task finishes.
    """

    def __init__(
        self,
        store: ResultsStore,
        name: str = "controller",
    ) -> None:
        self.name = name
        self._store = store
        self._logger = Logger()
        self._runs: Dict[str, asyncio.Task] = {}
        self._mailbox: asyncio.Queue[tuple[Any, Future]] | None = None
        self._receiver: asyncio.Task | None = None
        self._models = {
            "debug": (RuntimeDebug, {"runtime": name}),
            "fatal": (RuntimeFatal, {"runtime": name}),
        }

    @property
    def active_runs(self):
        return [run_id for run_id, task in self._runs.items() if not task.done()]

    async def start(self):
        self._mailbox = asyncio.Queue()
        self._receiver = asyncio.create_task(self._receive())

    def tell(self, message: Any, reply: Future):
        self._mailbox.put_nowait((message, reply))

    async def _receive(self):
        while True:
            message, reply = await self._mailbox.get()

            try:
                await self._handle(message, reply)

            except Exception as err:
                async with self._logger.context(
                    name="controller",
                    models=self._models,
                ) as ctx:
                    await ctx.log_prepared(
                        f"Controller failed handling {type(message).__name__} - {str(err)}",
                        name="fatal",
                    )

                send_reply(reply, Failure(err))

    async def _handle(self, message: Any, reply: Future):
        match message:
            case Run():
                await self._start_run(message, reply)

            case AwaitRun(run_id=run_id):
                self._await_run(run_id, reply)

            case _:
                send_reply(
                    reply,
                    Failure(TypeError(f"Unsupported message {message!r}")),
                )

    async def _start_run(self, message: Run, reply: Future):
        run_id = self._next_run_id(message.simulation_id)
        runner = SimulationRunner(
            run_id,
            message,
            self._store,
            self._logger,
        )

        try:
            await runner.prepare()

        except (OSError, KeyError) as err:
            send_reply(reply, Failure(err))
            return

        self._runs[run_id] = asyncio.create_task(runner.run())

        async with self._logger.context(
            name="controller",
            models=self._models,
        ) as ctx:
            await ctx.log_prepared(
                f"Started run {run_id} for simulation {message.simulation_id}",
                name="debug",
            )

        send_reply(reply, Success(run_id))

    def _await_run(self, run_id: str, reply: Future):
        task = self._runs.get(run_id)

        if task is None:
            send_reply(reply, Failure(KeyError(f"Unknown run {run_id}")))
            return

        def complete(finished: asyncio.Task):
            if finished.cancelled():
                send_reply(
                    reply,
                    Failure(RuntimeError(f"Run {run_id} was cancelled")),
                )

            elif (error := finished.exception()) is not None:
                send_reply(reply, Failure(error))

            else:
                send_reply(reply, Success(run_id))

        task.add_done_callback(complete)

    def _next_run_id(self, simulation_id: str) -> str:
        run_id = f"{simulation_id}-{int(time.time() * 1000)}"

        suffix = 1
        candidate = run_id
        while candidate in self._runs:
            candidate = f"{run_id}-{suffix}"
            suffix += 1

        return candidate

    async def close(self):
        tasks = list(self._runs.values())
        if self._receiver is not None:
            tasks.append(self._receiver)

        for task in tasks:
            cancel_and_release_task(task)

        if len(tasks) > 0:
            await asyncio.gather(*tasks, return_exceptions=True)

        await self._logger.close()
