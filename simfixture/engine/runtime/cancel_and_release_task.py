import asyncio


def _retrieve_task_exception(task: asyncio.Task) -> None:
    try:
        task.exception()
    except (asyncio.CancelledError, asyncio.InvalidStateError, Exception):
        pass


def cancel_and_release_task(pend: asyncio.Task) -> None:
    """
    Cancel a task and make sure its exception is always retrieved, so a
    runtime shutting down never leaves "exception was never retrieved"
    warnings or task references behind.

    Args:
        pend: The asyncio.Task to cancel
    """
    if pend.done():
        _retrieve_task_exception(pend)
        return

    pend.add_done_callback(_retrieve_task_exception)
    pend.cancel()
