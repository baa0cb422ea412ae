import msgspec

from .assertion import Assertion


class AssertionResult(msgspec.Struct, frozen=True, kw_only=True):
    passed: bool
    message: str
    assertion: Assertion
    actual: float | None = None
