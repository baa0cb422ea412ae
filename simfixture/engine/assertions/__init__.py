from .assertion import Assertion as Assertion
from .assertion_result import AssertionResult as AssertionResult
from .assertion_validator import AssertionValidator as AssertionValidator
from .builders import details as details, global_stats as global_stats
