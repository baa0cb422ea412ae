from typing import List, Sequence

from simfixture.engine.assertions import (
    Assertion,
    AssertionResult,
    AssertionValidator,
)
from simfixture.engine.results import DataReader


class AssertionGate:
    def __init__(
        self,
        data_reader: DataReader,
        validator: AssertionValidator | None = None,
    ) -> None:
        if validator is None:
            validator = AssertionValidator()

        self._data_reader = data_reader
        self._validator = validator

    def validate(
        self,
        run_id: str,
        assertions: Sequence[Assertion],
    ) -> List[AssertionResult]:
        results = self._data_reader.open(run_id)
        return self._validator.validate(results, assertions)

    @staticmethod
    def failures(results: Sequence[AssertionResult]) -> List[AssertionResult]:
        return [result for result in results if not result.passed]
