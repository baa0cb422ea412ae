import pytest

from simfixture.config import TimeParser


class TestTimeParser:
    @pytest.mark.parametrize(
        "value,seconds",
        [
            ("30s", 30.0),
            ("5m", 300.0),
            ("1m30s", 90.0),
            ("1h", 3600.0),
            ("2.5s", 2.5),
            ("15", 15.0),
            (10, 10.0),
            (0.25, 0.25),
        ],
    )
    def test_parses(self, value, seconds: float):
        assert TimeParser(value).time == seconds

    def test_seconds_rounds_up(self):
        assert TimeParser("2.5s").seconds == 3

    @pytest.mark.parametrize("value", ["", "soon", "5 minutes", "m5"])
    def test_invalid(self, value: str):
        with pytest.raises(ValueError):
            TimeParser(value)
