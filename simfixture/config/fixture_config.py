from __future__ import annotations

from typing import Any, ClassVar, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from simfixture.exceptions import ConfigParseError
from simfixture.logging import LogLevelName, LogOutput

from .run_config import RunConfig
from .time_parser import TimeParser

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


class FixtureConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    results_directory: StrictStr = "gatling-results"
    results_write: StrictBool = True
    reports_directory: StrictStr = "gatling-reports"
    reports_enabled: StrictBool = True
    tiers_skip: StrictBool = False
    tiers_run: frozenset[StrictInt] = frozenset()
    simulation_timeout: StrictInt = 300
    runtime_collect_garbage: StrictBool = False
    log_level: LogLevelName = "info"
    log_output: LogOutput = "stdout"
    log_path: StrictStr | None = None

    keys: ClassVar[dict[str, str]] = {
        "results.directory": "results_directory",
        "results.write": "results_write",
        "reports.directory": "reports_directory",
        "reports.enabled": "reports_enabled",
        "tiers.skip": "tiers_skip",
        "tiers.run": "tiers_run",
        "simulation.timeout": "simulation_timeout",
        "runtime.collect_garbage": "runtime_collect_garbage",
        "log.level": "log_level",
        "log.output": "log_output",
        "log.path": "log_path",
    }

    @field_validator(
        "results_write",
        "reports_enabled",
        "tiers_skip",
        "runtime_collect_garbage",
        mode="before",
    )
    @classmethod
    def parse_flag(cls, value: Any):
        if isinstance(value, str):
            flag = value.strip().lower()
            if flag in _TRUE_VALUES:
                return True

            if flag in _FALSE_VALUES:
                return False

            raise ValueError("expected true or false")

        return value

    @field_validator("tiers_run", mode="before")
    @classmethod
    def parse_tiers(cls, value: Any):
        if isinstance(value, int) and not isinstance(value, bool):
            return frozenset([value])

        if isinstance(value, str):
            tiers = [tier.strip() for tier in value.split(",") if tier.strip()]

            try:
                return frozenset(int(tier) for tier in tiers)

            except ValueError as err:
                raise ValueError("expected comma-separated integers") from err

        return value

    @field_validator("simulation_timeout", mode="before")
    @classmethod
    def parse_timeout(cls, value: Any):
        if isinstance(value, bool):
            raise ValueError("expected a duration")

        if isinstance(value, (str, int, float)):
            seconds = TimeParser(value).seconds
            if seconds <= 0:
                raise ValueError("timeout must be positive")

            return seconds

        return value

    @field_validator("log_level", "log_output", mode="before")
    @classmethod
    def lowercase(cls, value: Any):
        if isinstance(value, str):
            return value.strip().lower()

        return value

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None = None) -> FixtureConfig:
        if mapping is None:
            mapping = {}

        values = {
            field_name: mapping[key]
            for key, field_name in cls.keys.items()
            if mapping.get(key) is not None
        }

        try:
            return cls(**values)

        except ValidationError as err:
            error = err.errors()[0]
            field_name = error["loc"][0] if error["loc"] else None
            key = next(
                (key for key, name in cls.keys.items() if name == field_name),
                str(field_name),
            )

            raise ConfigParseError(
                key,
                values.get(field_name),
                error["msg"],
            ) from err

    def run_config(self) -> RunConfig:
        return RunConfig(
            skip_tiers=self.tiers_skip,
            run_tiers=frozenset(self.tiers_run),
        )
