import json
import pathlib

import pytest

from simfixture.logging import Entry, Logger, LoggerStream, LoggingConfig, LogLevel
from simfixture.logging.simfixture_logging_models import FixtureDebug, FixtureInfo


@pytest.fixture
def info_level():
    LoggingConfig().update(log_level="info")


class TestLoggerStreamConsole:
    @pytest.mark.asyncio
    async def test_log_prepared_writes_template(self, info_level, capsys):
        stream = LoggerStream(
            name="test_console",
            template="{level} - {message}",
        )

        await stream.log_prepared("Starting test checkout_flow", name="default")

        assert capsys.readouterr().out == "INFO - Starting test checkout_flow\n"

    @pytest.mark.asyncio
    async def test_entries_below_level_are_dropped(self, info_level, capsys):
        stream = LoggerStream(
            name="test_console",
            models={
                "debug": (
                    FixtureDebug,
                    {"test": "checkout_flow", "runner_type": "test", "timeout": 5},
                )
            },
        )

        await stream.log_prepared("hidden", name="debug")

        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_disabled_logger(self, info_level, capsys):
        config = LoggingConfig()
        config.disable("test_disabled")

        try:
            await LoggerStream(
                name="test_disabled",
                models={"error": (Entry, {"level": LogLevel.ERROR})},
            ).log_prepared("hidden", name="error")

        finally:
            config.enable("test_disabled")

        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_stderr_output(self, info_level, capsys):
        config = LoggingConfig()
        config.update(log_output="stderr")

        try:
            await LoggerStream(name="test_stderr", template="{message}").log_prepared(
                "to stderr"
            )

        finally:
            config.update(log_output="stdout")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "to stderr\n"


class TestLoggerFile:
    @pytest.mark.asyncio
    async def test_configured_path_writes_json_lines(self, info_level, tmp_path):
        logger = Logger()
        path = pathlib.Path(tmp_path, "fixture.log.json")
        logger.configure(
            name="test_file",
            path=str(path),
            models={
                "info": (
                    FixtureInfo,
                    {"test": "checkout_flow", "runner_type": "test", "timeout": 5},
                )
            },
        )

        async with logger.context(name="test_file") as ctx:
            await ctx.log_prepared_batch(
                {"info": ["first", "second"]},
            )

        await logger.close()

        lines = [json.loads(line) for line in path.read_text().splitlines()]
        assert [line["entry"]["message"] for line in lines] == ["first", "second"]
        assert lines[0]["entry"]["test"] == "checkout_flow"
        assert lines[0]["entry"]["level"] == "INFO"

    @pytest.mark.asyncio
    async def test_directory_path_uses_default_logfile(self, info_level, tmp_path):
        logger = Logger()
        logger.configure(name="test_directory", path=str(tmp_path))

        async with logger.context(name="test_directory") as ctx:
            await ctx.log_prepared("Starting test checkout_flow", name="default")

        await logger.close()

        lines = pathlib.Path(tmp_path, "simfixture.log.json").read_text().splitlines()
        assert json.loads(lines[0])["entry"]["message"] == "Starting test checkout_flow"
