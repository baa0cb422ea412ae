"""pytest integration.

Any test requesting the ``simulation`` fixture is run through
:class:`SimulationFixture`: the test body configures the simulation, the
plugin then executes it, checks its assertions and maps the outcome to a
pass, ``pytest.fail`` or ``pytest.skip``.
"""

import warnings

import pytest

from simfixture.config import FixtureConfig
from simfixture.engine.simulation import Simulation
from simfixture.exceptions import ConfigParseError
from simfixture.fixture import SimulationFixture, normalize_name
from simfixture.logging import LoggingConfig

fixture_config_key = pytest.StashKey[FixtureConfig]()


class ReportGenerationWarning(UserWarning):
    pass


def pytest_addoption(parser: pytest.Parser):
    group = parser.getgroup("simfixture", "load simulations")
    group.addoption(
        "--sim-results-directory",
        dest="sim_results_directory",
        default=None,
        help="Directory simulation results are written to (default: gatling-results)",
    )
    group.addoption(
        "--sim-no-results-file",
        dest="sim_results_write",
        action="store_const",
        const="false",
        default=None,
        help="Keep simulation results in memory. Also disables reports.",
    )
    group.addoption(
        "--sim-reports-directory",
        dest="sim_reports_directory",
        default=None,
        help="Directory HTML reports are written to (default: gatling-reports)",
    )
    group.addoption(
        "--sim-no-reports",
        dest="sim_reports_enabled",
        action="store_const",
        const="false",
        default=None,
        help="Skip HTML report generation.",
    )
    group.addoption(
        "--sim-skip-tiers",
        dest="sim_tiers_skip",
        action="store_const",
        const="true",
        default=None,
        help="Skip every simulation with a tier above 0.",
    )
    group.addoption(
        "--sim-run-tiers",
        dest="sim_tiers_run",
        default=None,
        help="Comma-separated tiers to run, e.g. 0,2. Runs all tiers when omitted.",
    )
    group.addoption(
        "--sim-timeout",
        dest="sim_simulation_timeout",
        default=None,
        help="Default simulation timeout, e.g. 30s or 5m (default: 5m)",
    )
    group.addoption(
        "--sim-collect-garbage",
        dest="sim_runtime_collect_garbage",
        action="store_const",
        const="true",
        default=None,
        help="Force garbage collection before each runtime start.",
    )
    group.addoption(
        "--sim-log-level",
        dest="sim_log_level",
        default=None,
        help="Log level: trace, debug, info, warn, error, critical or fatal.",
    )
    group.addoption(
        "--sim-log-output",
        dest="sim_log_output",
        default=None,
        help="Log stream: stdout or stderr.",
    )
    group.addoption(
        "--sim-log-path",
        dest="sim_log_path",
        default=None,
        help="Write fixture logs as JSON lines to this file, or to simfixture.log.json in this directory.",
    )


def pytest_configure(config: pytest.Config):
    config.addinivalue_line(
        "markers",
        "simulation(timeout=None): per-test simulation timeout, e.g. timeout='30s'",
    )

    mapping = {
        key: config.getoption(f"sim_{field_name}")
        for key, field_name in FixtureConfig.keys.items()
    }

    try:
        fixture_config = FixtureConfig.from_mapping(mapping)

    except ConfigParseError as err:
        raise pytest.UsageError(str(err)) from err

    config.stash[fixture_config_key] = fixture_config

    LoggingConfig().update(
        log_level=fixture_config.log_level,
        log_output=fixture_config.log_output,
    )


@pytest.fixture
def simulation(request: pytest.FixtureRequest) -> Simulation:
    return Simulation(normalize_name(request.node.name))


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function):
    if "simulation" not in pyfuncitem.fixturenames:
        return None

    funcargs = {
        arg: pyfuncitem.funcargs[arg] for arg in pyfuncitem._fixtureinfo.argnames
    }

    timeout = None
    if (marker := pyfuncitem.get_closest_marker("simulation")) is not None:
        timeout = marker.kwargs.get("timeout")

    fixture = SimulationFixture(pyfuncitem.config.stash[fixture_config_key])
    # parametrize ids would hide a trailing tier marker
    outcome = fixture.run(
        pyfuncitem.originalname,
        lambda _: pyfuncitem.obj(**funcargs),
        payload=pyfuncitem.funcargs["simulation"],
        timeout=timeout,
    )

    if outcome.report_error is not None:
        warnings.warn(ReportGenerationWarning(outcome.report_error))

    if outcome.is_canceled:
        pytest.skip(outcome.message)

    if outcome.is_failed:
        pytest.fail(outcome.message, pytrace=False)

    return True
