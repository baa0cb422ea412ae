import pytest

SIMULATION_TESTS = """
import asyncio

import pytest

from simfixture import global_stats


def define_checkout(simulation, max_response_time):
    simulation.iterations = 2

    @simulation.step()
    async def browse(session):
        return session

    simulation.assertions(
        global_stats().failed_requests.count.is_(0),
        global_stats().response_time.max.lt(max_response_time),
    )


def test_checkout_flow(simulation):
    define_checkout(simulation, 1000)


def test_checkout_flow_tier_2(simulation):
    define_checkout(simulation, 1000)


def test_slow_checkout(simulation):
    define_checkout(simulation, 0)


def test_without_simulation():
    assert True
"""


@pytest.fixture
def simulation_tests(pytester: pytest.Pytester):
    pytester.makepyfile(test_simulations=SIMULATION_TESTS)
    return pytester


class TestPytestPlugin:
    def test_outcomes_map_to_pytest(self, simulation_tests: pytest.Pytester):
        result = simulation_tests.runpytest("--sim-skip-tiers", "-rs")

        result.assert_outcomes(passed=2, failed=1, skipped=1)
        result.stdout.fnmatch_lines(
            [
                "*1 simulation assertion(s) failed*",
                "*SKIPPED*Tier 2 skipped*",
            ],
            consecutive=False,
        )

    def test_reports_written_to_configured_directory(
        self,
        simulation_tests: pytest.Pytester,
    ):
        reports = simulation_tests.path / "html"
        result = simulation_tests.runpytest(
            "--sim-reports-directory",
            str(reports),
            "-k",
            "test_checkout_flow and not tier",
        )

        result.assert_outcomes(passed=1, deselected=3)
        assert len(list(reports.glob("test_checkout_flow-*/index.html"))) == 1
        assert len(list((simulation_tests.path / "gatling-results").iterdir())) == 1

    def test_run_tiers(self, simulation_tests: pytest.Pytester):
        result = simulation_tests.runpytest("--sim-run-tiers", "1,3", "--sim-no-reports")

        result.assert_outcomes(passed=2, failed=1, skipped=1)

    def test_no_results_file(self, simulation_tests: pytest.Pytester):
        result = simulation_tests.runpytest("--sim-no-results-file", "-k", "not slow")

        result.assert_outcomes(passed=3, deselected=1)
        assert not (simulation_tests.path / "gatling-results").exists()
        assert not (simulation_tests.path / "gatling-reports").exists()

    def test_marker_timeout(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            test_stalled="""
            import asyncio

            import pytest


            @pytest.mark.simulation(timeout="1s")
            def test_stalled(simulation):
                simulation.duration = "1m"

                @simulation.step()
                async def stall(session):
                    await asyncio.sleep(60)
            """
        )

        result = pytester.runpytest("--sim-no-reports")

        result.assert_outcomes(failed=1)
        result.stdout.fnmatch_lines(["*Reached simulation timeout of 1 seconds*"])

    def test_report_errors_become_warnings(self, simulation_tests: pytest.Pytester):
        blocked = simulation_tests.path / "blocked"
        blocked.write_text("not a directory")

        result = simulation_tests.runpytest(
            "--sim-reports-directory",
            str(blocked),
            "-k",
            "test_checkout_flow and not tier",
        )

        result.assert_outcomes(passed=1, deselected=3)
        result.stdout.fnmatch_lines(["*ReportGenerationWarning*"])

    def test_invalid_option_is_usage_error(self, simulation_tests: pytest.Pytester):
        result = simulation_tests.runpytest("--sim-timeout", "soon")

        assert result.ret == pytest.ExitCode.USAGE_ERROR
        result.stderr.fnmatch_lines(["*Invalid value 'soon' for simulation.timeout*"])

    def test_parametrized_tier_is_skipped(self, pytester: pytest.Pytester):
        pytester.makepyfile(
            test_regions="""
            import pytest


            @pytest.mark.parametrize("region", ["eu", "us"])
            def test_checkout_tier_2(simulation, region):
                simulation.iterations = 1

                @simulation.step()
                async def browse(session):
                    return region
            """
        )

        result = pytester.runpytest("--sim-skip-tiers", "--sim-no-reports")

        result.assert_outcomes(skipped=2)

    def test_log_path_writes_json_lines(self, simulation_tests: pytest.Pytester):
        log_file = simulation_tests.path / "logs" / "fixture.log.json"
        result = simulation_tests.runpytest(
            "--sim-log-path",
            str(log_file),
            "--sim-log-level",
            "info",
            "--sim-no-reports",
            "-k",
            "test_checkout_flow and not tier",
        )

        result.assert_outcomes(passed=1, deselected=3)
        assert "test_checkout_flow" in log_file.read_text()

    def test_log_output_stderr(self, simulation_tests: pytest.Pytester):
        result = simulation_tests.runpytest(
            "--sim-log-output",
            "stderr",
            "--sim-log-level",
            "info",
            "--sim-no-reports",
            "-s",
            "-k",
            "test_checkout_flow and not tier",
        )

        result.assert_outcomes(passed=1, deselected=3)
        result.stderr.fnmatch_lines(["*Running simulation test_checkout_flow*"])
        assert "Running simulation" not in result.stdout.str()
