"""Compliance tests for the tool registry.

Tests verify:
    - Exactly three registered tools, each taking date and region
    - Default-deny lookup for unregistered names
    - Argument validation (missing / unexpected keys)
    - call_tool returns JSON text of the form {"summary": ..., "data": ...}
    - The command-line entry point
"""

import json
import logging

import pytest

from anz_schedule.dataset import ScheduleDataset, load_dataset
from anz_schedule.exceptions import (
    InvalidDateFormatError,
    ToolArgumentError,
    UnknownRegionError,
    UnknownToolError,
)
from anz_schedule.tools import (
    SERVER_INSTRUCTIONS,
    SERVER_NAME,
    SERVER_VERSION,
    TOOL_PARAMETERS,
    TOOL_REGISTRY,
    call_tool,
    get_tool,
    main,
    run,
    server_manifest,
)


@pytest.fixture(scope="module")
def dataset() -> ScheduleDataset:
    return load_dataset()


class TestRegistry:
    """The catalogue exposes the three read-only query tools."""

    def test_tool_names(self) -> None:
        assert set(TOOL_REGISTRY) == {
            "is_public_holiday", "get_school_term", "get_next_business_day",
        }

    def test_every_tool_takes_date_and_region(self) -> None:
        for tool in TOOL_REGISTRY.values():
            assert set(tool.parameters) == {"date", "region"}
            assert tool.description

    def test_region_parameter_lists_every_code(self) -> None:
        for code in ["NZ", "VIC", "NSW", "QLD", "WA", "SA", "TAS", "NT", "ACT"]:
            assert code in TOOL_PARAMETERS["region"]

    def test_parameters_are_a_copy(self) -> None:
        tool = get_tool("is_public_holiday")
        tool.parameters.clear()
        assert set(tool.parameters) == {"date", "region"}

    def test_server_metadata(self) -> None:
        assert SERVER_NAME == "anz-schedule-brain"
        assert SERVER_VERSION == "1.0.0"

    def test_unknown_tool(self) -> None:
        with pytest.raises(UnknownToolError, match="Unknown tool 'delete_holiday'"):
            get_tool("delete_holiday")

    def test_unknown_tool_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_tool("")


class TestCallTool:
    """call_tool validates arguments and returns the handler's JSON."""

    def test_holiday_json(self, dataset: ScheduleDataset) -> None:
        text = call_tool("is_public_holiday", {"date": "2026-04-25", "region": "NSW"}, dataset)
        payload = json.loads(text)
        assert set(payload) == {"summary", "data"}
        assert payload["data"]["result"]["is_public_holiday"] is True

    def test_term_json(self, dataset: ScheduleDataset) -> None:
        payload = json.loads(
            call_tool("get_school_term", {"date": "2026-02-11", "region": "VIC"}, dataset)
        )
        assert payload["data"]["result"]["current_term"]["week_number_in_term"] == 3

    def test_next_business_day_json(self, dataset: ScheduleDataset) -> None:
        payload = json.loads(
            call_tool("get_next_business_day", {"date": "2026-04-24", "region": "NSW"}, dataset)
        )
        assert payload["data"]["next_business_day"]["date"] == "2026-04-28"

    def test_missing_argument(self, dataset: ScheduleDataset) -> None:
        with pytest.raises(ToolArgumentError, match="missing region"):
            call_tool("is_public_holiday", {"date": "2026-04-25"}, dataset)

    def test_unexpected_argument(self, dataset: ScheduleDataset) -> None:
        args = {"date": "2026-04-25", "region": "NSW", "year": 2026}
        with pytest.raises(ToolArgumentError, match="unexpected year"):
            call_tool("is_public_holiday", args, dataset)

    def test_bad_date(self, dataset: ScheduleDataset) -> None:
        with pytest.raises(InvalidDateFormatError):
            call_tool("get_school_term", {"date": "2026-4-1", "region": "VIC"}, dataset)

    def test_bad_region(self, dataset: ScheduleDataset) -> None:
        with pytest.raises(UnknownRegionError):
            call_tool("get_school_term", {"date": "2026-04-01", "region": "vic"}, dataset)

    def test_unknown_tool(self, dataset: ScheduleDataset) -> None:
        with pytest.raises(UnknownToolError):
            call_tool("get_weather", {"date": "2026-04-01", "region": "VIC"}, dataset)


class TestMain:
    """Command-line style entry point."""

    def test_runs_tool(self, dataset: ScheduleDataset) -> None:
        payload = json.loads(main(["is_public_holiday", "2026-11-03", "VIC"], dataset))
        assert payload["data"]["result"]["holiday"]["name"] == "Melbourne Cup Day"

    def test_usage_error(self, dataset: ScheduleDataset) -> None:
        with pytest.raises(ToolArgumentError, match="Usage"):
            main(["is_public_holiday", "2026-11-03"], dataset)

    def test_loads_packaged_dataset_when_none_given(self) -> None:
        payload = json.loads(main(["get_next_business_day", "2026-02-10", "SA"]))
        assert payload["data"]["next_business_day"]["date"] == "2026-02-11"


class TestServerManifest:
    """Metadata advertised to a transport."""

    def test_manifest(self) -> None:
        manifest = server_manifest()
        assert manifest["name"] == SERVER_NAME
        assert manifest["instructions"] == SERVER_INSTRUCTIONS
        assert manifest["regions"]["NSW"] == "New South Wales"
        assert len(manifest["regions"]) == 9
        assert [t["name"] for t in manifest["tools"]] == list(TOOL_REGISTRY)

    def test_list_flag(self) -> None:
        assert json.loads(main(["--list"])) == server_manifest()


class TestRun:
    """CLI wrapper: JSON on success, logged error and exit code 2 on failure."""

    def test_success_prints_json(
        self, dataset: ScheduleDataset, capsys: pytest.CaptureFixture
    ) -> None:
        assert run(["is_public_holiday", "2026-04-25", "NSW"], dataset) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["data"]["result"]["is_public_holiday"] is True

    @pytest.mark.parametrize("argv, message", [
        (["is_public_holiday"], "Usage"),
        (["is_public_holiday", "25/04/2026", "NSW"], "YYYY-MM-DD"),
        (["is_public_holiday", "2026-04-25", "AUS"], "Unknown region"),
        (["get_weather", "2026-04-25", "NSW"], "Unknown tool"),
    ])
    def test_errors_exit_2(
        self,
        dataset: ScheduleDataset,
        capsys: pytest.CaptureFixture,
        caplog: pytest.LogCaptureFixture,
        argv: list,
        message: str,
    ) -> None:
        with caplog.at_level(logging.ERROR, logger="anz_schedule.tools"):
            assert run(argv, dataset) == 2
        assert message in caplog.text
        assert capsys.readouterr().out == ""

    def test_unknown_tool_message_is_not_quoted(self) -> None:
        with pytest.raises(UnknownToolError) as excinfo:
            get_tool("get_weather")
        assert str(excinfo.value).startswith("Unknown tool 'get_weather'")
