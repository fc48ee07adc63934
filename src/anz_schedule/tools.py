"""
ANZ Schedule tool registry.

The catalogue a tool-serving transport exposes: three read-only tools, each
taking a YYYY-MM-DD date and a region code and returning JSON text of the
form {"summary": ..., "data": ...}.

Transport concerns (HTTP/SSE/stdio framing, x-api-key checks) live outside
this package. The registry is default-deny: unknown tool names are rejected.

CLI:
    python -m anz_schedule.tools is_public_holiday 2026-04-25 NSW
    python -m anz_schedule.tools --list
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from anz_schedule.dataset import ScheduleDataset, load_dataset
from anz_schedule.exceptions import ScheduleError, ToolArgumentError, UnknownToolError
from anz_schedule.queries import QueryResult
from anz_schedule.queries.holiday_check import check_public_holiday
from anz_schedule.queries.next_business_day import find_next_business_day
from anz_schedule.queries.term_check import check_school_term
from anz_schedule.regions import REGION_NAMES, VALID_REGIONS

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Server metadata
# ---------------------------------------------------------------------------
SERVER_NAME = "anz-schedule-brain"
SERVER_VERSION = "1.0.0"

_REGION_LIST = ", ".join(r.value for r in VALID_REGIONS[:-1]) + f", or {VALID_REGIONS[-1].value}"

SERVER_INSTRUCTIONS = (
    "Verified ground-truth scheduling data for New Zealand and Australia. "
    "Answers questions about 2026 public holidays and school terms for "
    "New Zealand (NZ) and all Australian states and territories: "
    "Victoria (VIC), New South Wales (NSW), Queensland (QLD), "
    "Western Australia (WA), South Australia (SA), Tasmania (TAS), "
    "Northern Territory (NT), and Australian Capital Territory (ACT). "
    "Also calculates next business days."
)

TOOL_PARAMETERS: dict[str, str] = {
    "date": "ISO 8601 date string (YYYY-MM-DD)",
    "region": f"Region code: {_REGION_LIST}",
}

Handler = Callable[[ScheduleDataset, str, str], QueryResult]


@dataclass(frozen=True)
class ToolSpec:
    """One callable tool: its public name, description and handler."""
    name: str
    description: str
    handler: Handler

    @property
    def parameters(self) -> dict[str, str]:
        return dict(TOOL_PARAMETERS)


# Registry of every tool the transport may expose.
TOOL_REGISTRY: dict[str, ToolSpec] = {
    "is_public_holiday": ToolSpec(
        name="is_public_holiday",
        description=(
            "Check whether a given date is a public holiday in a specified ANZ region "
            f"({_REGION_LIST}). Returns a summary string and a structured data object "
            "with the holiday name, type (national/regional), and a full chronological "
            "list of 2026 holidays for that region."
        ),
        handler=check_public_holiday,
    ),
    "get_school_term": ToolSpec(
        name="get_school_term",
        description=(
            "Determine whether a given date falls within a school term in a specified "
            f"ANZ region ({_REGION_LIST}). Returns a summary string and a structured data "
            "object with term details, week number, school days elapsed/remaining, and "
            "the full 2026 term schedule."
        ),
        handler=check_school_term,
    ),
    "get_next_business_day": ToolSpec(
        name="get_next_business_day",
        description=(
            f"Given a date and ANZ region ({_REGION_LIST}), return the next business day "
            "(Monday to Friday, excluding public holidays). Returns a summary string and "
            "a structured data object that reports the input date's status and lists any "
            "holidays skipped during the search."
        ),
        handler=find_next_business_day,
    ),
}


def get_tool(name: str) -> ToolSpec:
    """Look up a tool by name.

    Raises:
        UnknownToolError: If the name is not registered.
    """
    tool = TOOL_REGISTRY.get(name)
    if tool is None:
        raise UnknownToolError(
            f"Unknown tool {name!r}. Registered tools: {', '.join(sorted(TOOL_REGISTRY))}."
        )
    return tool


def _validate_arguments(name: str, arguments: Mapping[str, Any]) -> tuple[str, str]:
    expected = set(TOOL_PARAMETERS)
    provided = set(arguments)
    missing = sorted(expected - provided)
    unexpected = sorted(provided - expected)
    if missing or unexpected:
        parts = []
        if missing:
            parts.append(f"missing {', '.join(missing)}")
        if unexpected:
            parts.append(f"unexpected {', '.join(unexpected)}")
        raise ToolArgumentError(f"Invalid arguments for {name}: {'; '.join(parts)}.")
    return arguments["date"], arguments["region"]


def call_tool(
    name: str,
    arguments: Mapping[str, Any],
    dataset: ScheduleDataset,
) -> str:
    """Run a registered tool and return its JSON text.

    Args:
        name: Registered tool name.
        arguments: Exactly {"date": ..., "region": ...}.
        dataset: Loaded schedule dataset.

    Raises:
        UnknownToolError: Unregistered tool name.
        ToolArgumentError: Missing or unexpected arguments.
        InvalidDateFormatError: Malformed date.
        UnknownRegionError: Unsupported region code.
    """
    tool = get_tool(name)
    date_str, region = _validate_arguments(name, arguments)
    logger.info("Tool call: %s(date=%s, region=%s)", name, date_str, region)
    return tool.handler(dataset, date_str, region).to_json()


def server_manifest() -> dict[str, Any]:
    """Metadata a transport advertises: server identity, regions and tools."""
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "instructions": SERVER_INSTRUCTIONS,
        "regions": {r.value: REGION_NAMES[r] for r in VALID_REGIONS},
        "tools": [
            {"name": t.name, "description": t.description, "parameters": t.parameters}
            for t in TOOL_REGISTRY.values()
        ],
    }


def main(argv: Optional[list[str]] = None, dataset: Optional[ScheduleDataset] = None) -> str:
    """Run one tool from command-line style arguments and return its JSON.

    ``--list`` returns the server manifest instead.
    """
    args = sys.argv[1:] if argv is None else argv
    if args == ["--list"]:
        return json.dumps(server_manifest(), indent=2, ensure_ascii=False)
    if len(args) != 3:
        raise ToolArgumentError(
            "Usage: python -m anz_schedule.tools <tool> <YYYY-MM-DD> <region> | --list. "
            f"Tools: {', '.join(sorted(TOOL_REGISTRY))}."
        )
    name, date_str, region = args
    if dataset is None:
        dataset = load_dataset()
    return call_tool(name, {"date": date_str, "region": region}, dataset)


def run(argv: Optional[list[str]] = None, dataset: Optional[ScheduleDataset] = None) -> int:
    """CLI wrapper around main(): print the JSON, or log the error and return 2."""
    try:
        output = main(argv, dataset)
    except ScheduleError as exc:
        logger.error("%s", exc)
        return 2
    print(output)
    return 0


# --- CLI ---

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    sys.exit(run())
