"""Output mode dispatch.

The CLI renders ServiceResult for humans (Rich), machines (``--json``),
or scripts (``--quiet``). The formatter picks the mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from rulekit.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from rulekit.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output-related flags, frozen after construction."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    *settings* takes precedence; the bare *json_output* flag is accepted
    for callers that only need the JSON switch.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
