"""Analyze command -- report completeness and consistency defects.

``specdoc analyze SOURCE`` synthesizes the records of a specification and
runs :func:`~specdoc.analysis.analyze_documentation` over them.
``specdoc analyze --apis apis.json --models models.json`` analyzes record
files written by ``specdoc generate`` instead, including any hand edits
made to them since.

With ``--strict`` any reported issue makes the command exit with
:data:`~specdoc.exit_codes.EXIT_DOCUMENTATION_DEFECTS`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specdoc.analysis import analyze_documentation, recommendations
from specdoc.commands._source import (
    config_from,
    load_records,
    reported_errors,
    synthesize_source,
)
from specdoc.exceptions import DocumentationDefectError, InvalidUsageError
from specdoc.models import SynthesisResult
from specdoc.output import OutputFormat, get_output, info, success


def analyze_command(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(
        None, help="Specification file path, URL, or '-' for stdin."
    ),
    apis_file: Optional[Path] = typer.Option(
        None, "--apis", help="API records file written by 'specdoc generate'."
    ),
    models_file: Optional[Path] = typer.Option(
        None, "--models", help="Model records file written by 'specdoc generate'."
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 8 when any issue is found."
    ),
) -> None:
    """Check the synthesized documentation for missing and inconsistent data.

    Example::

        specdoc analyze openapi.yaml
        specdoc analyze openapi.yaml --strict
        specdoc analyze --apis documents/apis.json --models documents/models.json
    """
    with reported_errors():
        apis, models = _records(ctx, source, apis_file, models_file)
        analysis = analyze_documentation(apis, models)
        advice = recommendations(analysis)

        output = get_output()
        if output.format == OutputFormat.JSON:
            report = analysis.model_dump(mode="json")
            report["recommendations"] = advice
            output.print_json(report)
        else:
            output.print_table(
                ["Metric", "Value"],
                [
                    ["APIs", str(analysis.api_count)],
                    ["Models", str(analysis.model_count)],
                    ["Tags", str(analysis.tag_count)],
                    ["Coverage", f"{analysis.coverage:.1f}%"],
                    ["Issues", str(len(analysis.issues))],
                ],
                title="Documentation analysis",
            )
            if analysis.issues:
                output.print_table(
                    ["#", "Issue"],
                    [[str(n), issue] for n, issue in enumerate(analysis.issues, start=1)],
                    title="Issues",
                )
            for line in advice:
                info(f"Recommendation: {line}")

        if strict and analysis.issues:
            raise DocumentationDefectError(
                f"{len(analysis.issues)} documentation issue(s) found", analysis.issues
            )

    if not analysis.issues:
        success("No documentation issues found")


def _records(
    ctx: typer.Context,
    source: Optional[str],
    apis_file: Optional[Path],
    models_file: Optional[Path],
) -> SynthesisResult:
    """Pick the record source: a specification or a pair of record files."""
    if source is not None:
        if apis_file is not None or models_file is not None:
            raise InvalidUsageError("Give either SOURCE or --apis/--models, not both")
        return synthesize_source(source, config_from(ctx).heuristics)
    if apis_file is None or models_file is None:
        raise InvalidUsageError("Give a SOURCE specification, or both --apis and --models")
    return load_records(apis_file, models_file)
