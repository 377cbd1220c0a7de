"""Inspect commands -- print synthesized records without writing files.

Provides the ``specdoc inspect`` sub-command group:

* ``specdoc inspect apis SOURCE`` -- one row per operation.
* ``specdoc inspect models SOURCE`` -- one row per model.

In JSON mode the full alias-keyed records are printed instead of the
summary table.
"""

from __future__ import annotations

import typer

from specdoc.commands._source import config_from, reported_errors, synthesize_source
from specdoc.output import OutputFormat, get_output, info

inspect_app = typer.Typer(no_args_is_help=True)


@inspect_app.command("apis")
def inspect_apis(
    ctx: typer.Context,
    source: str = typer.Argument(help="Specification file path, URL, or '-' for stdin."),
) -> None:
    """List the API records of a specification.

    Example::

        specdoc inspect apis openapi.yaml
        specdoc --json inspect apis openapi.yaml
    """
    with reported_errors():
        apis, _ = synthesize_source(source, config_from(ctx).heuristics)

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json([api.to_record() for api in apis])
        return
    if not apis:
        info("No operations defined in this spec.")
        return

    headers = ["#", "Method", "Endpoint", "Operation ID", "Tag", "Paginated", "Auth"]
    rows = [
        [
            str(api.s_no),
            api.method.value,
            api.endpoint,
            api.operation_id,
            api.tag,
            "Yes" if api.is_paginated else "",
            "Yes" if api.requires_auth else "",
        ]
        for api in apis
    ]
    output.print_table(headers, rows, title=f"APIs ({len(rows)})")


@inspect_app.command("models")
def inspect_models(
    ctx: typer.Context,
    source: str = typer.Argument(help="Specification file path, URL, or '-' for stdin."),
) -> None:
    """List the model records of a specification.

    Shows each model with up to five of its property names and the
    operations that use it.

    Example::

        specdoc inspect models openapi.yaml
    """
    with reported_errors():
        _, models = synthesize_source(source, config_from(ctx).heuristics)

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json([model.to_record() for model in models])
        return
    if not models:
        info("No models found in this spec.")
        return

    headers = ["#", "Model", "Properties", "Used In"]
    rows: list[list[str]] = []
    for model in models:
        names = list(model.property_map())
        props = ", ".join(names[:5])
        if len(names) > 5:
            props += "..."
        rows.append([str(model.s_no), model.model_name, props, ", ".join(model.operation_ids())])

    output.print_table(headers, rows, title=f"Models ({len(rows)})")
