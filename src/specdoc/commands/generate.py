"""Generate command -- write synthesized records to disk.

``specdoc generate SOURCE`` loads a specification, synthesizes its API and
model records and writes them as two JSON arrays, ``apis.json`` and
``models.json``, keyed by the camelCase column names (``sNo``,
``operationId``, ``modelName`` ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from specdoc.commands._source import config_from, reported_errors, synthesize_source
from specdoc.exceptions import SpecdocError
from specdoc.output import OutputFormat, get_output, print_json, success

APIS_FILENAME = "apis.json"
MODELS_FILENAME = "models.json"


def generate_command(
    ctx: typer.Context,
    source: str = typer.Argument(
        help="Specification file path, URL, or '-' for stdin."
    ),
    output_dir: Path = typer.Option(
        Path("documents"), "--output-dir", "-o", help="Directory for the JSON files."
    ),
) -> None:
    """Synthesize documentation records and write them as JSON files.

    Example::

        specdoc generate openapi.yaml
        specdoc generate https://petstore.swagger.io/v2/swagger.json -o docs
    """
    config = config_from(ctx)

    with reported_errors():
        apis, models = synthesize_source(source, config.heuristics)
        apis_path = output_dir / APIS_FILENAME
        models_path = output_dir / MODELS_FILENAME
        _write_records(apis_path, [api.to_record() for api in apis])
        _write_records(models_path, [model.to_record() for model in models])

    if get_output().format == OutputFormat.JSON:
        print_json({
            "apis": len(apis),
            "models": len(models),
            "apisFile": str(apis_path),
            "modelsFile": str(models_path),
        })
    success(f"Wrote {len(apis)} API records to {apis_path}")
    success(f"Wrote {len(models)} model records to {models_path}")


def _write_records(path: Path, records: list[dict[str, Any]]) -> None:
    from specdoc.config import write_atomic

    try:
        write_atomic(path, json.dumps(records, indent=2, ensure_ascii=False) + "\n")
    except OSError as exc:
        raise SpecdocError(f"Cannot write {path}: {exc}") from exc
