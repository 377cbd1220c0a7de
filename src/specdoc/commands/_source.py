"""Helpers shared by the sub-commands: error reporting and the two record sources.

Records come either from a specification run through the synthesis pipeline
(:func:`synthesize_source`) or from JSON files previously written by
``specdoc generate`` (:func:`load_records`).
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from pydantic import ValidationError

from specdoc.exceptions import SpecdocError, SpecParseError
from specdoc.models import (
    ApiDocumentation,
    GlobalConfig,
    HeuristicsPolicy,
    ModelDocumentation,
    SynthesisResult,
)
from specdoc.output import debug, error


@contextmanager
def reported_errors() -> Iterator[None]:
    """Print any :class:`SpecdocError` raised in the block and exit with its code."""
    try:
        yield
    except SpecdocError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def config_from(ctx: typer.Context) -> GlobalConfig:
    """Return the configuration resolved by the root callback."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config: Optional[GlobalConfig] = obj.get("config")
    return config if config is not None else GlobalConfig()


def synthesize_source(source: str, policy: HeuristicsPolicy) -> SynthesisResult:
    """Load *source*, check its version and synthesize its records.

    Raises:
        SpecParseError: If the document cannot be loaded or is not a
            Swagger 2.0 / OpenAPI 3.x specification.
    """
    from specdoc.parser import load_spec, validate_spec_version
    from specdoc.synthesis import synthesize

    document = load_spec(source)
    version = validate_spec_version(document)
    debug(f"Loaded specification version {version} from {source}")
    return synthesize(document, policy)


def load_records(apis_path: Path, models_path: Path) -> SynthesisResult:
    """Read ``apis.json`` and ``models.json`` files written by ``specdoc generate``.

    The files may have been edited by hand since they were generated; they
    are validated against the record models again.

    Raises:
        SpecParseError: If a file cannot be read, is not a JSON array, or
            holds a record that fails validation.
    """
    apis_data = _read_record_file(apis_path, "API")
    models_data = _read_record_file(models_path, "model")
    try:
        apis = [ApiDocumentation.model_validate(item) for item in apis_data]
    except ValidationError as exc:
        raise SpecParseError(f"Invalid API record in {apis_path}: {exc}") from exc
    try:
        models = [ModelDocumentation.model_validate(item) for item in models_data]
    except ValidationError as exc:
        raise SpecParseError(f"Invalid model record in {models_path}: {exc}") from exc
    return SynthesisResult(apis, models)


def _read_record_file(path: Path, kind: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SpecParseError(f"Cannot read {kind} records from {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SpecParseError(f"Invalid JSON in {kind} record file {path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise SpecParseError(f"Expected a JSON array of {kind} records in {path}")
    return data
