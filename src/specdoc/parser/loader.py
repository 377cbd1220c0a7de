"""Load OpenAPI and Swagger documents from a URL, local file, or stdin.

This module is the I/O collaborator of the synthesis core: it turns a source
string into an in-memory document dict before :func:`~specdoc.synthesis.synthesize`
runs.  Both JSON and YAML are supported with automatic format detection.

The two public functions are:

* :func:`load_spec` -- Load and parse a document from any supported source.
* :func:`validate_spec_version` -- Check that the document is Swagger 2.0 or
  OpenAPI 3.x and return its version string.

No meta-schema validation happens here; a document only has to look like a
specification (a version marker and a ``paths`` table).
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from specdoc.exceptions import SpecParseError

logger = logging.getLogger(__name__)


def load_spec(source: str) -> dict[str, Any]:
    """Load a specification from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    logger.debug("Loading specification from %s", source)
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP(S), using the content type as a format hint.

    Raises:
        SpecParseError: On HTTP error statuses, network failures, or
            unparseable content.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Read a local ``.json``/``.yaml``/``.yml`` file.

    Unknown extensions fall back to content-based detection.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format, or
            does not decode to a mapping.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SpecParseError(msg)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return result


def validate_spec_version(spec: dict[str, Any]) -> str:
    """Validate and return the specification version string.

    Accepts Swagger ``2.0`` and any OpenAPI ``3.x`` version, and requires a
    ``paths`` mapping (which may be empty).

    Args:
        spec: The parsed document dictionary.

    Returns:
        The version string (e.g., ``'2.0'``, ``'3.0.3'``, ``'3.1.0'``).

    Raises:
        SpecParseError: If the version is missing or unsupported, or the
            ``paths`` table is missing.
    """
    if "swagger" in spec:
        version_str = str(spec["swagger"])
        if version_str != "2.0":
            raise SpecParseError(
                f"Swagger {version_str} is not supported. "
                "Only Swagger 2.0 and OpenAPI 3.x are supported."
            )
    else:
        openapi_version = spec.get("openapi")
        if openapi_version is None:
            raise SpecParseError(
                "Missing 'openapi' or 'swagger' field. "
                "Is this an OpenAPI/Swagger document?"
            )
        version_str = str(openapi_version)
        if not version_str.startswith("3."):
            raise SpecParseError(
                f"Unsupported OpenAPI version: {version_str}. "
                "Only Swagger 2.0 and OpenAPI 3.x are supported."
            )

    if not isinstance(spec.get("paths"), dict):
        raise SpecParseError("Specification has no 'paths' object")

    logger.debug("Detected specification version %s", version_str)
    return version_str
