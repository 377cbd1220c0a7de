"""Version-neutral accessors for operation parameters, bodies and responses.

Swagger 2.0 and OpenAPI 3.x describe the same concepts with different
structures:

=====================  ==================================  ==============================
Concept                OpenAPI 3.x                         Swagger 2.0
=====================  ==================================  ==============================
Parameter type         ``param["schema"]["type"]``         ``param["type"]``
Request body schema    ``requestBody.content[ct].schema``  ``in: body`` parameter schema
Response body schema   ``response.content[ct].schema``     ``response.schema``
=====================  ==================================  ==============================

The helpers here settle those differences once, so the rest of the synthesis
core never branches on the specification version.  Only ``application/json``
bodies are considered.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from specdoc.models import ParameterLocation
from specdoc.parser.resolver import resolve_schema

JSON_CONTENT_TYPE = "application/json"


def effective_parameters(
    path_item: dict[str, Any],
    operation: dict[str, Any],
    document: dict[str, Any],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    ``name`` and ``in`` values.  ``$ref`` parameters are resolved one level;
    entries that are not objects after resolution are dropped.
    """
    path_params = _resolved_params(path_item.get("parameters"), document)
    op_params = _resolved_params(operation.get("parameters"), document)

    overridden = {(p.get("name", ""), p.get("in", "")) for p in op_params}
    merged = [
        p for p in path_params
        if (p.get("name", ""), p.get("in", "")) not in overridden
    ]
    merged.extend(op_params)
    return merged


def _resolved_params(params: Any, document: dict[str, Any]) -> list[dict[str, Any]]:
    if not isinstance(params, list):
        return []
    resolved = (resolve_schema(param, document) for param in params)
    return [p for p in resolved if isinstance(p, dict) and "$ref" not in p]


def parameters_in(
    parameters: list[dict[str, Any]], location: ParameterLocation
) -> list[dict[str, Any]]:
    return [p for p in parameters if p.get("in") == location.value]


def json_request_schema(
    operation: dict[str, Any],
    parameters: list[dict[str, Any]],
    document: dict[str, Any],
) -> Optional[Any]:
    """Return the (unresolved) JSON request body schema, or ``None``.

    Looks at ``requestBody`` first (itself possibly a ``$ref`` into
    ``components/requestBodies``), then at a Swagger 2.0 ``in: body``
    parameter.
    """
    body = operation.get("requestBody")
    if body is not None:
        body = resolve_schema(body, document)
        return _json_content_schema(body)

    for param in parameters_in(parameters, ParameterLocation.BODY):
        if "schema" in param:
            return param["schema"]
    return None


def json_response_schema(response: Any, document: dict[str, Any]) -> Optional[Any]:
    """Return the (unresolved) JSON schema of one response object, or ``None``."""
    response = resolve_schema(response, document)
    if not isinstance(response, dict):
        return None
    if "content" in response:
        return _json_content_schema(response)
    return response.get("schema")


def success_response_schemas(
    operation: dict[str, Any], document: dict[str, Any]
) -> Iterator[tuple[str, Any]]:
    """Yield ``(status, schema)`` for every 2xx response carrying a JSON schema.

    Responses are visited in declaration order.
    """
    responses = operation.get("responses")
    if not isinstance(responses, dict):
        return
    for status, response in responses.items():
        if not str(status).startswith("2"):
            continue
        schema = json_response_schema(response, document)
        if schema is not None:
            yield str(status), schema


def has_response_body(operation: dict[str, Any], document: dict[str, Any]) -> bool:
    """Return ``True`` if any 2xx response has a JSON schema."""
    return next(success_response_schemas(operation, document), None) is not None


def _json_content_schema(container: Any) -> Optional[Any]:
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_CONTENT_TYPE)
    if not isinstance(media, dict):
        return None
    return media.get("schema")
