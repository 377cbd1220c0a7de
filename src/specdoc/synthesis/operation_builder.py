"""Build one :class:`~specdoc.models.ApiDocumentation` record per operation."""

from __future__ import annotations

import re
from typing import Any, Optional

from specdoc.models import (
    ApiDocumentation,
    HeuristicsPolicy,
    HTTPMethod,
    ParameterLocation,
)
from specdoc.synthesis.heuristics import (
    DEFAULT_POLICY,
    business_purpose,
    detect_authentication,
    detect_pagination,
)
from specdoc.synthesis.model_extractor import (
    query_params_model_name,
    request_body_model_name,
    response_body_model_name,
    to_json,
)
from specdoc.synthesis.naming import generate_operation_id
from specdoc.synthesis.shapes import (
    has_response_body,
    json_request_schema,
    parameters_in,
)
from specdoc.synthesis.type_mapper import parameter_type

_PATH_SEGMENT_RE = re.compile(r"\{([^}]+)\}")

DEFAULT_TAG = "default"


def operation_id_for(method: HTTPMethod, path: str, operation: dict[str, Any]) -> str:
    """Return the declared operationId, or synthesize one from method and path."""
    declared = operation.get("operationId")
    if isinstance(declared, str) and declared:
        return declared
    return generate_operation_id(method.value, path)


def tag_for(operation: dict[str, Any]) -> str:
    tags = operation.get("tags")
    if isinstance(tags, list) and tags and tags[0]:
        return str(tags[0])
    return DEFAULT_TAG


def path_parameters(
    path: str,
    parameters: list[dict[str, Any]],
    document: dict[str, Any],
) -> Optional[dict[str, Any]]:
    """Describe every ``{name}`` segment of *path*, in order of appearance.

    Segments without a matching declared path parameter are documented as
    required strings.  Path parameters are always required.

    Returns:
        A dict keyed by parameter name, or ``None`` if *path* has no
        parameter segments.
    """
    names = _PATH_SEGMENT_RE.findall(path)
    if not names:
        return None

    declared = {
        p.get("name"): p for p in parameters_in(parameters, ParameterLocation.PATH)
    }
    result: dict[str, Any] = {}
    for name in names:
        param = declared.get(name)
        if param is None:
            result[name] = {"type": "string", "required": True}
            continue
        entry: dict[str, Any] = {
            "type": parameter_type(param, document).value,
            "required": True,
        }
        if param.get("description") is not None:
            entry["description"] = param["description"]
        result[name] = entry
    return result


def build_operation(
    s_no: int,
    path: str,
    method: HTTPMethod,
    operation: dict[str, Any],
    parameters: list[dict[str, Any]],
    document: dict[str, Any],
    policy: HeuristicsPolicy = DEFAULT_POLICY,
) -> ApiDocumentation:
    """Build the documentation record of one path + method pair.

    Model references are set exactly when the model extractor emits the
    matching model for this operation, so they always name a real model
    (possibly an earlier one sharing the same name).

    Args:
        s_no: 1-based sequence number of the operation.
        path: The path template (e.g. ``/users/{id}``).
        method: The HTTP method.
        operation: The raw operation object.
        parameters: The operation's effective (merged, resolved) parameters.
        document: The root specification document.
        policy: Heuristics used for pagination detection.
    """
    operation_id = operation_id_for(method, path, operation)
    tag = tag_for(operation)
    path_params = path_parameters(path, parameters, document)

    has_query = bool(parameters_in(parameters, ParameterLocation.QUERY))
    has_body = json_request_schema(operation, parameters, document) is not None

    return ApiDocumentation(
        s_no=s_no,
        endpoint=path,
        method=method,
        tag=tag,
        operation_id=operation_id,
        summary=operation.get("summary") or f"{method.value} {path}",
        path_params=to_json(path_params) if path_params else None,
        query_params_ref=query_params_model_name(operation_id) if has_query else None,
        request_body_ref=request_body_model_name(operation_id) if has_body else None,
        response_body_ref=(
            response_body_model_name(operation_id)
            if has_response_body(operation, document)
            else None
        ),
        is_paginated=detect_pagination(operation, parameters, document, policy),
        requires_auth=detect_authentication(operation),
        business_purpose=business_purpose(operation, tag, method.value),
    )
