"""Best-effort semantic inference over declared operation content.

Each function is a pure function of its arguments.  Keyword lists come from a
:class:`~specdoc.models.HeuristicsPolicy`, which defaults to the built-in
lists and can be overridden from configuration.

* **Pagination** -- an operation is paginated when one of its parameters is
  named like a page cursor (``page``, ``limit``, ...) or one of its 2xx JSON
  responses is a page envelope (``totalCount``, ``hasNext``, ...).
* **Record schema** -- the element schema of a page envelope's first array
  field among ``data``, ``records``, ``items``, ``results``.
* **Authentication** -- a non-empty operation-level ``security`` list.
* **Business purpose** -- a human-readable sentence for each operation.
"""

from __future__ import annotations

from typing import Any, Optional

from specdoc.models import HeuristicsPolicy
from specdoc.parser.resolver import resolve_schema
from specdoc.synthesis.shapes import success_response_schemas
from specdoc.synthesis.type_mapper import primary_type

DEFAULT_POLICY = HeuristicsPolicy()

_ACTIONS: dict[str, str] = {
    "GET": "Retrieve",
    "POST": "Create",
    "PUT": "Update",
    "PATCH": "Modify",
    "DELETE": "Remove",
}


def _lowered(names: list[str]) -> frozenset[str]:
    return frozenset(name.lower() for name in names)


def is_paginated_schema(
    schema: Any,
    document: dict[str, Any],
    policy: HeuristicsPolicy = DEFAULT_POLICY,
) -> bool:
    """Return ``True`` if *schema*'s top-level properties look like a page envelope."""
    resolved = resolve_schema(schema, document)
    if not isinstance(resolved, dict):
        return False
    properties = resolved.get("properties")
    if not isinstance(properties, dict) or not properties:
        return False
    markers = _lowered(policy.pagination_fields)
    return any(str(name).lower() in markers for name in properties)


def has_pagination_params(
    parameters: list[dict[str, Any]],
    policy: HeuristicsPolicy = DEFAULT_POLICY,
) -> bool:
    names = _lowered(policy.pagination_params)
    return any(str(p.get("name", "")).lower() in names for p in parameters)


def detect_pagination(
    operation: dict[str, Any],
    parameters: list[dict[str, Any]],
    document: dict[str, Any],
    policy: HeuristicsPolicy = DEFAULT_POLICY,
) -> bool:
    """Decide whether an operation returns paginated results.

    Args:
        operation: The raw operation object.
        parameters: The operation's effective (merged, resolved) parameters.
        document: The root specification document.
        policy: Keyword lists to match against.
    """
    if has_pagination_params(parameters, policy):
        return True
    return any(
        is_paginated_schema(schema, document, policy)
        for _, schema in success_response_schemas(operation, document)
    )


def extract_record_schema(
    schema: Any,
    document: dict[str, Any],
    policy: HeuristicsPolicy = DEFAULT_POLICY,
) -> Optional[dict[str, Any]]:
    """Return the resolved element schema of a page envelope, or ``None``.

    Fields are tried in ``policy.record_fields`` order; the first one that is
    an array with ``items`` wins.  Field names match exactly.
    """
    resolved = resolve_schema(schema, document)
    if not isinstance(resolved, dict):
        return None
    properties = resolved.get("properties")
    if not isinstance(properties, dict):
        return None

    for field in policy.record_fields:
        candidate = resolve_schema(properties.get(field), document)
        if not isinstance(candidate, dict):
            continue
        if primary_type(candidate.get("type")) == "array" and candidate.get("items") is not None:
            items = resolve_schema(candidate["items"], document)
            return items if isinstance(items, dict) else None
    return None


def detect_authentication(operation: dict[str, Any]) -> bool:
    security = operation.get("security")
    return isinstance(security, list) and len(security) > 0


def action_for_method(method: str) -> str:
    return _ACTIONS.get(method.upper(), "Process")


def business_purpose(operation: dict[str, Any], tag: str, method: str) -> str:
    """Describe what an operation is for.

    Uses the operation's ``description`` when present, then its ``summary``,
    and finally a sentence built from the HTTP method and the singularised
    tag (one trailing ``s`` removed).

    Example::

        >>> business_purpose({}, "users", "DELETE")
        'Remove user data for users management functionality'
    """
    description = operation.get("description")
    if description:
        return description

    summary = operation.get("summary")
    if summary:
        return f"{summary} - Used for {tag} management in the application"

    entity = tag[:-1] if tag.endswith("s") else tag
    return f"{action_for_method(method)} {entity} data for {tag} management functionality"
