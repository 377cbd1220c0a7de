"""Resolve ``$ref`` JSON Reference pointers in OpenAPI documents, one level at a time.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition.  Unlike a
deep-copy inliner, :func:`resolve_schema` only follows the pointer it is
given: the node it returns may itself contain further ``$ref`` pointers,
which the caller resolves when (and if) it descends into them.  Following a
single pointer is bounded by the pointer's depth, so resolution always
terminates even on self-referencing schemas.

A pointer that cannot be followed is a *malformed reference*.  It is never
fatal: the original ``$ref`` node is returned unchanged and a warning is
logged, so the caller sees a schema without properties.

Only **internal** references (those starting with ``#``) can be followed.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def is_reference(node: Any) -> bool:
    """Return ``True`` if *node* is a ``{"$ref": "..."}`` object."""
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def ref_name(ref: str) -> str:
    """Return the last segment of a ``$ref`` pointer.

    Example::

        >>> ref_name("#/components/schemas/Pet")
        'Pet'
    """
    return _unescape(ref.rstrip("/").rsplit("/", 1)[-1])


def resolve_schema(node: Any, document: dict[str, Any]) -> Any:
    """Follow *node*'s ``$ref`` pointer one level, if it has one.

    Args:
        node: Any schema, parameter, request body or response node.
        document: The root specification document the pointer is relative to.

    Returns:
        The dict found at the pointer's location, or *node* itself when it is
        not a reference or the pointer cannot be followed.
    """
    if not is_reference(node):
        return node

    ref = node["$ref"]
    target = lookup_pointer(ref, document)
    if not isinstance(target, dict):
        logger.warning("Unresolvable $ref '%s'; treating it as an empty schema", ref)
        return node
    return target


def lookup_pointer(ref: str, document: dict[str, Any]) -> Any:
    """Walk a ``#/a/b/c`` pointer from the document root.

    Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for
    ``/``) and numeric list indices.

    Args:
        ref: The ``$ref`` string (e.g., ``"#/components/schemas/Pet"``).
        document: The root document to walk.

    Returns:
        The value at the pointer, or ``None`` if the pointer is external or
        any segment is missing.
    """
    if not ref.startswith("#"):
        logger.debug("External $ref '%s' is not followed", ref)
        return None

    path_str = ref[1:].lstrip("/")
    if not path_str:
        return document

    current: Any = document
    for raw_segment in path_str.split("/"):
        segment = _unescape(raw_segment)
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None

    return current


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")
