"""Flatten OpenAPI schemas into property maps.

:func:`extract_properties` turns a (possibly ``$ref``) schema into an
:class:`ExtractedSchema`: a name -> :class:`~specdoc.models.Property` map
plus the list of required names.  Every node is resolved one level with
:func:`~specdoc.parser.resolver.resolve_schema` just before it is inspected,
so the walk only follows the references it actually reaches.

Composition handling:

* ``allOf`` entries are resolved, extracted recursively and merged into the
  result.  Later entries overwrite earlier properties of the same name and
  required names are unioned.
* ``oneOf`` and ``anyOf`` are not flattened; their variants do not appear in
  the output.

Schemas that reference themselves (``Node.children: array<Node>``) are
expanded once.  The walk carries the set of schema objects currently being
expanded on its call stack; reaching one of them again yields a cycle marker
property (``{"type": "object", "ref": "#/components/schemas/Node"}``) instead
of recursing forever.  Siblings do not share that set, so a schema used by
two unrelated properties is expanded for each of them.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from specdoc.models import Property, PropertyType
from specdoc.parser.resolver import is_reference, ref_name, resolve_schema
from specdoc.synthesis.type_mapper import map_type, primary_type

logger = logging.getLogger(__name__)

_Stack = frozenset[int]


class ExtractedSchema(NamedTuple):
    """Flattened view of a schema: its properties and required names."""

    properties: dict[str, Property]
    required: list[str]

    def properties_dict(self) -> dict[str, Any]:
        """Properties serialised to plain dicts, in declaration order."""
        return {name: prop.to_dict() for name, prop in self.properties.items()}


def extract_properties(schema: Any, document: dict[str, Any]) -> ExtractedSchema:
    """Flatten *schema* into an :class:`ExtractedSchema`.

    Args:
        schema: A schema object or ``$ref`` to one.  Unresolvable references
            and non-dict values produce an empty result.
        document: The root specification document.

    Returns:
        The merged properties and the deduplicated required names (first-seen
        order).
    """
    return _extract(schema, document, frozenset())


def to_property(schema: Any, document: dict[str, Any]) -> Property:
    """Convert a single property schema into a :class:`~specdoc.models.Property`."""
    return _to_property(schema, document, frozenset())


def _extract(schema: Any, document: dict[str, Any], stack: _Stack) -> ExtractedSchema:
    resolved = resolve_schema(schema, document)
    if not isinstance(resolved, dict):
        return ExtractedSchema({}, [])

    stack = stack | {id(resolved)}
    properties: dict[str, Property] = {}
    required: list[str] = []

    declared = resolved.get("properties")
    if isinstance(declared, dict):
        for name, prop_schema in declared.items():
            properties[name] = _to_property(prop_schema, document, stack)

    own_required = resolved.get("required")
    if isinstance(own_required, list):
        required.extend(name for name in own_required if isinstance(name, str))

    for entry in resolved.get("allOf") or []:
        entry_resolved = resolve_schema(entry, document)
        if isinstance(entry_resolved, dict) and id(entry_resolved) in stack:
            logger.debug("Skipping cyclic allOf entry %s", entry.get("$ref", "<inline>"))
            continue
        merged = _extract(entry_resolved, document, stack)
        properties.update(merged.properties)
        required.extend(merged.required)

    for keyword in ("oneOf", "anyOf"):
        if keyword in resolved:
            logger.debug("%s composition is not flattened", keyword)

    return ExtractedSchema(properties, list(dict.fromkeys(required)))


def _to_property(schema: Any, document: dict[str, Any], stack: _Stack) -> Property:
    resolved = resolve_schema(schema, document)
    if not isinstance(resolved, dict):
        return Property(type=PropertyType.ANY)

    description = resolved.get("description")

    if id(resolved) in stack:
        ref = schema["$ref"] if is_reference(schema) else "#"
        logger.debug("Cyclic reference to %s left unexpanded (%s)", ref_name(ref), ref)
        return Property(type=PropertyType.OBJECT, description=description, ref=ref)

    schema_type = primary_type(resolved.get("type"))
    if schema_type is None and ("properties" in resolved or "allOf" in resolved):
        schema_type = "object"

    if schema_type == "array":
        items = resolved.get("items")
        return Property(
            type=PropertyType.ARRAY,
            items=(
                _to_property(items, document, stack | {id(resolved)})
                if items is not None
                else Property(type=PropertyType.ANY)
            ),
            description=description,
        )

    if schema_type == "object":
        nested = _extract(resolved, document, stack)
        return Property(
            type=PropertyType.OBJECT,
            properties=nested.properties,
            required=nested.required,
            description=description,
        )

    return Property(
        type=map_type(schema_type, resolved.get("format")),
        description=description,
        enum=resolved.get("enum"),
        example=resolved.get("example"),
    )
