"""Map OpenAPI schema types and formats to documentation property types.

**Mapping rules:**

* ``integer`` and ``number`` become ``number``.
* ``boolean`` stays ``boolean``.
* ``string`` becomes ``Date`` for the ``date`` and ``date-time`` formats,
  otherwise ``string``.
* ``array`` and ``object`` are kept as-is.
* Anything else, including a missing type, becomes ``any``.

OpenAPI 3.1 type arrays (``["string", "null"]``) use their first non-null
entry.

Parameters differ between specification versions: OpenAPI 3.x nests the type
under a ``schema`` object while Swagger 2.0 declares ``type``/``format``
inline.  :class:`ParameterShape` settles that once per parameter.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Optional

from specdoc.models import PropertyType
from specdoc.parser.resolver import resolve_schema

_TYPE_MAP: dict[str, PropertyType] = {
    "integer": PropertyType.NUMBER,
    "number": PropertyType.NUMBER,
    "boolean": PropertyType.BOOLEAN,
    "string": PropertyType.STRING,
    "array": PropertyType.ARRAY,
    "object": PropertyType.OBJECT,
}

_DATE_FORMATS = frozenset({"date", "date-time"})


def map_type(schema_type: Any, schema_format: Optional[str] = None) -> PropertyType:
    """Map an OpenAPI ``type`` (with optional ``format``) to a :class:`PropertyType`.

    Example::

        >>> map_type("integer", "int64")
        <PropertyType.NUMBER: 'number'>
        >>> map_type("string", "date-time")
        <PropertyType.DATE: 'Date'>
        >>> map_type(None)
        <PropertyType.ANY: 'any'>
    """
    schema_type = primary_type(schema_type)
    if schema_type == "string" and schema_format in _DATE_FORMATS:
        return PropertyType.DATE
    return _TYPE_MAP.get(schema_type or "", PropertyType.ANY)


def primary_type(schema_type: Any) -> Optional[str]:
    """Collapse an OpenAPI 3.1 type array to its first non-null entry."""
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        return str(non_null[0]) if non_null else None
    if schema_type is None:
        return None
    return str(schema_type)


class ParameterShape(NamedTuple):
    """The type-bearing part of a parameter, whichever version declared it."""

    type: Any
    format: Optional[str]
    enum: Optional[list[Any]]

    @classmethod
    def of(
        cls, param: dict[str, Any], document: Optional[dict[str, Any]] = None
    ) -> "ParameterShape":
        """Read the shape from ``param["schema"]`` (3.x) or from *param* itself (2.0).

        When *document* is given, a ``$ref`` schema is followed one level.
        """
        schema = param.get("schema")
        if document is not None:
            schema = resolve_schema(schema, document)
        source = schema if isinstance(schema, dict) else param
        return cls(source.get("type"), source.get("format"), source.get("enum"))


def parameter_type(
    param: dict[str, Any], document: Optional[dict[str, Any]] = None
) -> PropertyType:
    """Map a parameter object's declared type to a :class:`PropertyType`."""
    shape = ParameterShape.of(param, document)
    return map_type(shape.type, shape.format)
