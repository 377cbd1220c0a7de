"""Canonical Pydantic models shared across all specdoc modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`HeuristicsPolicy` and :class:`GlobalConfig`.

**Synthesis output models** -- produced by :func:`~specdoc.synthesis.synthesize`
and handed to spreadsheet writers and template renderers:
    :class:`HTTPMethod`, :class:`PropertyType`, :class:`Property`,
    :class:`ApiDocumentation`, :class:`ModelDocumentation` and
    :class:`SynthesisResult`.

**Analysis models** -- produced by :mod:`specdoc.analysis`:
    :class:`DocumentationAnalysis`.

Record models use snake_case attributes with camelCase aliases. Collaborators
receive the aliased form via ``model_dump(by_alias=True, mode="json")`` so
that column names match the historical ``sNo`` / ``operationId`` layout.
"""

from __future__ import annotations

import enum
import json
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class HeuristicsPolicy(BaseModel):
    """Keyword lists driving the pagination heuristics.

    All name comparisons are case-insensitive. ``record_fields`` is searched
    in order; the first array-typed match wins.
    """

    pagination_params: list[str] = Field(
        default_factory=lambda: [
            "page", "offset", "limit", "size", "pageSize", "pageNumber",
        ],
        description="Parameter names that mark an operation as paginated",
    )
    pagination_fields: list[str] = Field(
        default_factory=lambda: [
            "totalCount", "totalPages", "page", "pageSize", "hasNext", "hasPrevious",
        ],
        description="Response property names that mark a schema as paginated",
    )
    record_fields: list[str] = Field(
        default_factory=lambda: ["data", "records", "items", "results"],
        description="Envelope properties holding the paginated records, by priority",
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specdoc/config.json``.

    Loaded and saved by :func:`~specdoc.config.load_global_config` and
    :func:`~specdoc.config.save_global_config`. See
    :func:`~specdoc.config.resolve_config` for the precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    heuristics: HeuristicsPolicy = Field(default_factory=HeuristicsPolicy)


# --- Synthesis output ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods that produce documentation records.

    Path-item keys outside this set (``head``, ``options``, ``parameters``,
    vendor extensions) are ignored by the synthesizer.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def from_key(cls, key: str) -> Optional["HTTPMethod"]:
        """Return the member matching a path-item key, or ``None``."""
        try:
            return cls(key.upper())
        except ValueError:
            return None


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"
    BODY = "body"  # Swagger 2.0 only
    FORM_DATA = "formData"  # Swagger 2.0 only


class PropertyType(str, enum.Enum):
    """Output property types produced by :func:`~specdoc.synthesis.type_mapper.map_type`."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "Date"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


class Property(BaseModel):
    """A single embedded (non-top-level) property of a model.

    Only the fields relevant to the property's kind are populated:

    * primitives -- ``description``, ``enum``, ``example``
    * arrays -- ``items`` and ``description``
    * objects -- ``properties``, ``required`` and ``description``
    * cycle markers -- ``ref`` (the ``$ref`` pointer that was not re-expanded)

    Field order matters: it is the key order of the serialised JSON.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: PropertyType
    items: Optional[Property] = None
    properties: Optional[dict[str, Property]] = None
    required: Optional[list[str]] = None
    description: Optional[str] = None
    enum: Optional[list[Any]] = None
    example: Any = None
    ref: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict, dropping absent fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ApiDocumentation(BaseModel):
    """One documented API operation (one URL path + HTTP method pair).

    ``path_params`` holds a JSON object string keyed by path parameter name.
    The three ``*_ref`` fields name the :class:`ModelDocumentation` records
    describing the operation's query parameters, request body and response
    body, and are ``None`` when the operation has no such concept.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    s_no: int
    endpoint: str
    method: HTTPMethod
    tag: str = "default"
    operation_id: str
    summary: str
    path_params: Optional[str] = None
    query_params_ref: Optional[str] = None
    request_body_ref: Optional[str] = None
    response_body_ref: Optional[str] = None
    is_paginated: bool = False
    requires_auth: bool = False
    business_purpose: Optional[str] = None

    def to_record(self) -> dict[str, Any]:
        """Return the alias-keyed dict handed to spreadsheet and template collaborators."""
        return self.model_dump(mode="json", by_alias=True)


class ModelDocumentation(BaseModel):
    """One documented data model.

    ``properties`` is a JSON object string of :class:`Property` dicts and
    ``required`` a JSON array string (``None`` when nothing is required).
    ``used_in_operations`` is a comma-joined list of operationIds and is
    ``None`` for standalone component schemas.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
        coerce_numbers_to_str=True,
    )

    s_no: int = 0
    model_name: str
    properties: str
    required: Optional[str] = None
    description: Optional[str] = None
    used_in_operations: Optional[str] = None

    def property_map(self) -> dict[str, Any]:
        """Decode :attr:`properties` back into a dict."""
        return json.loads(self.properties)

    def required_list(self) -> list[str]:
        """Decode :attr:`required` back into a list (empty when absent)."""
        return json.loads(self.required) if self.required else []

    def operation_ids(self) -> list[str]:
        """Split :attr:`used_in_operations` into individual operationIds."""
        if not self.used_in_operations:
            return []
        return [op.strip() for op in self.used_in_operations.split(",") if op.strip()]

    def to_record(self) -> dict[str, Any]:
        """Return the alias-keyed dict handed to spreadsheet and template collaborators."""
        return self.model_dump(mode="json", by_alias=True)


class SynthesisResult(NamedTuple):
    """The two record arrays returned by one synthesis run.

    Unpacks as ``apis, models = synthesize(document)``.
    """

    apis: list[ApiDocumentation]
    models: list[ModelDocumentation]


# --- Analysis ---


class DocumentationAnalysis(BaseModel):
    """Completeness and consistency report over a pair of record arrays.

    ``coverage`` is the percentage (0-100) of API records with no issues of
    their own.
    """

    api_count: int
    model_count: int
    tag_count: int
    coverage: float
    issues: list[str] = Field(default_factory=list)
