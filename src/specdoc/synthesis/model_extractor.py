"""Produce deduplicated :class:`~specdoc.models.ModelDocumentation` records.

Models come from four places, named after the operation that needs them:

===========================  ======================================  ==========================
Concept                      Emitted when                            Name
===========================  ======================================  ==========================
Query parameters             >= 1 ``in: query`` parameter            ``<OpId>QueryParams``
Request body                 a JSON request body schema exists       ``<OpId>InData``
Response body                a 2xx response has a JSON schema        ``<OpId>OutData``
Paginated record             that response is a page envelope        ``<OpId>RecordData``
                             with an array of records
Standalone schema            any component/definition not yet        ``<Name>Data``
                             emitted under that name
===========================  ======================================  ==========================

Deduplication is by name only.  The :class:`ModelRegistry` of a synthesis run
keeps the first model emitted under a name and silently drops later ones,
even if their shapes differ.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from specdoc.models import (
    HeuristicsPolicy,
    ModelDocumentation,
    ParameterLocation,
    Property,
)
from specdoc.synthesis.heuristics import (
    DEFAULT_POLICY,
    extract_record_schema,
    is_paginated_schema,
)
from specdoc.synthesis.naming import pascal_case
from specdoc.synthesis.properties import ExtractedSchema, extract_properties
from specdoc.synthesis.shapes import (
    json_request_schema,
    parameters_in,
    success_response_schemas,
)
from specdoc.synthesis.type_mapper import ParameterShape, map_type

logger = logging.getLogger(__name__)


def to_json(value: Any) -> str:
    """Serialise *value* compactly, preserving key order and non-ASCII text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def query_params_model_name(operation_id: str) -> str:
    return f"{pascal_case(operation_id)}QueryParams"


def request_body_model_name(operation_id: str) -> str:
    return f"{pascal_case(operation_id)}InData"


def response_body_model_name(operation_id: str) -> str:
    return f"{pascal_case(operation_id)}OutData"


def record_model_name(operation_id: str) -> str:
    return f"{pascal_case(operation_id)}RecordData"


def standalone_model_name(schema_name: str) -> str:
    return f"{pascal_case(schema_name)}Data"


def schema_components(document: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas`` (3.x), else ``definitions`` (2.0), else ``{}``."""
    components = document.get("components")
    if isinstance(components, dict) and components.get("schemas"):
        return components["schemas"]
    definitions = document.get("definitions")
    return definitions if isinstance(definitions, dict) else {}


class ModelRegistry:
    """Ordered, name-deduplicated model accumulator owned by one synthesis run."""

    def __init__(self) -> None:
        self._models: list[ModelDocumentation] = []
        self._seen: set[str] = set()

    def __contains__(self, model_name: object) -> bool:
        return model_name in self._seen

    def __len__(self) -> int:
        return len(self._models)

    def add(self, model: ModelDocumentation) -> bool:
        """Record *model* unless its name was already emitted.

        Returns:
            ``True`` if the model was added, ``False`` if it was a duplicate.
        """
        if model.model_name in self._seen:
            logger.debug("Model %s already emitted; keeping the first", model.model_name)
            return False
        self._seen.add(model.model_name)
        self._models.append(model)
        return True

    def numbered(self) -> list[ModelDocumentation]:
        """Return copies of the models with 1-based sequence numbers in discovery order."""
        return [
            model.model_copy(update={"s_no": index})
            for index, model in enumerate(self._models, start=1)
        ]


class ModelExtractor:
    """Builds the models of each operation and the standalone component models.

    Args:
        document: The root specification document.
        policy: Heuristics used to recognise paginated responses.
    """

    def __init__(
        self,
        document: dict[str, Any],
        policy: HeuristicsPolicy = DEFAULT_POLICY,
    ) -> None:
        self.document = document
        self.policy = policy

    def extract_operation_models(
        self,
        operation_id: str,
        operation: dict[str, Any],
        parameters: list[dict[str, Any]],
        registry: ModelRegistry,
    ) -> list[ModelDocumentation]:
        """Emit every model an operation needs into *registry*.

        Args:
            operation_id: The operation's effective (declared or synthesized) id.
            operation: The raw operation object.
            parameters: The operation's effective parameters.
            registry: The run's accumulator.

        Returns:
            The models that were newly added (duplicates excluded).
        """
        candidates: list[ModelDocumentation] = []

        query_model = self.query_params_model(operation_id, parameters)
        if query_model is not None:
            candidates.append(query_model)

        body_model = self.request_body_model(operation_id, operation, parameters)
        if body_model is not None:
            candidates.append(body_model)

        candidates.extend(self.response_models(operation_id, operation))

        return [model for model in candidates if registry.add(model)]

    def query_params_model(
        self, operation_id: str, parameters: list[dict[str, Any]]
    ) -> Optional[ModelDocumentation]:
        query_params = parameters_in(parameters, ParameterLocation.QUERY)
        if not query_params:
            return None

        properties: dict[str, Any] = {}
        required: list[str] = []
        for param in query_params:
            name = str(param.get("name", ""))
            shape = ParameterShape.of(param, self.document)
            properties[name] = Property(
                type=map_type(shape.type, shape.format),
                description=param.get("description"),
                enum=shape.enum,
            ).to_dict()
            if param.get("required"):
                required.append(name)

        return ModelDocumentation(
            model_name=query_params_model_name(operation_id),
            properties=to_json(properties),
            required=to_json(required) if required else None,
            description=f"Query parameters for {operation_id} operation",
            used_in_operations=operation_id,
        )

    def request_body_model(
        self,
        operation_id: str,
        operation: dict[str, Any],
        parameters: list[dict[str, Any]],
    ) -> Optional[ModelDocumentation]:
        schema = json_request_schema(operation, parameters, self.document)
        if schema is None:
            return None
        return self._model(
            request_body_model_name(operation_id),
            extract_properties(schema, self.document),
            f"Request body model for {operation_id} operation",
            operation_id,
        )

    def response_models(
        self, operation_id: str, operation: dict[str, Any]
    ) -> list[ModelDocumentation]:
        """Build the ``OutData`` model (and ``RecordData`` for page envelopes) per 2xx response."""
        models: list[ModelDocumentation] = []
        for status, schema in success_response_schemas(operation, self.document):
            models.append(
                self._model(
                    response_body_model_name(operation_id),
                    extract_properties(schema, self.document),
                    f"Response model for {operation_id} operation",
                    operation_id,
                )
            )

            if not is_paginated_schema(schema, self.document, self.policy):
                continue
            record_schema = extract_record_schema(schema, self.document, self.policy)
            if record_schema is None:
                logger.debug(
                    "Paginated %s response of %s has no record array", status, operation_id
                )
                continue
            models.append(
                self._model(
                    record_model_name(operation_id),
                    extract_properties(record_schema, self.document),
                    f"Record model for {operation_id} paginated response",
                    operation_id,
                )
            )
        return models

    def standalone_models(self, registry: ModelRegistry) -> list[ModelDocumentation]:
        """Emit a ``<Name>Data`` model for every component schema not yet emitted."""
        added: list[ModelDocumentation] = []
        for name, schema in schema_components(self.document).items():
            model_name = standalone_model_name(str(name))
            if model_name in registry:
                continue
            description = schema.get("description") if isinstance(schema, dict) else None
            model = self._model(
                model_name,
                extract_properties(schema, self.document),
                description or f"{name} entity model",
                None,
            )
            if registry.add(model):
                added.append(model)
        return added

    @staticmethod
    def _model(
        model_name: str,
        extracted: ExtractedSchema,
        description: str,
        operation_id: Optional[str],
    ) -> ModelDocumentation:
        return ModelDocumentation(
            model_name=model_name,
            properties=to_json(extracted.properties_dict()),
            required=to_json(extracted.required) if extracted.required else None,
            description=description,
            used_in_operations=operation_id,
        )
