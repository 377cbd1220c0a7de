"""Drive one documentation synthesis pass over a specification document.

:func:`synthesize` walks the ``paths`` table once, in document order:

1. For every path and every recognised HTTP method (in the order the path
   item declares them) it merges the parameters, builds the operation's
   :class:`~specdoc.models.ApiDocumentation` record and emits the
   operation's models into the run's :class:`ModelRegistry`.
2. It then emits a model for every component schema not already emitted.
3. Finally it numbers the models in discovery order.

The pass reads the document without mutating it and keeps all of its state
in locals, so concurrent calls on different documents are independent and
repeated calls on the same document give identical results.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Optional

from specdoc.models import (
    ApiDocumentation,
    HeuristicsPolicy,
    HTTPMethod,
    SynthesisResult,
)
from specdoc.synthesis.heuristics import DEFAULT_POLICY
from specdoc.synthesis.model_extractor import ModelExtractor, ModelRegistry
from specdoc.synthesis.operation_builder import build_operation
from specdoc.synthesis.shapes import effective_parameters

logger = logging.getLogger(__name__)


def synthesize(
    document: dict[str, Any],
    policy: Optional[HeuristicsPolicy] = None,
) -> SynthesisResult:
    """Synthesize API and model documentation records from *document*.

    Args:
        document: A parsed OpenAPI 3.x or Swagger 2.0 document, as returned
            by :func:`~specdoc.parser.loader.load_spec`.
        policy: Heuristic keyword lists; defaults to the built-in policy.

    Returns:
        A :class:`~specdoc.models.SynthesisResult` ``(apis, models)``.

    Example::

        document = load_spec("petstore.yaml")
        apis, models = synthesize(document)
        for api in apis:
            print(api.method.value, api.endpoint, api.operation_id)
    """
    policy = policy or DEFAULT_POLICY
    extractor = ModelExtractor(document, policy)
    registry = ModelRegistry()
    apis: list[ApiDocumentation] = []

    paths = document.get("paths")
    if not isinstance(paths, dict):
        paths = {}

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        for key, operation in path_item.items():
            method = HTTPMethod.from_key(str(key))
            if method is None or not isinstance(operation, dict):
                continue

            parameters = effective_parameters(path_item, operation, document)
            api = build_operation(
                len(apis) + 1, str(path), method, operation, parameters, document, policy
            )
            apis.append(api)
            extractor.extract_operation_models(
                api.operation_id, operation, parameters, registry
            )

    extractor.standalone_models(registry)
    models = registry.numbered()

    _warn_duplicate_operation_ids(apis)
    logger.info("Synthesized %d API records and %d model records", len(apis), len(models))
    return SynthesisResult(apis, models)


def _warn_duplicate_operation_ids(apis: list[ApiDocumentation]) -> None:
    counts = Counter(api.operation_id for api in apis)
    for operation_id, count in counts.items():
        if count > 1:
            logger.warning("operationId '%s' is used by %d operations", operation_id, count)
