"""Completeness and consistency checks over synthesized documentation records.

:func:`analyze_documentation` inspects a pair of record arrays and reports
every problem it finds as a human-readable issue string.  Nothing here
raises: a duplicate operationId or a dangling model reference is a
documentation defect to be reported, not a failure.

Checks fall into three groups:

* **API records** -- required fields, business purpose, endpoint format,
  ``pathParams`` JSON, and paginated non-GET operations.
* **Model records** -- name convention (``^[A-Z][a-zA-Z0-9]*Data$``),
  ``properties``/``required`` JSON, typed properties, description.
* **Cross references** -- API model references, unused models, duplicate
  operationIds and model names, ``usedInOperations`` pointing at unknown
  operations.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from typing import Any

from specdoc.models import (
    ApiDocumentation,
    DocumentationAnalysis,
    HTTPMethod,
    ModelDocumentation,
)

_MODEL_NAME_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*Data$")


def analyze_documentation(
    apis: list[ApiDocumentation],
    models: list[ModelDocumentation],
) -> DocumentationAnalysis:
    """Run every check over *apis* and *models*.

    Returns:
        A :class:`~specdoc.models.DocumentationAnalysis` whose ``issues`` are
        deduplicated in the order they were found.
    """
    issues: list[str] = []
    complete_apis = 0

    for line, api in enumerate(apis, start=1):
        api_issues = _check_api(api, line)
        issues.extend(api_issues)
        if not api_issues:
            complete_apis += 1

    for line, model in enumerate(models, start=1):
        issues.extend(_check_model(model, line))

    issues.extend(_check_cross_references(apis, models))

    api_count = len(apis)
    return DocumentationAnalysis(
        api_count=api_count,
        model_count=len(models),
        tag_count=len({api.tag for api in apis}),
        coverage=(complete_apis / api_count) * 100 if api_count else 0.0,
        issues=list(dict.fromkeys(issues)),
    )


def _check_api(api: ApiDocumentation, line: int) -> list[str]:
    issues: list[str] = []
    prefix = f"API #{line} ({api.operation_id})"

    if not api.endpoint:
        issues.append(f"{prefix}: Missing endpoint")
    if not api.operation_id:
        issues.append(f"{prefix}: Missing operationId")
    if not api.summary:
        issues.append(f"{prefix}: Missing summary")
    if not api.tag:
        issues.append(f"{prefix}: Missing tag")
    if not api.business_purpose:
        issues.append(f"{prefix}: Missing business purpose - AI context will be limited")

    if api.endpoint and not api.endpoint.startswith("/"):
        issues.append(f"{prefix}: Endpoint should start with '/'")

    if api.path_params:
        parsed = _loads(api.path_params)
        if parsed is _INVALID:
            issues.append(f"{prefix}: Invalid JSON in pathParams")
        elif not isinstance(parsed, dict):
            issues.append(f"{prefix}: pathParams must be a JSON object")

    if "{" in api.endpoint and "}" in api.endpoint and not api.path_params:
        issues.append(
            f"{prefix}: Endpoint has path parameters but pathParams field is empty"
        )

    if api.is_paginated and api.method is not HTTPMethod.GET:
        issues.append(f"{prefix}: Only GET operations should be marked as paginated")

    return issues


def _check_model(model: ModelDocumentation, line: int) -> list[str]:
    issues: list[str] = []
    prefix = f"Model #{line} ({model.model_name})"

    if not model.model_name:
        issues.append(f"{prefix}: Missing model name")
    elif not _MODEL_NAME_RE.match(model.model_name):
        issues.append(f"{prefix}: Model name should follow PascalCase and end with 'Data'")

    if not model.properties:
        issues.append(f"{prefix}: Missing properties")
    else:
        properties = _loads(model.properties)
        if properties is _INVALID:
            issues.append(f"{prefix}: Invalid JSON in properties")
        elif not isinstance(properties, dict):
            issues.append(f"{prefix}: properties must be a JSON object")
        else:
            for name, definition in properties.items():
                if not isinstance(definition, dict) or not definition.get("type"):
                    issues.append(f"{prefix}: Property '{name}' missing type")

    if model.required:
        required = _loads(model.required)
        if required is _INVALID:
            issues.append(f"{prefix}: Invalid JSON in required field")
        elif not isinstance(required, list):
            issues.append(f"{prefix}: required field must be a JSON array")

    if not model.description:
        issues.append(f"{prefix}: Missing description - AI context will be limited")

    return issues


def _check_cross_references(
    apis: list[ApiDocumentation],
    models: list[ModelDocumentation],
) -> list[str]:
    issues: list[str] = []
    model_names = {model.model_name for model in models}
    referenced: set[str] = set()

    for api in apis:
        for label, ref in (
            ("query params", api.query_params_ref),
            ("request body", api.request_body_ref),
            ("response body", api.response_body_ref),
        ):
            if not ref:
                continue
            referenced.add(ref)
            if ref not in model_names:
                issues.append(
                    f"API {api.operation_id}: Referenced {label} model '{ref}' not found"
                )

    for model in models:
        if model.model_name not in referenced and not model.used_in_operations:
            issues.append(
                f"Model {model.model_name}: Appears to be unused and has no "
                "usedInOperations reference"
            )

    duplicate_ids = _duplicates(api.operation_id for api in apis if api.operation_id)
    if duplicate_ids:
        issues.append(f"Duplicate operation IDs found: {', '.join(duplicate_ids)}")

    duplicate_models = _duplicates(m.model_name for m in models if m.model_name)
    if duplicate_models:
        issues.append(f"Duplicate model names found: {', '.join(duplicate_models)}")

    operation_ids = {api.operation_id for api in apis}
    for model in models:
        for operation_id in model.operation_ids():
            if operation_id not in operation_ids:
                issues.append(
                    f"Model {model.model_name}: References unknown operation '{operation_id}'"
                )

    return issues


def recommendations(analysis: DocumentationAnalysis) -> list[str]:
    """Turn the issue categories of *analysis* into follow-up advice."""
    advice: list[str] = []
    issues = analysis.issues

    if analysis.coverage < 80:
        advice.append(
            "Consider adding more detailed documentation to improve AI understanding"
        )
    if any("Missing business purpose" in issue for issue in issues):
        advice.append(
            "Add business purpose descriptions to enhance AI context and code "
            "generation quality"
        )
    if any("Missing description" in issue for issue in issues):
        advice.append("Add descriptions to models to improve AI-generated code documentation")
    if any("unused" in issue for issue in issues):
        advice.append("Review and remove unused models to keep codebase clean")
    if any("Duplicate" in issue for issue in issues):
        advice.append("Resolve duplicate names to avoid conflicts in generated code")

    return advice


_INVALID = object()


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return _INVALID


def _duplicates(values: Any) -> list[str]:
    counts = Counter(values)
    return [value for value, count in counts.items() if count > 1]
