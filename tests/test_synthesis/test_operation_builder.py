"""Tests for specdoc.synthesis.operation_builder."""

from __future__ import annotations

import json
from typing import Any

from specdoc.models import HTTPMethod
from specdoc.synthesis.operation_builder import (
    build_operation,
    operation_id_for,
    path_parameters,
    tag_for,
)
from specdoc.synthesis.shapes import effective_parameters


def _build(document: dict[str, Any], path: str, method: HTTPMethod, s_no: int = 1):
    path_item = document["paths"][path]
    operation = path_item[method.value.lower()]
    params = effective_parameters(path_item, operation, document)
    return build_operation(s_no, path, method, operation, params, document)


class TestHelpers:

    def test_declared_operation_id(self) -> None:
        assert operation_id_for(HTTPMethod.GET, "/pets", {"operationId": "listPets"}) == "listPets"

    def test_synthesized_operation_id(self) -> None:
        assert operation_id_for(HTTPMethod.GET, "/items", {}) == "getItems"
        assert operation_id_for(HTTPMethod.GET, "/items", {"operationId": ""}) == "getItems"

    def test_tag(self) -> None:
        assert tag_for({"tags": ["pets", "store"]}) == "pets"
        assert tag_for({"tags": []}) == "default"
        assert tag_for({}) == "default"

    def test_path_parameters_undeclared_segment(self) -> None:
        assert path_parameters("/a/{x}/b/{y}", [{"name": "y", "in": "path", "type": "integer"}], {}) == {
            "x": {"type": "string", "required": True},
            "y": {"type": "number", "required": True},
        }
        assert path_parameters("/plain", [], {}) is None


class TestBuildOperation:

    def test_get_items(self, widgets_raw: dict[str, Any]) -> None:
        api = _build(widgets_raw, "/items", HTTPMethod.GET)

        assert api.operation_id == "getItems"
        assert api.tag == "items"
        assert api.summary == "GET /items"
        assert api.path_params is None
        assert api.query_params_ref == "GetItemsQueryParams"
        assert api.request_body_ref is None
        assert api.response_body_ref == "GetItemsOutData"
        assert api.is_paginated is True
        assert api.requires_auth is False
        assert api.business_purpose == "Retrieve item data for items management functionality"

    def test_get_widget(self, widgets_raw: dict[str, Any]) -> None:
        api = _build(widgets_raw, "/widgets/{widgetId}", HTTPMethod.GET, s_no=2)

        assert api.s_no == 2
        assert api.operation_id == "getWidget"
        assert json.loads(api.path_params) == {
            "widgetId": {"type": "number", "required": True, "description": "Widget identifier"}
        }
        assert api.query_params_ref is None
        assert api.response_body_ref == "GetWidgetOutData"
        assert api.requires_auth is True
        assert api.is_paginated is False
        assert api.business_purpose == "Get a widget - Used for widgets management in the application"

    def test_update_widget_uses_description(self, widgets_raw: dict[str, Any]) -> None:
        api = _build(widgets_raw, "/widgets/{widgetId}", HTTPMethod.PUT)

        assert api.request_body_ref == "UpdateWidgetInData"
        assert api.response_body_ref == "UpdateWidgetOutData"
        assert api.business_purpose == "Replace a widget's name and identifier"

    def test_delete_without_operation_id(self, widgets_raw: dict[str, Any]) -> None:
        api = _build(widgets_raw, "/widgets/{widgetId}", HTTPMethod.DELETE)

        assert api.operation_id == "deleteWidgetsById"
        assert api.summary == "DELETE /widgets/{widgetId}"
        assert api.response_body_ref is None
        assert api.business_purpose == "Remove widget data for widgets management functionality"

    def test_swagger_body_parameter(self, petstore_20_raw: dict[str, Any]) -> None:
        api = _build(petstore_20_raw, "/pets", HTTPMethod.POST)

        assert api.request_body_ref == "AddPetInData"
        assert api.query_params_ref is None
        assert api.requires_auth is True

    def test_record_keys(self, widgets_raw: dict[str, Any]) -> None:
        record = _build(widgets_raw, "/items", HTTPMethod.GET).to_record()
        assert list(record) == [
            "sNo", "endpoint", "method", "tag", "operationId", "summary", "pathParams",
            "queryParamsRef", "requestBodyRef", "responseBodyRef", "isPaginated",
            "requiresAuth", "businessPurpose",
        ]
        assert record["method"] == "GET"

    def test_numeric_summary_and_description(self) -> None:
        operation = {"summary": 2024, "description": 42, "responses": {}}
        api = build_operation(1, "/years", HTTPMethod.GET, operation, [], {})

        assert api.summary == "2024"
        assert api.business_purpose == "42"
