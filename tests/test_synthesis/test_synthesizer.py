"""End-to-end tests for specdoc.synthesis.synthesize."""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from specdoc.models import HeuristicsPolicy
from specdoc.synthesis import synthesize


def _dump(result) -> str:
    apis, models = result
    return json.dumps(
        [[a.to_record() for a in apis], [m.to_record() for m in models]],
        ensure_ascii=False,
    )


class TestWidgetStore:

    def test_operations_in_document_order(self, widgets_raw: dict[str, Any]) -> None:
        apis, _ = synthesize(widgets_raw)

        assert [(a.s_no, a.method.value, a.endpoint, a.operation_id) for a in apis] == [
            (1, "GET", "/items", "getItems"),
            (2, "GET", "/widgets/{widgetId}", "getWidget"),
            (3, "PUT", "/widgets/{widgetId}", "updateWidget"),
            (4, "DELETE", "/widgets/{widgetId}", "deleteWidgetsById"),
            (5, "POST", "/nodes", "createNode"),
            (6, "POST", "/broken", "submitBroken"),
            (7, "GET", "/reports", "listReports"),
        ]

    def test_models_in_discovery_order(self, widgets_raw: dict[str, Any]) -> None:
        _, models = synthesize(widgets_raw)

        assert [m.model_name for m in models] == [
            "GetItemsQueryParams",
            "GetItemsOutData",
            "GetItemsRecordData",
            "GetWidgetOutData",
            "UpdateWidgetInData",
            "UpdateWidgetOutData",
            "CreateNodeInData",
            "CreateNodeOutData",
            "SubmitBrokenInData",
            "ListReportsQueryParams",
            "WidgetData",
            "ItemPageData",
            "IdentifiedData",
            "NamedData",
            "WidgetInputData",
            "NodeData",
            "ErrorData",
        ]
        assert [m.s_no for m in models] == list(range(1, len(models) + 1))

    def test_operation_ids_unique(self, widgets_raw: dict[str, Any]) -> None:
        apis, _ = synthesize(widgets_raw)
        ids = [a.operation_id for a in apis]
        assert len(ids) == len(set(ids))

    def test_model_names_unique(self, widgets_raw: dict[str, Any]) -> None:
        _, models = synthesize(widgets_raw)
        names = [m.model_name for m in models]
        assert len(names) == len(set(names))

    def test_used_in_operations_reference_real_operations(self, widgets_raw: dict[str, Any]) -> None:
        apis, models = synthesize(widgets_raw)
        operation_ids = {a.operation_id for a in apis}
        for model in models:
            assert set(model.operation_ids()) <= operation_ids

    def test_api_refs_name_emitted_models(self, widgets_raw: dict[str, Any]) -> None:
        apis, models = synthesize(widgets_raw)
        names = {m.model_name for m in models}
        for api in apis:
            for ref in (api.query_params_ref, api.request_body_ref, api.response_body_ref):
                assert ref is None or ref in names

    def test_deterministic(self, widgets_raw: dict[str, Any]) -> None:
        assert _dump(synthesize(widgets_raw)) == _dump(synthesize(widgets_raw))

    def test_document_not_mutated(self, widgets_raw: dict[str, Any]) -> None:
        before = copy.deepcopy(widgets_raw)
        synthesize(widgets_raw)
        assert widgets_raw == before

    def test_all_of_request_body(self, widgets_raw: dict[str, Any]) -> None:
        _, models = synthesize(widgets_raw)
        body = next(m for m in models if m.model_name == "UpdateWidgetInData")

        assert body.property_map() == {"id": {"type": "string"}, "name": {"type": "string"}}
        assert body.required_list() == ["id", "name"]
        assert body.used_in_operations == "updateWidget"

    def test_broken_reference_does_not_fail(self, widgets_raw: dict[str, Any]) -> None:
        _, models = synthesize(widgets_raw)
        body = next(m for m in models if m.model_name == "SubmitBrokenInData")
        assert body.properties == "{}"

    def test_cycle_marker_in_record(self, widgets_raw: dict[str, Any]) -> None:
        _, models = synthesize(widgets_raw)
        node = next(m for m in models if m.model_name == "NodeData")
        assert node.property_map()["parent"] == {
            "type": "object",
            "ref": "#/components/schemas/Node",
        }


class TestSpecExamples:

    def test_get_items_example(self) -> None:
        document = {
            "openapi": "3.0.3",
            "paths": {
                "/items": {
                    "get": {
                        "parameters": [
                            {"name": "page", "in": "query", "schema": {"type": "integer"}},
                            {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                        ],
                        "responses": {"200": {"description": "OK"}},
                    }
                }
            },
        }
        apis, models = synthesize(document)

        assert apis[0].operation_id == "getItems"
        assert apis[0].is_paginated is True
        assert [m.model_name for m in models] == ["GetItemsQueryParams"]
        assert models[0].property_map() == {"page": {"type": "number"}, "limit": {"type": "number"}}
        assert models[0].required is None

    def test_paginated_widget_envelope(self) -> None:
        document = {
            "openapi": "3.0.3",
            "paths": {
                "/widgets": {
                    "get": {
                        "operationId": "listWidgets",
                        "responses": {
                            "200": {
                                "content": {
                                    "application/json": {
                                        "schema": {
                                            "type": "object",
                                            "properties": {
                                                "data": {
                                                    "type": "array",
                                                    "items": {"$ref": "#/components/schemas/Widget"},
                                                },
                                                "totalCount": {"type": "integer"},
                                            },
                                        }
                                    }
                                }
                            }
                        },
                    }
                }
            },
            "components": {
                "schemas": {
                    "Widget": {
                        "type": "object",
                        "properties": {"sku": {"type": "string"}, "price": {"type": "number"}},
                    }
                }
            },
        }
        apis, models = synthesize(document)

        assert apis[0].is_paginated is True
        assert [m.model_name for m in models] == [
            "ListWidgetsOutData", "ListWidgetsRecordData", "WidgetData",
        ]
        assert list(models[0].property_map()) == ["data", "totalCount"]
        assert list(models[1].property_map()) == ["sku", "price"]


class TestSwagger2:

    def test_petstore(self, petstore_20_raw: dict[str, Any]) -> None:
        apis, models = synthesize(petstore_20_raw)

        assert [a.operation_id for a in apis] == ["listPets", "addPet", "getPetsById"]
        assert apis[0].is_paginated is True
        assert apis[1].request_body_ref == "AddPetInData"
        assert json.loads(apis[2].path_params) == {
            "petId": {"type": "number", "required": True, "description": "ID of pet"}
        }
        assert apis[2].business_purpose == "Returns a single pet"

        assert [m.model_name for m in models] == [
            "ListPetsQueryParams",
            "ListPetsOutData",
            "ListPetsRecordData",
            "AddPetInData",
            "AddPetOutData",
            "GetPetsByIdOutData",
            "PetData",
            "PetListData",
        ]
        record = models[2]
        assert record.property_map() == {
            "id": {"type": "number"},
            "name": {"type": "string"},
            "birthday": {"type": "Date"},
        }


class TestEdgeCases:

    def test_empty_paths(self) -> None:
        assert synthesize({"openapi": "3.0.3", "paths": {}}) == ([], [])

    def test_unknown_methods_and_non_dict_items_skipped(self) -> None:
        document = {
            "paths": {
                "/x": {"head": {}, "options": {}, "get": {"operationId": "getX"}, "post": "bad"},
                "/y": None,
            }
        }
        apis, _ = synthesize(document)
        assert [a.operation_id for a in apis] == ["getX"]

    def test_duplicate_operation_ids_kept_and_logged(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        document = {
            "paths": {
                "/a": {"get": {"operationId": "same"}},
                "/b": {"get": {"operationId": "same"}},
            }
        }
        with caplog.at_level("WARNING", logger="specdoc"):
            apis, _ = synthesize(document)
        assert [a.operation_id for a in apis] == ["same", "same"]
        assert "same" in caplog.text

    def test_custom_policy(self) -> None:
        document = {"paths": {"/a": {"get": {"parameters": [{"name": "cursor", "in": "query"}]}}}}
        apis, _ = synthesize(document, HeuristicsPolicy(pagination_params=["cursor"]))
        assert apis[0].is_paginated is True
