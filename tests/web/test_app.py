import json

import pytest

from api import create_app
from api.blueprints.entities import Item
from api.config import TestingConfig, build_serialization_config
from core.provider import JsonProvider
from core.schemas import SerializerFeature


def test_ping_is_compact_by_default(client):
    resp = client.get("/health/ping")
    assert resp.status_code == 200
    assert resp.data == b'{"status":"ok"}'
    assert resp.mimetype == "application/json"


def test_ping_with_pretty_query_param(client):
    resp = client.get("/health/ping?pretty")
    assert b"\n" in resp.data
    assert resp.get_json() == {"status": "ok"}


def test_pretty_does_not_leak_between_requests(client, app):
    client.get("/health/ping?pretty=1")
    assert client.get("/health/ping").data == b'{"status":"ok"}'
    assert SerializerFeature.PRETTY_FORMAT not in app.extensions["jsonbridge"].config.serializer_features


def test_config_endpoint_reports_active_settings(client):
    data = client.get("/health/config").get_json()
    assert data["charset"] == "utf-8"
    assert data["serializer_features"] == ["write_map_null_value"]
    assert data["allowed_types"] == []
    assert data["restricted"] is False
    assert data["engine"] == "StandardJsonEngine"


def test_echo_round_trip_keeps_nulls(client):
    payload = {"name": "ana", "nickname": None, "scores": [1, 2.5, None]}
    resp = client.post("/entities/echo", json=payload)
    assert resp.status_code == 200
    assert resp.get_json() == payload


def test_echo_accepts_structured_json_suffix(client):
    resp = client.post(
        "/entities/echo",
        data='{"@id": "x"}',
        content_type="application/ld+json",
        headers={"Accept": "application/ld+json"},
    )
    assert resp.status_code == 200
    assert resp.mimetype == "application/ld+json"
    assert json.loads(resp.data) == {"@id": "x"}


def test_unsupported_content_type_is_415(client):
    resp = client.post("/entities/echo", data="<a/>", content_type="application/xml")
    assert resp.status_code == 415
    assert resp.get_json()["error"] == "unsupported_media_type"


def test_unacceptable_accept_header_is_406(client):
    resp = client.post("/entities/echo", json={"a": 1}, headers={"Accept": "text/html"})
    assert resp.status_code == 406
    assert resp.get_json()["error"] == "not_acceptable"


def test_wildcard_accept_is_served_as_json(client):
    resp = client.post("/entities/echo", json={"a": 1}, headers={"Accept": "*/*"})
    assert resp.status_code == 200
    assert resp.mimetype == "application/json"


def test_malformed_body_is_400(client):
    resp = client.post("/entities/echo", data='{"a": [1, 2', content_type="application/json")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "malformed_entity"
    assert body["position"] is not None


def test_items_are_validated_and_created(client):
    payload = [
        {"sku": "A-1", "name": "Cabo", "price": 10.5},
        {"sku": "B-2", "name": "Switch", "price": 99, "tags": ["poe"]},
    ]
    resp = client.post("/entities/items", json=payload)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["total"] == 2
    assert data["items"][0]["price"] == 10.5
    assert data["items"][1]["tags"] == ["poe"]
    assert data["items"][0]["description"] is None


def test_items_with_wrong_shape_are_422(client):
    resp = client.post("/entities/items", json=[{"name": "sem sku", "price": -1}])
    assert resp.status_code == 422
    body = resp.get_json()
    assert body["error"] == "unprocessable_entity"
    assert {tuple(d["loc"]) for d in body["details"]} == {(0, "sku"), (0, "price")}


def test_sample_item_output_format(client):
    resp = client.get("/entities/sample")
    assert b'"price":19.90' in resp.data
    data = resp.get_json()
    assert data["sku"] == "SKU-001"
    assert data["created_at"] == "2024-01-15T12:30:00+00:00"
    assert data["description"] is None


def test_date_format_from_config():
    class DateConfig(TestingConfig):
        JSON_DATE_FORMAT = "%Y-%m-%d"

    client = create_app(config_class=DateConfig).test_client()
    assert client.get("/entities/sample").get_json()["created_at"] == "2024-01-15"


def test_allow_list_restricts_entities():
    app = create_app(
        config_class=TestingConfig,
        provider=JsonProvider(allowed_types=[Item]),
    )
    client = app.test_client()

    assert client.get("/entities/sample").status_code == 200
    assert client.post("/entities/echo", json={"a": 1}).status_code == 415


def test_flask_json_helpers_go_through_provider(app):
    assert app.json.dumps({"a": None}) == '{"a":null}'
    assert app.json.loads(b'{"a": 1}') == {"a": 1}
    assert app.json.loads('{"a": 2}') == {"a": 2}


def test_build_serialization_config_rejects_unknown_feature():
    with pytest.raises(ValueError):
        build_serialization_config({"JSON_SERIALIZER_FEATURES": ("pretty_format", "nope")})


def test_build_serialization_config_accepts_names_and_values():
    config = build_serialization_config(
        {"JSON_SERIALIZER_FEATURES": ("PRETTY_FORMAT", "sort_field"), "JSON_CHARSET": "UTF8"}
    )
    assert config.serializer_features == (
        SerializerFeature.PRETTY_FORMAT,
        SerializerFeature.SORT_FIELD,
    )
    assert config.charset == "utf-8"


def test_cyclic_response_is_500(app):
    from api.negotiation import write_entity

    @app.get("/cyclic")
    def cyclic():
        node = {"name": "root"}
        node["self"] = node
        return write_entity(node)

    resp = app.test_client().get("/cyclic")
    assert resp.status_code == 500
    assert resp.get_json()["error"] == "encode_failure"


def test_item_prices_keep_every_digit(client):
    resp = client.post(
        "/entities/items",
        data='[{"sku": "A-1", "name": "Lote", "price": 12345678901234567.89}]',
        content_type="application/json",
    )
    assert resp.status_code == 201
    assert b'"price":12345678901234567.89' in resp.data


def test_allow_list_from_config():
    class ItemsOnlyConfig(TestingConfig):
        JSON_ALLOWED_TYPES = (Item,)

    client = create_app(config_class=ItemsOnlyConfig).test_client()
    assert client.get("/entities/sample").status_code == 200
    assert client.post("/entities/echo", json={"a": 1}).status_code == 415
    assert client.get("/health/config").get_json()["restricted"] is True


def test_accept_refusing_everything_is_406(client):
    resp = client.post(
        "/entities/echo", json={"a": 1}, headers={"Accept": "application/json;q=0"}
    )
    assert resp.status_code == 406
    assert resp.get_json()["error"] == "not_acceptable"
