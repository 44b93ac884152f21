"""Tests for result payload serialization."""

from __future__ import annotations

from healthmon.models import ResourceKind, ServerResponse, ServiceResponse


def test_service_response_to_dict_omits_empty_message() -> None:
    response = ServiceResponse(resource="cache", status="ok", latency_ms=-1.0)

    assert response.ok is True
    assert response.to_dict() == {"resource": "cache", "status": "ok", "latency_ms": 0.0}


def test_service_response_to_dict_includes_message() -> None:
    response = ServiceResponse(resource="db", status="down", latency_ms=12.5, message="refused")

    assert response.ok is False
    assert response.to_dict() == {
        "resource": "db",
        "status": "down",
        "latency_ms": 12.5,
        "message": "refused",
    }


def test_server_response_payload_includes_results_and_failures() -> None:
    response = ServerResponse(
        status=200,
        message="Ok",
        service_responses=[
            ServiceResponse(resource="api", status="ok"),
            ServiceResponse(resource="search", status="red"),
        ],
        failed=["search"],
    )

    payload = response.to_dict()

    assert payload["status"] == 200
    assert payload["message"] == "Ok"
    assert [item["resource"] for item in payload["results"]] == ["api", "search"]
    assert payload["failed"] == ["search"]


def test_resource_kind_parse() -> None:
    assert ResourceKind.parse("elasticsearchClient") is ResourceKind.ELASTICSEARCH_CLIENT
    assert ResourceKind.parse(ResourceKind.REDIS_CLIENT) is ResourceKind.REDIS_CLIENT
    assert ResourceKind.parse("memcached") is None
