"""Tests for ResourceRegistry."""

from __future__ import annotations

import threading

import pytest

from healthmon import Resource, ResourceKind, ResourceRegistry, ResourceValidationError


class TestRegister:
    def test_accepts_valid_resource(self) -> None:
        registry = ResourceRegistry()

        accepted, error = registry.register(
            Resource(type="serviceUrl", name="graphql", handle="http://graphql")
        )

        assert accepted is True
        assert error is None
        assert registry.snapshot() == {ResourceKind.SERVICE_URL: {"graphql": "http://graphql"}}
        assert len(registry) == 1

    @pytest.mark.parametrize(
        ("resource", "missing"),
        [
            (Resource(type="", name="graphql", handle="uri"), ("type",)),
            (Resource(type="serviceUrl", name="", handle="uri"), ("name",)),
            (Resource(type="serviceUrl", name="graphql", handle=""), ("handle",)),
            (Resource(type="", name="", handle="", critical=True), ("type", "name", "handle")),
        ],
    )
    def test_rejects_empty_fields_without_side_effects(
        self, resource: Resource, missing: tuple[str, ...]
    ) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="redisClient", name="cache", handle="redis://cache"))
        before = registry.snapshot()

        accepted, error = registry.register(resource)

        assert accepted is False
        assert isinstance(error, ResourceValidationError)
        assert error.fields == missing
        assert registry.snapshot() == before
        assert registry.critical_names == []

    def test_rejects_unknown_kind(self) -> None:
        registry = ResourceRegistry()

        accepted, error = registry.register(
            Resource(type="mongoClient", name="docs", handle="mongodb://docs", critical=True)
        )

        assert accepted is False
        assert error is not None
        assert error.fields == ("type",)
        assert len(registry) == 0
        assert not registry.is_critical("docs")

    def test_accepts_enum_member_as_type(self) -> None:
        registry = ResourceRegistry()

        accepted, _ = registry.register(
            Resource(type=ResourceKind.POSTGRES_CLIENT, name="db", handle="postgres://db")
        )

        assert accepted is True
        assert ("postgresPromiseClient", "db") in registry

    def test_reregistering_overwrites_handle_and_keeps_position(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="serviceUrl", name="a", handle="http://a-old"))
        registry.register(Resource(type="serviceUrl", name="b", handle="http://b"))
        registry.register(Resource(type="serviceUrl", name="a", handle="http://a-new"))

        assert registry.snapshot() == {
            ResourceKind.SERVICE_URL: {"a": "http://a-new", "b": "http://b"}
        }
        assert list(registry.snapshot()[ResourceKind.SERVICE_URL]) == ["a", "b"]
        assert len(registry) == 2


class TestCriticalNames:
    def test_critical_names_allow_duplicates(self) -> None:
        registry = ResourceRegistry()
        resource = Resource(type="serviceUrl", name="graphql", handle="uri", critical=True)
        registry.register(resource)
        registry.register(resource)

        assert registry.critical_names == ["graphql", "graphql"]
        assert registry.is_critical("graphql")

    def test_non_critical_resources_are_not_tracked(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="redisClient", name="cache", handle="redis://cache"))

        assert registry.critical_names == []
        assert not registry.is_critical("cache")

    def test_critical_flag_is_not_scoped_by_kind(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="serviceUrl", name="shared", handle="uri", critical=True))
        registry.register(Resource(type="redisClient", name="shared", handle="redis://shared"))

        assert registry.is_critical("shared")


class TestReads:
    def test_snapshot_is_independent_of_later_registrations(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="serviceUrl", name="a", handle="http://a"))

        snapshot = registry.snapshot()
        registry.register(Resource(type="serviceUrl", name="b", handle="http://b"))
        snapshot[ResourceKind.SERVICE_URL]["c"] = "http://c"

        assert snapshot[ResourceKind.SERVICE_URL] == {"a": "http://a", "c": "http://c"}
        assert registry.snapshot()[ResourceKind.SERVICE_URL] == {"a": "http://a", "b": "http://b"}

    def test_iteration_follows_kind_then_name_order(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="redisClient", name="cache", handle="redis://cache"))
        registry.register(Resource(type="serviceUrl", name="api", handle="http://api"))
        registry.register(Resource(type="redisClient", name="sessions", handle="redis://sessions"))

        assert list(registry) == [
            (ResourceKind.REDIS_CLIENT, "cache", "redis://cache"),
            (ResourceKind.REDIS_CLIENT, "sessions", "redis://sessions"),
            (ResourceKind.SERVICE_URL, "api", "http://api"),
        ]

    def test_contains_ignores_malformed_keys(self) -> None:
        registry = ResourceRegistry()
        registry.register(Resource(type="serviceUrl", name="api", handle="http://api"))

        assert ("serviceUrl", "api") in registry
        assert ("unknown", "api") not in registry
        assert "api" not in registry

    def test_concurrent_registration_keeps_every_entry(self) -> None:
        registry = ResourceRegistry()

        def _register(offset: int) -> None:
            for index in range(50):
                registry.register(
                    Resource(
                        type="serviceUrl",
                        name=f"svc-{offset}-{index}",
                        handle="http://svc",
                        critical=index % 2 == 0,
                    )
                )

        threads = [threading.Thread(target=_register, args=(offset,)) for offset in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 200
        assert len(registry.critical_names) == 100
