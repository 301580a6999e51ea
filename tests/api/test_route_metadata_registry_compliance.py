"""Route Registry Compliance Tests.

Self-enforcing tests that keep ROUTE_REGISTRY, the generated FastAPI routes
and the OpenAPI schema in agreement.

Test categories:
1. Registry integrity - unique (method, path) and operation ids
2. Generation - every entry became exactly one route on the app
3. Auth - every organisation route requires the principal
4. OpenAPI - error responses documented as ProblemDetails
"""

import pytest
from fastapi.routing import APIRoute

from src.core.config import settings
from src.main import app
from src.presentation.routers.api.v1.routes.generator import _build_dependencies
from src.presentation.routers.api.v1.routes.metadata import (
    AuthLevel,
    AuthPolicy,
    HTTPMethod,
    IdempotencyLevel,
    RouteMetadata,
)
from src.presentation.routers.api.v1.routes.registry import ROUTE_REGISTRY
from src.schemas import OrganisationResponse


def _app_routes() -> dict[tuple[str, str], APIRoute]:
    routes: dict[tuple[str, str], APIRoute] = {}
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith(settings.api_v1_prefix):
            for method in route.methods:
                routes[(method, route.path)] = route
    return routes


@pytest.mark.api
class TestRegistryIntegrity:
    def test_method_path_pairs_unique(self):
        keys = [(m.method, m.path) for m in ROUTE_REGISTRY]

        assert len(keys) == len(set(keys))

    def test_operation_ids_unique_and_named_after_handler(self):
        ids = [m.operation_id for m in ROUTE_REGISTRY]

        assert len(ids) == len(set(ids))
        for meta in ROUTE_REGISTRY:
            assert meta.operation_id == meta.handler.__name__

    def test_idempotency_matches_method(self):
        for meta in ROUTE_REGISTRY:
            if meta.method == HTTPMethod.GET:
                assert meta.idempotency == IdempotencyLevel.SAFE, meta.path
            elif meta.method == HTTPMethod.POST:
                assert meta.idempotency == IdempotencyLevel.NON_IDEMPOTENT, meta.path

    def test_delete_routes_return_204(self):
        for meta in ROUTE_REGISTRY:
            if meta.method == HTTPMethod.DELETE:
                assert meta.status_code == 204, meta.path


@pytest.mark.api
class TestGeneratedRoutes:
    def test_every_entry_is_registered(self):
        routes = _app_routes()

        for meta in ROUTE_REGISTRY:
            key = (meta.method.value, f"{settings.api_v1_prefix}{meta.path}")
            assert key in routes, f"Route not generated: {key}"
            assert routes[key].status_code == meta.status_code

    def test_no_unregistered_v1_routes(self):
        expected = {
            (m.method.value, f"{settings.api_v1_prefix}{m.path}") for m in ROUTE_REGISTRY
        }

        assert set(_app_routes()) == expected

    def test_every_route_requires_principal(self):
        for meta in ROUTE_REGISTRY:
            assert meta.auth_policy.level == AuthLevel.PRINCIPAL, meta.path

    def test_public_policy_adds_no_dependency(self):
        assert _build_dependencies(AuthPolicy(level=AuthLevel.PUBLIC)) == []
        assert len(_build_dependencies(AuthPolicy(level=AuthLevel.PRINCIPAL))) == 1


@pytest.mark.api
class TestOpenAPI:
    def test_errors_documented_as_problem_details(self):
        schema = app.openapi()

        for meta in ROUTE_REGISTRY:
            operation = schema["paths"][f"{settings.api_v1_prefix}{meta.path}"][
                meta.method.value.lower()
            ]
            for error in meta.errors or []:
                response = operation["responses"][str(error.status)]
                ref = response["content"]["application/json"]["schema"]["$ref"]
                assert ref.endswith("/ProblemDetails")

    def test_principal_routes_document_401(self):
        schema = app.openapi()

        for meta in ROUTE_REGISTRY:
            operation = schema["paths"][f"{settings.api_v1_prefix}{meta.path}"][
                meta.method.value.lower()
            ]
            assert "401" in operation["responses"], meta.path


@pytest.mark.api
class TestRouteMetadata:
    async def _endpoint(self):
        return None

    def test_operation_id_defaults_to_handler_name(self):
        async def list_widgets():
            return []

        meta = RouteMetadata(
            method=HTTPMethod.GET,
            path="/widgets",
            handler=list_widgets,
            tags=["Widgets"],
            summary="List widgets",
            idempotency=IdempotencyLevel.SAFE,
            auth_policy=AuthPolicy(level=AuthLevel.PUBLIC),
        )

        assert meta.operation_id == "list_widgets"

    def test_204_with_response_model_is_rejected(self):
        with pytest.raises(ValueError, match="204"):
            RouteMetadata(
                method=HTTPMethod.DELETE,
                path="/widgets/{id}",
                handler=self._endpoint,
                tags=["Widgets"],
                summary="Delete widget",
                response_model=OrganisationResponse,
                status_code=204,
                idempotency=IdempotencyLevel.IDEMPOTENT,
                auth_policy=AuthPolicy(level=AuthLevel.PRINCIPAL),
            )
