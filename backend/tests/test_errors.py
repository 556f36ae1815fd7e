"""
Tests for the error taxonomy and its HTTP mapping.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from pos_api.core.errors import ERROR_STATUS, register_exception_handlers, status_for
from pos_shared.utils.exceptions import (
    AlreadyAssignedError,
    AppError,
    DuplicateEmailError,
    DuplicateNameError,
    ErrorKind,
    ForbiddenError,
    InternalError,
    NotAssignedError,
    NotFoundError,
    RateLimitedError,
    TableOccupiedError,
    UnauthenticatedError,
    UnavailableError,
    ValidationError,
)


ALL_ERRORS = [
    (UnauthenticatedError(), 401),
    (ForbiddenError(), 403),
    (NotFoundError("Table", "t-1"), 404),
    (DuplicateNameError("T1"), 400),
    (DuplicateEmailError(), 400),
    (AlreadyAssignedError("t-1"), 400),
    (NotAssignedError("t-1"), 400),
    (TableOccupiedError("t-1"), 400),
    (ValidationError(), 400),
    (RateLimitedError(retry_after=60), 429),
    (UnavailableError(), 503),
    (InternalError(), 500),
]


class TestErrorMapping:

    def test_every_kind_has_a_status(self):
        assert set(ERROR_STATUS) == set(ErrorKind)

    def test_every_kind_has_an_error_class(self):
        assert {error.kind for error, _ in ALL_ERRORS} == set(ErrorKind)

    @pytest.mark.parametrize("error,expected", ALL_ERRORS, ids=lambda v: getattr(v, "kind", v))
    def test_status_on_read(self, error, expected):
        assert status_for(error.kind, "GET") == expected

    def test_not_found_on_mutation_is_400(self):
        for method in ("POST", "PUT", "DELETE"):
            assert status_for(ErrorKind.NOT_FOUND, method) == 400

    def test_other_kinds_ignore_method(self):
        assert status_for(ErrorKind.UNAUTHENTICATED, "POST") == 401
        assert status_for(ErrorKind.ALREADY_ASSIGNED, "GET") == 400


class TestErrorDetails:

    def test_not_found_message_names_entity(self):
        assert NotFoundError("Table", "t-1").detail == "Table not found"

    def test_log_context_not_in_detail(self):
        error = UnauthenticatedError(reason="token expired")
        assert error.detail == "Unauthorized"
        assert error.log_context == {"reason": "token expired"}

    def test_errors_are_app_errors(self):
        assert all(isinstance(error, AppError) for error, _ in ALL_ERRORS)


class TestExceptionHandlers:

    @pytest.fixture
    def app(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/already-assigned")
        def already_assigned():
            raise AlreadyAssignedError("t-1")

        @app.post("/missing")
        def missing():
            raise NotFoundError("Table", "t-1")

        @app.get("/store-down")
        def store_down():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        @app.get("/slow-down")
        def slow_down():
            raise RateLimitedError(retry_after=60)

        @app.get("/boom")
        def boom():
            raise RuntimeError("secret internals")

        return app

    def test_domain_error_envelope(self, app):
        response = TestClient(app).get("/already-assigned")
        assert response.status_code == 400
        assert response.json() == {"error": "Table already assigned"}

    def test_not_found_on_post(self, app):
        response = TestClient(app).post("/missing")
        assert response.status_code == 400
        assert response.json() == {"error": "Table not found"}

    def test_store_unavailable(self, app):
        response = TestClient(app).get("/store-down")
        assert response.status_code == 503
        assert response.json() == {"error": "Service temporarily unavailable"}

    def test_rate_limited_carries_retry_after(self, app):
        response = TestClient(app).get("/slow-down")
        assert response.status_code == 429
        assert response.json() == {"error": "Too many requests"}
        assert response.headers["Retry-After"] == "60"

    def test_unexpected_error_is_generic_500(self, app):
        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "secret" not in response.text
