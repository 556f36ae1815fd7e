"""
Tests that an app runs on the Settings it was built with: its database and
its own rate limiter.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from pos_api.main import create_app
from pos_api.repositories import UserRepository
from pos_shared.infrastructure.db import get_db, get_engine
from tests.conftest import TEST_PASSWORD, make_settings


REGISTER_BODY = {"name": "New Staff", "email": "new@test.com", "password": "longenough"}


def _limited_app(db_session, **overrides):
    app = create_app(make_settings(rate_limit_enabled=True, **overrides))
    app.dependency_overrides[get_db] = lambda: db_session
    return app


# =============================================================================
# Database binding
# =============================================================================

class TestAppDatabase:
    """No dependency override here: requests must reach settings.database_url."""

    def test_requests_use_the_configured_database(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'app.db'}"
        app = create_app(make_settings(database_url=url))

        try:
            with TestClient(app) as client:
                register = client.post("/auth/register", json=REGISTER_BODY)
                login = client.post(
                    "/auth/login", json={"email": "new@test.com", "password": "longenough"}
                )

            assert register.status_code == 200, register.json()
            assert login.status_code == 200

            with Session(bind=get_engine(url)) as db:
                assert UserRepository(db).find_by_email("new@test.com") is not None
        finally:
            get_engine(url).dispose()

    def test_apps_do_not_share_databases(self, tmp_path):
        first_url = f"sqlite:///{tmp_path / 'first.db'}"
        second_url = f"sqlite:///{tmp_path / 'second.db'}"

        try:
            with TestClient(create_app(make_settings(database_url=first_url))) as first:
                assert first.post("/auth/register", json=REGISTER_BODY).status_code == 200

            with TestClient(create_app(make_settings(database_url=second_url))) as second:
                response = second.post(
                    "/auth/login", json={"email": "new@test.com", "password": "longenough"}
                )
                assert response.status_code == 401
        finally:
            get_engine(first_url).dispose()
            get_engine(second_url).dispose()


# =============================================================================
# Rate limiting
# =============================================================================

class TestRateLimiting:

    def test_wrong_access_codes_are_counted(self, db_session):
        with TestClient(_limited_app(db_session)) as client:
            statuses = [
                client.get("/customer/tables", headers={"AccessCode": f"guess-{i}"}).status_code
                for i in range(30)
            ]
            blocked = client.get("/customer/tables", headers={"AccessCode": "guess-30"})

        assert set(statuses) == {401}
        assert blocked.status_code == 429
        assert blocked.json() == {"error": "Too many requests"}
        assert blocked.headers["Retry-After"] == "60"

    def test_limit_also_blocks_a_valid_code(self, db_session, seed_occupied_table):
        headers = {"AccessCode": seed_occupied_table.access_code}
        with TestClient(_limited_app(db_session)) as client:
            for i in range(30):
                client.get("/customer/tables", headers={"AccessCode": f"guess-{i}"})
            response = client.get("/customer/tables", headers=headers)

        assert response.status_code == 429

    def test_failed_logins_are_counted(self, db_session, seed_manager):
        wrong = {"email": "manager@test.com", "password": "wrongpassword"}
        right = {"email": "manager@test.com", "password": TEST_PASSWORD}

        with TestClient(_limited_app(db_session)) as client:
            statuses = [client.post("/auth/login", json=wrong).status_code for _ in range(5)]
            blocked = client.post("/auth/login", json=right)

        assert statuses == [401] * 5
        assert blocked.status_code == 429

    def test_login_and_customer_limits_are_separate(self, db_session):
        wrong = {"email": "nobody@test.com", "password": "wrongpassword"}
        with TestClient(_limited_app(db_session)) as client:
            for _ in range(6):
                client.post("/auth/login", json=wrong)
            response = client.get("/customer/tables", headers={"AccessCode": "guess"})

        assert response.status_code == 401

    def test_each_app_has_its_own_limiter(self, db_session):
        exhausted = _limited_app(db_session)
        fresh = _limited_app(db_session)
        unlimited = create_app(make_settings(rate_limit_enabled=False))
        unlimited.dependency_overrides[get_db] = lambda: db_session

        with TestClient(exhausted) as client:
            for i in range(31):
                client.get("/customer/tables", headers={"AccessCode": f"guess-{i}"})
            assert client.get("/customer/tables", headers={"AccessCode": "x"}).status_code == 429

        assert exhausted.state.limiter is not fresh.state.limiter
        assert unlimited.state.limiter.enabled is False

        with TestClient(fresh) as client:
            assert client.get("/customer/tables", headers={"AccessCode": "x"}).status_code == 401

        with TestClient(unlimited) as client:
            statuses = {
                client.get("/customer/tables", headers={"AccessCode": f"guess-{i}"}).status_code
                for i in range(40)
            }
        assert statuses == {401}

    @pytest.mark.parametrize("path", ["/health", "/"])
    def test_public_health_is_not_limited(self, db_session, path):
        with TestClient(_limited_app(db_session)) as client:
            statuses = {client.get(path).status_code for _ in range(40)}
        assert statuses == {200}
