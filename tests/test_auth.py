import logging
from datetime import timedelta

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME, TEST_SECRET
from users.schema import TokenClaims
from users import security
from users.dependencies import require_auth
from users.security import TokenService, utcnow

PROTECTED = [
    ("get", "/api/projects"),
    ("put", "/api/projects/1"),
    ("patch", "/api/projects/1/status"),
    ("delete", "/api/projects/1"),
]


def test_login_returns_token_for_valid_credentials(client, admin, token_service):
    response = client.post(
        "/api/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["username"] == ADMIN_USERNAME
    assert "passwordHash" not in body and "password_hash" not in body

    claims = token_service.verify(body["token"])
    assert claims.id == admin.id
    assert claims.username == ADMIN_USERNAME
    assert claims.role == "admin"


def test_login_failures_are_indistinguishable(client, admin):
    wrong_password = client.post(
        "/api/login", json={"username": ADMIN_USERNAME, "password": "nope"}
    )
    unknown_user = client.post(
        "/api/login", json={"username": "ghost", "password": "nope"}
    )
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"message": "Invalid credentials"}


def test_username_lookup_is_case_sensitive(client, admin):
    response = client.post(
        "/api/login",
        json={"username": ADMIN_USERNAME.upper(), "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 401


@pytest.mark.parametrize("method,path", PROTECTED)
def test_protected_endpoints_require_token(client, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.json() == {"message": "No token provided"}


def test_non_bearer_scheme_counts_as_missing_token(client):
    response = client.get("/api/projects", headers={"Authorization": "Basic YWRtaW46YWRtaW4="})
    assert response.status_code == 401
    assert response.json() == {"message": "No token provided"}


@pytest.mark.parametrize("method,path", PROTECTED)
def test_protected_endpoints_reject_malformed_token(client, method, path):
    response = getattr(client, method)(path, headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403
    assert response.json() == {"message": "Token invalid/expired"}


def test_expired_token_is_forbidden(client):
    stale = TokenService(TEST_SECRET, clock=lambda: utcnow() - timedelta(hours=3))
    token = stale.issue(TokenClaims(id=1, username=ADMIN_USERNAME, role="admin"))
    response = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json() == {"message": "Token invalid/expired"}


def test_token_from_another_secret_is_forbidden(client):
    token = TokenService("some-other-secret").issue(
        TokenClaims(id=1, username=ADMIN_USERNAME, role="admin")
    )
    response = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_valid_token_does_not_need_an_account_row(client, token_service):
    # The gate only checks the token; it never touches the database
    token = token_service.issue(TokenClaims(id=42, username="someone", role="admin"))
    response = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == []


def test_public_endpoints_need_no_token(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.post("/api/project-submission", json={}).status_code == 201


def _count_hash_checks(monkeypatch):
    calls = []
    real_verify = security.pwd_context.verify
    real_dummy = security.pwd_context.dummy_verify

    def verify(secret, hash, **kwds):
        calls.append("verify")
        return real_verify(secret, hash, **kwds)

    def dummy_verify(*args, **kwds):
        calls.append("dummy_verify")
        return real_dummy(*args, **kwds)

    monkeypatch.setattr(security.pwd_context, "verify", verify)
    monkeypatch.setattr(security.pwd_context, "dummy_verify", dummy_verify)
    return calls


@pytest.mark.parametrize("username", [ADMIN_USERNAME, "ghost"])
def test_empty_password_still_runs_a_hash_check(client, admin, monkeypatch, username):
    calls = _count_hash_checks(monkeypatch)
    response = client.post("/api/login", json={"username": username, "password": ""})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}
    # Known and unknown users both pay for a bcrypt verification
    assert calls


def test_gate_attaches_claims_to_request(token_service):
    app = FastAPI()
    app.state.token_service = token_service

    @app.get("/whoami")
    def whoami(request: Request, current_user: TokenClaims = Depends(require_auth)):
        assert request.state.user == current_user
        return current_user.model_dump()

    claims = TokenClaims(id=7, username="triage", role="admin")
    with TestClient(app) as client:
        response = client.get(
            "/whoami", headers={"Authorization": f"Bearer {token_service.issue(claims)}"}
        )
    assert response.status_code == 200
    assert response.json() == {"id": 7, "username": "triage", "role": "admin"}


def test_project_handlers_see_the_acting_admin(client, auth_headers, caplog):
    inquiry_id = client.post("/api/project-submission", json={"clientName": "A"}).json()["id"]

    with caplog.at_level(logging.INFO, logger="inquiries.router"):
        client.patch(f"/api/projects/{inquiry_id}/status", json={"status": "Won"}, headers=auth_headers)
        client.delete(f"/api/projects/{inquiry_id}", headers=auth_headers)

    messages = [r.getMessage() for r in caplog.records if r.name == "inquiries.router"]
    assert any(f"'{ADMIN_USERNAME}' set status of inquiry {inquiry_id}" in m for m in messages)
    assert any(f"'{ADMIN_USERNAME}' deleted inquiry {inquiry_id}" in m for m in messages)
