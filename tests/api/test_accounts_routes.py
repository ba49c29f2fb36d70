from signup.domain.entities import MessageKind
from signup.domain.errors import PasswordPolicyViolation
from signup.presentation.dependencies import get_notifications
from tests.fakes import FakeFailingNotifications, FakePasswordValidator


def test_create_account_happy_path(client, app_and_deps):
    _, deps = app_and_deps

    response = client.post(
        "/v1/accounts",
        json={"email": "User@Example.com", "password": "s3cret-password", "client_id": "login"},
    )

    assert response.status_code == 202
    assert response.json() == {"status": "accepted"}
    assert deps.users.create_calls[0].email == "user@example.com"
    assert deps.users.create_calls[0].zone_id == "uaa"
    assert deps.code_store.generated[0].payload == {
        "user_id": "newly-created-user-id",
        "client_id": "login",
        "zone_id": "uaa",
    }
    call = deps.notifications.calls[0]
    assert call["kind"] is MessageKind.CREATE_ACCOUNT_CONFIRMATION
    assert "https://uaa.example.com/verify_user?code=the_secret_code" in call["body"]


def test_create_account_in_zone_uses_zone_host(client, app_and_deps):
    _, deps = app_and_deps

    response = client.post(
        "/v1/accounts",
        json={"email": "user@example.com", "password": "s3cret-password"},
        headers={"host": "test.uaa.example.com"},
    )

    assert response.status_code == 202
    assert deps.users.create_calls[0].zone_id == "test-zone-id"
    body = deps.notifications.calls[0]["body"]
    assert "https://test.uaa.example.com/verify_user?code=the_secret_code" in body
    assert "The Test Zone" in body


def test_create_account_in_unknown_zone(client, app_and_deps):
    _, deps = app_and_deps

    response = client.post(
        "/v1/accounts",
        json={"email": "user@example.com", "password": "s3cret-password"},
        headers={"host": "nope.uaa.example.com"},
    )

    assert response.status_code == 404
    assert deps.users.create_calls == []


def test_create_account_password_policy_violation(client, app_and_deps):
    _, deps = app_and_deps
    deps.password_validator = FakePasswordValidator(
        PasswordPolicyViolation("Password must contain at least 8 characters.")
    )

    response = client.post(
        "/v1/accounts", json={"email": "user@example.com", "password": "x"}
    )

    assert response.status_code == 422
    assert response.json() == {"detail": "Password must contain at least 8 characters."}
    assert deps.users.create_calls == []


def test_create_account_for_verified_email(client, app_and_deps):
    _, deps = app_and_deps
    deps.users.seed("user@example.com", verified=True)

    response = client.post(
        "/v1/accounts", json={"email": "user@example.com", "password": "s3cret-password"}
    )

    assert response.status_code == 409
    assert deps.notifications.calls == []


def test_create_account_invalid_email(client):
    response = client.post("/v1/accounts", json={"email": "not-an-email", "password": "pw"})
    assert response.status_code == 422


def test_create_account_mail_failure_is_500(client, app_and_deps):
    app, deps = app_and_deps
    app.dependency_overrides[get_notifications] = lambda: FakeFailingNotifications()

    response = client.post(
        "/v1/accounts", json={"email": "user@example.com", "password": "s3cret-password"}
    )

    assert response.status_code == 500
    assert len(deps.users.users) == 1


def test_resend_verification_code(client, app_and_deps):
    _, deps = app_and_deps
    user = deps.users.seed("user@example.com")

    response = client.post(
        "/v1/accounts/verification-code",
        json={"email": "user@example.com", "client_id": "login"},
    )

    assert response.status_code == 202
    assert deps.code_store.generated[0].payload == {"user_id": user.id, "client_id": "login", "zone_id": "uaa"}
    assert len(deps.notifications.calls) == 1


def test_resend_verification_code_without_pending_account(client, app_and_deps):
    _, deps = app_and_deps
    deps.users.seed("done@example.com", verified=True)

    for email in ("nobody@example.com", "done@example.com"):
        response = client.post("/v1/accounts/verification-code", json={"email": email})
        assert response.status_code == 404

    assert deps.notifications.calls == []


def test_code_status_does_not_consume(client, app_and_deps):
    _, deps = app_and_deps
    client.post("/v1/accounts", json={"email": "user@example.com", "password": "s3cret-password"})

    assert client.get("/v1/accounts/codes/the_secret_code").json() == {"valid": True}
    assert client.get("/v1/accounts/codes/the_secret_code").json() == {"valid": True}
    assert client.get("/v1/accounts/codes/unknown").json() == {"valid": False}
    assert "the_secret_code" in deps.code_store.codes


def test_code_status_is_scoped_to_zone(client, app_and_deps):
    _, deps = app_and_deps
    client.post(
        "/v1/accounts",
        json={"email": "user@example.com", "password": "s3cret-password"},
        headers={"host": "test.uaa.example.com"},
    )

    zone = client.get("/v1/accounts/codes/the_secret_code", headers={"host": "test.uaa.example.com"})
    default = client.get("/v1/accounts/codes/the_secret_code")

    assert zone.json() == {"valid": True}
    assert default.json() == {"valid": False}
    assert "the_secret_code" in deps.code_store.codes
