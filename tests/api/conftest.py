import pytest
from fastapi.testclient import TestClient

from signup.domain.entities import TenantContext
from signup.main import create_app
from signup.presentation.dependencies import (
    get_client_registry,
    get_code_store,
    get_notifications,
    get_password_validator,
    get_user_directory,
    get_zone_registry,
)
from tests.fakes import (
    FakeClientRegistry,
    FakeCodeStore,
    FakeNotifications,
    FakePasswordValidator,
    FakeUserDirectory,
    FakeZoneRegistry,
)


class Deps:
    def __init__(self):
        self.users = FakeUserDirectory()
        self.code_store = FakeCodeStore()
        self.notifications = FakeNotifications()
        self.password_validator = FakePasswordValidator()
        self.clients = FakeClientRegistry()
        self.zones = FakeZoneRegistry(
            {
                "test": TenantContext(
                    zone_id="test-zone-id", name="The Test Zone", subdomain="test"
                )
            }
        )


@pytest.fixture()
def app_and_deps():
    app = create_app()
    deps = Deps()

    app.dependency_overrides[get_user_directory] = lambda: deps.users
    app.dependency_overrides[get_code_store] = lambda: deps.code_store
    app.dependency_overrides[get_notifications] = lambda: deps.notifications
    app.dependency_overrides[get_password_validator] = lambda: deps.password_validator
    app.dependency_overrides[get_client_registry] = lambda: deps.clients
    app.dependency_overrides[get_zone_registry] = lambda: deps.zones

    try:
        yield app, deps
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
