import pytest

from signup.application.activation_workflow import ActivationWorkflow
from signup.domain.entities import TenantContext
from tests.fakes import (
    FakeClientRegistry,
    FakeCodeStore,
    FakeNotifications,
    FakePasswordValidator,
    FakeUserDirectory,
)


@pytest.fixture()
def users():
    return FakeUserDirectory()


@pytest.fixture()
def code_store():
    return FakeCodeStore()


@pytest.fixture()
def notifications():
    return FakeNotifications()


@pytest.fixture()
def password_validator():
    return FakePasswordValidator()


@pytest.fixture()
def clients():
    return FakeClientRegistry()


@pytest.fixture()
def default_tenant():
    return TenantContext(zone_id="uaa", name="uaa", is_default=True)


@pytest.fixture()
def zone_tenant():
    return TenantContext(zone_id="test-zone-id", name="The Test Zone", subdomain="test")


@pytest.fixture()
def make_workflow(users, code_store, notifications, password_validator, clients):
    """
    Build a workflow over the shared fakes. Keyword arguments override
    collaborators or settings (brand, public_host, ...).
    """

    def _make(**overrides) -> ActivationWorkflow:
        params = dict(
            users=users,
            code_store=code_store,
            notifications=notifications,
            password_validator=password_validator,
            clients=clients,
            brand="pivotal",
            public_scheme="http",
            public_host="uaa.example.com",
            code_ttl_seconds=3600,
        )
        params.update(overrides)
        return ActivationWorkflow(**params)

    return _make
