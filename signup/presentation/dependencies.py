from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from signup.application.activation_workflow import ActivationWorkflow
from signup.domain.entities import TenantContext
from signup.domain.ports.client_registry import ClientRegistryPort
from signup.domain.ports.code_store import CodeStorePort
from signup.domain.ports.notification_port import NotificationPort
from signup.domain.ports.password_validator import PasswordValidatorPort
from signup.domain.ports.user_directory import UserDirectoryPort
from signup.domain.ports.zone_registry import ZoneRegistryPort
from signup.infrastructure.db.clients_repo import PgClientRegistry
from signup.infrastructure.db.pool import get_pool
from signup.infrastructure.db.users_repo import PgUserDirectory
from signup.infrastructure.db.zones_repo import PgZoneRegistry
from signup.infrastructure.redis_cache.code_store import RedisCodeStore
from signup.infrastructure.redis_cache.pool import get_redis
from signup.infrastructure.security.password import hash_password
from signup.infrastructure.security.password_policy import PasswordPolicy
from signup.settings import get_settings


def get_code_store() -> CodeStorePort:
    return RedisCodeStore(get_redis())


def get_user_directory() -> UserDirectoryPort:
    return PgUserDirectory(get_pool(), hash_password=hash_password)


def get_client_registry() -> ClientRegistryPort:
    return PgClientRegistry(get_pool())


def get_zone_registry() -> ZoneRegistryPort:
    return PgZoneRegistry(get_pool())


def get_password_validator() -> PasswordValidatorPort:
    return PasswordPolicy.from_settings(get_settings())


def get_notifications(request: Request) -> NotificationPort:
    # This is set in signup.main lifespan()
    return request.app.state.notification_adapter


def default_tenant() -> TenantContext:
    settings = get_settings()
    return TenantContext(
        zone_id=settings.default_zone_id,
        name=settings.default_zone_name,
        is_default=True,
    )


async def get_tenant(
    request: Request,
    zones: Annotated[ZoneRegistryPort, Depends(get_zone_registry)],
) -> TenantContext:
    """
    Resolve the identity zone from the Host header:
    `<subdomain>.<public_host>` selects that zone, anything else the default one.
    """
    public_host = get_settings().public_host.lower()
    host = (request.headers.get("host") or "").split(":", 1)[0].strip().lower()
    suffix = f".{public_host}"
    if not host.endswith(suffix):
        return default_tenant()

    tenant = await zones.get_by_subdomain(host[: -len(suffix)])
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="unknown identity zone"
        )
    return tenant


def get_workflow(
    users: Annotated[UserDirectoryPort, Depends(get_user_directory)],
    code_store: Annotated[CodeStorePort, Depends(get_code_store)],
    notifications: Annotated[NotificationPort, Depends(get_notifications)],
    password_validator: Annotated[PasswordValidatorPort, Depends(get_password_validator)],
    clients: Annotated[ClientRegistryPort, Depends(get_client_registry)],
) -> ActivationWorkflow:
    settings = get_settings()
    return ActivationWorkflow(
        users=users,
        code_store=code_store,
        notifications=notifications,
        password_validator=password_validator,
        clients=clients,
        brand=settings.brand,
        public_scheme=settings.public_scheme,
        public_host=settings.public_host,
        code_ttl_seconds=settings.code_ttl_seconds,
    )
