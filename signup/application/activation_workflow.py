"""
Account creation through email verification.

Per email address (and zone) an account is conceptually in one of three
states, derived from the user directory rather than stored:

    NoAccount          -> begin_activation creates a pending user and mails a code
    PendingUnverified  -> begin_activation / resend mail a fresh code for the same user
    Verified           -> begin_activation fails with DuplicateAccount

complete_activation redeems a code (at most once) and verifies the user it
names, and only on the zone it was issued in. Nothing here is transactional
across collaborators: a mail failure leaves the created user in place (a
later resend recovers it), and a directory failure after redemption leaves
the code consumed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import signup.domain.services as domain_services
from signup.application.messages import render_activation_message
from signup.domain.branding import resolve_branding
from signup.domain.entities import (
    ActivationResult,
    Conflict,
    MessageKind,
    NewUser,
    PendingUser,
    TenantContext,
    normalize_email,
)
from signup.domain.errors import DuplicateAccount, InvalidOrExpiredCode, UserNotFound
from signup.domain.ports.client_registry import ClientRegistryPort
from signup.domain.ports.code_store import CodeStorePort
from signup.domain.ports.notification_port import NotificationPort
from signup.domain.ports.password_validator import PasswordValidatorPort
from signup.domain.ports.user_directory import UserDirectoryPort

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ActivationWorkflow:
    users: UserDirectoryPort
    code_store: CodeStorePort
    notifications: NotificationPort
    password_validator: PasswordValidatorPort
    clients: ClientRegistryPort
    brand: str = "oss"
    public_scheme: str = "https"
    public_host: str = "uaa.example.com"
    code_ttl_seconds: int = 3600
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def begin_activation(
        self,
        tenant: TenantContext,
        email: str,
        password: str,
        client_id: Optional[str] = None,
    ) -> None:
        """
        Register `email` (or reuse its pending record) and mail an activation code.

        Raises:
            PasswordPolicyViolation: before anything is created.
            DuplicateAccount: the email already belongs to a verified user.
        """
        self.password_validator.validate(password)

        normalized_email = normalize_email(email)
        result = await self.users.create_user(
            NewUser(zone_id=tenant.zone_id, email=normalized_email, password=password)
        )

        if isinstance(result, Conflict):
            existing = result.existing
            if existing.verified:
                logger.info(
                    "registration rejected: account already verified",
                    extra={"user_id": existing.id, "zone_id": tenant.zone_id},
                )
                raise DuplicateAccount(normalized_email)
            logger.info(
                "registration for pending account; issuing a new code",
                extra={"user_id": existing.id, "zone_id": tenant.zone_id},
            )
            user = existing
        else:
            user = result.user
            logger.info(
                "pending account created",
                extra={"user_id": user.id, "zone_id": tenant.zone_id},
            )

        await self._issue_code(tenant, user, client_id)

    async def resend_verification_code(
        self,
        tenant: TenantContext,
        email: str,
        client_id: Optional[str] = None,
    ) -> None:
        """Mail a new code to a pending account. Earlier codes stay valid."""
        normalized_email = normalize_email(email)
        user = await self.users.query_by_email(normalized_email, tenant.zone_id)
        if user is None or user.verified:
            raise UserNotFound(normalized_email)

        await self._issue_code(tenant, user, client_id)

    async def complete_activation(
        self, tenant: TenantContext, code: str
    ) -> ActivationResult:
        payload = await self.code_store.redeem(code) if code else None
        if not payload or not payload.get("user_id"):
            logger.warning(
                "activation code rejected", extra={"zone_id": tenant.zone_id}
            )
            raise InvalidOrExpiredCode()
        if payload.get("zone_id") != tenant.zone_id:
            logger.warning(
                "activation code issued in another zone",
                extra={"zone_id": tenant.zone_id, "code_zone_id": payload.get("zone_id")},
            )
            raise InvalidOrExpiredCode()

        user = await self.users.verify_user(str(payload["user_id"]))
        if user is None:
            logger.warning(
                "activation code names a missing user",
                extra={"user_id": payload["user_id"], "zone_id": tenant.zone_id},
            )
            raise InvalidOrExpiredCode()

        redirect_url = None
        client_id = payload.get("client_id")
        if client_id:
            client = await self.clients.lookup(str(client_id), tenant.zone_id)
            if client is not None:
                redirect_url = client.signup_redirect_url

        logger.info(
            "account activated",
            extra={"user_id": user.id, "zone_id": tenant.zone_id},
        )
        return ActivationResult(
            user_id=user.id, email=user.email, redirect_url=redirect_url
        )

    async def _issue_code(
        self,
        tenant: TenantContext,
        user: PendingUser,
        client_id: Optional[str],
    ) -> None:
        expires_at = self.clock() + timedelta(seconds=self.code_ttl_seconds)
        activation = await self.code_store.generate(
            {"user_id": user.id, "client_id": client_id, "zone_id": tenant.zone_id},
            expires_at,
        )

        branding = resolve_branding(tenant, self.brand)
        link = domain_services.build_activation_link(
            self.public_scheme, tenant.host(self.public_host), activation.code, user.email
        )
        body = render_activation_message(branding, email=user.email, link=link)

        await self.notifications.send(
            to=user.email,
            kind=MessageKind.CREATE_ACCOUNT_CONFIRMATION,
            subject=branding.subject,
            body=body,
        )
        logger.info(
            "activation code sent",
            extra={
                "user_id": user.id,
                "zone_id": tenant.zone_id,
                "expires_at": expires_at.isoformat(),
            },
        )
