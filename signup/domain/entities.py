from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

SIGNUP_REDIRECT_URL = "signup_redirect_url"


class MessageKind(str, Enum):
    CREATE_ACCOUNT_CONFIRMATION = "create-account-confirmation"


def normalize_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValueError("email is required")
    return normalized


@dataclass
class PendingUser:
    id: str
    zone_id: str
    email: str
    username: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    origin: str = "uaa"
    verified: bool = False
    active: bool = False

    def __post_init__(self):
        self.email = normalize_email(self.email)
        if self.username is None:
            self.username = self.email


@dataclass
class NewUser:
    """Candidate record handed to the directory; the password is still plain text."""

    zone_id: str
    email: str
    password: str
    given_name: str | None = None
    family_name: str | None = None
    origin: str = "uaa"

    def __post_init__(self):
        self.email = normalize_email(self.email)


@dataclass(frozen=True)
class ActivationCode:
    code: str
    expires_at: datetime
    data: str

    def is_valid_at(self, now: datetime) -> bool:
        return now < self.expires_at

    @property
    def payload(self) -> dict[str, Any]:
        return json.loads(self.data)


@dataclass(frozen=True)
class TenantContext:
    """
    Identity zone the request is scoped to.

    The default zone is served on the bare public host, every other zone on
    `<subdomain>.<public host>`.
    """

    zone_id: str
    name: str
    subdomain: str = ""
    is_default: bool = False

    def host(self, public_host: str) -> str:
        if self.is_default or not self.subdomain:
            return public_host
        return f"{self.subdomain}.{public_host}"


@dataclass(frozen=True)
class ClientConfig:
    client_id: str
    zone_id: str
    additional_information: dict[str, Any] = field(default_factory=dict)

    @property
    def signup_redirect_url(self) -> Optional[str]:
        url = self.additional_information.get(SIGNUP_REDIRECT_URL)
        return str(url) if url else None


@dataclass(frozen=True)
class ActivationResult:
    user_id: str
    email: str
    redirect_url: str | None = None


@dataclass(frozen=True)
class Created:
    user: PendingUser


@dataclass(frozen=True)
class Conflict:
    existing: PendingUser


CreateUserResult = Created | Conflict
