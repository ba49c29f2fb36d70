from __future__ import annotations

from typing import Optional, Protocol

from signup.domain.entities import CreateUserResult, NewUser, PendingUser


class UserDirectoryPort(Protocol):
    async def create_user(self, candidate: NewUser) -> CreateUserResult:
        """
        Insert an unverified, inactive user.
        Return Created(user), or Conflict(existing) when the email is already
        registered in the candidate's zone. Never creates a second record.
        """

    async def query_by_email(self, email: str, zone_id: str) -> Optional[PendingUser]:
        """Return the zone's user for this email, or None."""

    async def verify_user(self, user_id: str) -> Optional[PendingUser]:
        """Mark the user verified and active. Return None if the user is gone."""
