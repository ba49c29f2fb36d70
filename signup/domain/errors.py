class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class PasswordPolicyViolation(DomainError):
    """The candidate password does not satisfy the configured policy."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class DuplicateAccount(DomainError):
    """A verified account already owns this email address."""

    pass


class InvalidOrExpiredCode(DomainError):
    """Activation code never existed, expired, or was already used."""

    pass


class UserNotFound(DomainError):
    """No pending (unverified) user matches the lookup criteria."""

    pass
