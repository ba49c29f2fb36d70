from typing import Protocol


class PasswordValidatorPort(Protocol):
    def validate(self, password: str) -> None:
        """Raise PasswordPolicyViolation(reason) if the password is not acceptable."""
