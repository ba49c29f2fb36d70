from __future__ import annotations

import string
from dataclasses import dataclass

from signup.domain.errors import PasswordPolicyViolation
from signup.domain.ports.password_validator import PasswordValidatorPort
from signup.settings import Settings


@dataclass(frozen=True)
class PasswordPolicy(PasswordValidatorPort):
    min_length: int = 8
    max_length: int = 255
    require_uppercase: int = 0
    require_lowercase: int = 0
    require_digit: int = 0
    require_special: int = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordPolicy":
        return cls(
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
            require_uppercase=settings.password_require_uppercase,
            require_lowercase=settings.password_require_lowercase,
            require_digit=settings.password_require_digit,
            require_special=settings.password_require_special,
        )

    def validate(self, password: str) -> None:
        password = password or ""
        problems: list[str] = []

        if len(password) < self.min_length:
            problems.append(f"at least {self.min_length} characters")
        if len(password) > self.max_length:
            problems.append(f"at most {self.max_length} characters")

        counts = (
            (self.require_uppercase, sum(c.isupper() for c in password), "uppercase"),
            (self.require_lowercase, sum(c.islower() for c in password), "lowercase"),
            (self.require_digit, sum(c.isdigit() for c in password), "digit"),
            (
                self.require_special,
                sum(c in string.punctuation for c in password),
                "special",
            ),
        )
        for required, found, label in counts:
            if found < required:
                noun = "character" if required == 1 else "characters"
                problems.append(f"at least {required} {label} {noun}")

        if problems:
            raise PasswordPolicyViolation("Password must contain " + ", ".join(problems) + ".")
