# signup/domain/services.py
from __future__ import annotations

import hashlib
import secrets
from urllib.parse import quote, urlencode

CODE_BYTES = 32


def generate_activation_code() -> str:
    """URL-safe random code carrying 256 bits of entropy."""
    return secrets.token_urlsafe(CODE_BYTES)


def code_digest(code: str) -> str:
    """Hex SHA-256 of a code. Stores key codes by this digest, never by the code."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


def build_activation_link(scheme: str, host: str, code: str, email: str) -> str:
    """
    Link mailed to the user: <scheme>://<host>/verify_user?code=...&email=...
    The email is display-only; the code is the sole credential.
    """
    query = urlencode({"code": code, "email": email}, quote_via=quote, safe="")
    return f"{scheme}://{host}/verify_user?{query}"
