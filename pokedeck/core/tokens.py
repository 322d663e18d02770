"""
Stateless bearer tokens for API authentication.

Tokens are compact JWTs (``header.payload.signature``, base64url without
padding) signed with HMAC-SHA256. The payload carries ``userId``,
``email``, ``iat`` and ``exp``. Verification is a pure function of the
token, the current time and the signing secret: the claims are trusted
as-is and the user is not looked up again.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Callable, Optional

from pokedeck.core.config import TOKEN_TTL_DEFAULT
from pokedeck.core.errors import UnauthenticatedError

_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(UnauthenticatedError):
    """Base class for token verification failures."""


class MissingTokenError(TokenError):
    def __init__(self, message: str = "Token manquant"):
        super().__init__(message)


class ExpiredTokenError(TokenError):
    def __init__(self, message: str = "Token expiré"):
        super().__init__(message)


class InvalidTokenError(TokenError):
    def __init__(self, message: str = "Token invalide"):
        super().__init__(message)


@dataclass(frozen=True)
class Principal:
    """Identity extracted from a verified token."""

    user_id: int
    email: str


def _b64_url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64_url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _encode_segment(value: dict) -> str:
    return _b64_url_encode(json.dumps(value, separators=(",", ":")).encode("utf-8"))


def _decode_segment(segment: str) -> dict:
    try:
        value = json.loads(_b64_url_decode(segment).decode("utf-8"))
    except (binascii.Error, ValueError, UnicodeDecodeError) as exc:
        raise InvalidTokenError() from exc
    if not isinstance(value, dict):
        raise InvalidTokenError()
    return value


class TokenAuthenticator:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret_key: str,
        ttl_seconds: int = TOKEN_TTL_DEFAULT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret_key:
            raise ValueError("A non-empty signing secret is required.")
        if ttl_seconds <= 0:
            raise ValueError("Token lifetime must be a positive number of seconds.")
        self._secret = secret_key.encode("utf-8")
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenAuthenticator(ttl_seconds={self.ttl_seconds})"

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, hashlib.sha256).digest()

    def issue(self, user_id: int, email: str) -> str:
        issued_at = int(self._clock())
        payload = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        signing_input = f"{_encode_segment(_HEADER)}.{_encode_segment(payload)}"
        signature = _b64_url_encode(self._sign(signing_input.encode("ascii")))
        return f"{signing_input}.{signature}"

    def verify(self, token: Optional[str]) -> Principal:
        """Return the Principal embedded in ``token``.

        Raises MissingTokenError for an absent token, ExpiredTokenError when
        a correctly signed token is past its ``exp``, and InvalidTokenError
        for anything else (malformed, wrong key, tampered payload).
        """
        if not token:
            raise MissingTokenError()
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError()
        header_b64, payload_b64, signature_b64 = parts

        header = _decode_segment(header_b64)
        if header.get("alg") != _HEADER["alg"]:
            raise InvalidTokenError()
        try:
            actual = _b64_url_decode(signature_b64)
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError() from exc
        expected = self._sign(f"{header_b64}.{payload_b64}".encode("ascii", errors="replace"))
        if not hmac.compare_digest(expected, actual):
            raise InvalidTokenError()

        payload = _decode_segment(payload_b64)
        exp = payload.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError()
        if self._clock() >= exp:
            raise ExpiredTokenError()

        user_id = payload.get("userId")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
            raise InvalidTokenError()
        return Principal(user_id=user_id, email=email)
