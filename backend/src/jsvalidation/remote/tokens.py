"""Session and encryption collaborators for the remote-validation token.

The token attached to a specification is the session's anti-forgery token
passed through the application's authenticated encryption:

    remote_token = encrypter.encrypt(session.token())

The remote endpoint reverses this with verify_remote_token() before it
trusts anything the client sends.
"""

import base64
import hashlib
import hmac
import secrets
from typing import Any, MutableMapping, Protocol

from cryptography.fernet import Fernet, InvalidToken

from jsvalidation.exceptions import RemoteTokenError


class SessionStore(Protocol):
    """Read access to the current session's anti-forgery token."""

    def token(self) -> str | None:
        ...


class Encrypter(Protocol):
    """Symmetric authenticated encryption of strings."""

    def encrypt(self, value: str) -> str:
        ...

    def decrypt(self, value: str) -> str:
        ...


class MappingSession:
    """SessionStore over a dict-like session (e.g. Starlette's request.session).

    The token lives under TOKEN_KEY. Call ensure_token() when a session
    starts; token() itself never creates one.
    """

    TOKEN_KEY = "_token"

    def __init__(self, data: MutableMapping[str, Any]):
        self._data = data

    def token(self) -> str | None:
        value = self._data.get(self.TOKEN_KEY)
        return str(value) if value else None

    def ensure_token(self) -> str:
        """Return the session token, generating one if the session has none."""
        token = self.token()
        if token is None:
            token = self.regenerate_token()
        return token

    def regenerate_token(self) -> str:
        """Replace the session token with a fresh 40-character value."""
        token = secrets.token_hex(20)
        self._data[self.TOKEN_KEY] = token
        return token


class StaticSession:
    """SessionStore with a fixed token, for scripts and tests."""

    def __init__(self, token: str | None):
        self._token = token

    def token(self) -> str | None:
        return self._token


class FernetEncrypter:
    """Encrypter backed by Fernet (AES-128-CBC with HMAC-SHA256).

    Encrypted values are URL-safe base64 text and carry their own
    timestamp, so decrypt() can enforce a maximum age.
    """

    def __init__(self, key: bytes | str, ttl_seconds: int | None = None):
        """Initialize with a Fernet key.

        Args:
            key: 32 url-safe base64-encoded bytes (see Fernet.generate_key)
            ttl_seconds: Reject tokens older than this on decrypt (None: no limit)
        """
        self._fernet = Fernet(key)
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_secret(cls, secret_key: str, ttl_seconds: int | None = None) -> "FernetEncrypter":
        """Derive a Fernet key from an application secret string."""
        if not secret_key:
            raise ValueError("secret_key is required")
        digest = hashlib.sha256(secret_key.encode()).digest()
        return cls(base64.urlsafe_b64encode(digest), ttl_seconds=ttl_seconds)

    def encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode()).decode()

    def decrypt(self, value: str) -> str:
        """Decrypt a value produced by encrypt().

        Raises:
            RemoteTokenError: If the value was tampered with, was encrypted
                with another key, or is older than ttl_seconds
        """
        try:
            return self._fernet.decrypt(value.encode(), ttl=self.ttl_seconds).decode()
        except InvalidToken:
            raise RemoteTokenError("Remote validation token could not be decrypted")


def verify_remote_token(
    token: str | None,
    session: SessionStore | None,
    encrypter: Encrypter | None = None,
) -> bool:
    """Check a remote-validation token against the live session.

    Args:
        token: The token the client sent back
        session: The current session
        encrypter: The encrypter used when the token was issued

    Returns:
        True if the token belongs to this session

    Raises:
        RemoteTokenError: No session, no token, undecryptable, or mismatched
    """
    expected = session.token() if session is not None else None
    if not expected:
        raise RemoteTokenError("No session token to verify against")
    if not token:
        raise RemoteTokenError("Remote validation token is missing")

    value = encrypter.decrypt(token) if encrypter is not None else token

    if not hmac.compare_digest(value.encode(), expected.encode()):
        raise RemoteTokenError("Remote validation token does not match the session")
    return True
