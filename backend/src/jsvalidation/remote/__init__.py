"""Remote validation: token lifecycle, remote directive and endpoint."""

from jsvalidation.remote.protocol import (
    DEFAULT_REMOTE_URL,
    DEFAULT_TOKEN_FIELD,
    RemoteValidationProtocol,
)
from jsvalidation.remote.states import RemoteCheckTracker, RemoteState
from jsvalidation.remote.tokens import (
    Encrypter,
    FernetEncrypter,
    MappingSession,
    SessionStore,
    StaticSession,
    verify_remote_token,
)

__all__ = [
    "DEFAULT_REMOTE_URL",
    "DEFAULT_TOKEN_FIELD",
    "Encrypter",
    "FernetEncrypter",
    "MappingSession",
    "RemoteCheckTracker",
    "RemoteState",
    "RemoteValidationProtocol",
    "SessionStore",
    "StaticSession",
    "verify_remote_token",
]
