"""Remote validation protocol.

Rules only the server can decide (uniqueness, existence, credentials) are
flagged remote and served by one form-level callback directive. Without a
usable token the client cannot make that callback, so remote rules are
dropped from the client rule lists and the server's own check at
submission time stays the only check.
"""

import logging
from dataclasses import replace

from jsvalidation.remote.tokens import Encrypter, SessionStore
from jsvalidation.types import FieldValidation, RemoteDirective, RemoteToken

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_URL = "/jsvalidation/remote"
DEFAULT_TOKEN_FIELD = "_jsvalidation"


class RemoteValidationProtocol:
    """Derives the remote token and attaches remote rules to a form.

    Both collaborators are optional. A missing session yields no token; a
    missing encrypter leaves the session token as is.
    """

    def __init__(
        self,
        session: SessionStore | None = None,
        encrypter: Encrypter | None = None,
    ):
        self.session = session
        self.encrypter = encrypter

    def get_session_token(self) -> RemoteToken:
        """Read the session token and encrypt it.

        Returns:
            The encrypted token, or None when there is no session token
        """
        token = None
        if self.session is not None:
            token = self.session.token()

        if not token:
            logger.debug("No session token available, remote validation disabled")
            return None

        if self.encrypter is not None:
            token = self.encrypter.encrypt(token)

        return token

    def apply(
        self,
        fields: list[FieldValidation],
        token: RemoteToken,
        enabled: bool = True,
        url: str = DEFAULT_REMOTE_URL,
        token_field: str = DEFAULT_TOKEN_FIELD,
    ) -> tuple[list[FieldValidation], RemoteDirective | None]:
        """Attach remote validation to translated fields.

        Args:
            fields: Translated fields; remote rules are already flagged
            token: Encrypted session token, or None
            enabled: False when remote validation is switched off
            url: Endpoint the client calls back
            token_field: Request parameter carrying the token

        Returns:
            The fields to emit and the single remote directive (None when
            remote validation is unavailable or nothing needs it)
        """
        if not enabled or not token:
            if not enabled:
                logger.debug("Remote validation disabled by configuration")
            return [self._drop_remote_rules(f) for f in fields], None

        remote_fields = tuple(f.field for f in fields if f.has_remote_rules)
        if not remote_fields:
            return list(fields), None

        directive = RemoteDirective(url=url, token_field=token_field, fields=remote_fields)
        return list(fields), directive

    def _drop_remote_rules(self, field: FieldValidation) -> FieldValidation:
        if not field.has_remote_rules:
            return field

        kept = tuple(r for r in field.rules if not r.is_remote)
        kept_names = {r.rule for r in kept}
        logger.debug(
            "Dropping %d remote rule(s) from %s; server validates on submit",
            len(field.rules) - len(kept),
            field.field,
        )
        return replace(
            field,
            rules=kept,
            messages={k: v for k, v in field.messages.items() if k in kept_names},
        )
