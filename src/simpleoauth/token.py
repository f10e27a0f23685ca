"""
OAuth 1.0a token value type

A Token holds one credential set and its classification. Tokens are frozen:
promotion from one kind to the next produces a new Token, so every holder of
a Token sees a consistent credential set while signing.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from .exceptions import InvalidTokenError


class TokenType(str, Enum):
    """Token classification"""
    INVALID = "invalid"
    REQUEST_TOKEN = "request_token"
    ACCESS_TOKEN = "access_token"


@dataclass(frozen=True)
class Token:
    """
    OAuth 1.0a credential set

    Attributes:
        kind: Token classification
        consumer_key: Registered client application key
        consumer_secret: Registered client application secret
        callback_url: Redirect target after user consent (request tokens only)
        token_string: OAuth token identifier issued by the provider
        token_secret: Secret paired with the token identifier
        verifier: One-time code returned after user authorization
        service: Opaque label naming the remote service or account
    """
    kind: TokenType = TokenType.INVALID
    consumer_key: str = ""
    consumer_secret: str = field(default="", repr=False)
    callback_url: str = ""
    token_string: str = ""
    token_secret: str = field(default="", repr=False)
    verifier: str = field(default="", repr=False)
    service: str = ""

    def __post_init__(self):
        """Coerce the token kind so plain strings are accepted"""
        if not isinstance(self.kind, TokenType):
            try:
                object.__setattr__(self, 'kind', TokenType(self.kind))
            except ValueError:
                raise InvalidTokenError(
                    f"Unknown token kind: {self.kind}",
                    {"kind": str(self.kind)}
                )

    @classmethod
    def request_token(
        cls,
        consumer_key: str,
        consumer_secret: str,
        callback_url: str = "",
        service: str = ""
    ) -> 'Token':
        """Create a fresh request token ready for the request-token exchange."""
        return cls(
            kind=TokenType.REQUEST_TOKEN,
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            callback_url=callback_url,
            service=service
        )

    @classmethod
    def access_token(
        cls,
        consumer_key: str,
        consumer_secret: str,
        token_string: str,
        token_secret: str,
        service: str = ""
    ) -> 'Token':
        """Create an access token for signing ordinary API requests."""
        return cls(
            kind=TokenType.ACCESS_TOKEN,
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            token_string=token_string,
            token_secret=token_secret,
            service=service
        )

    @property
    def is_valid(self) -> bool:
        try:
            self.validate()
        except InvalidTokenError:
            return False
        return True

    def promote_to_request_token(
        self,
        consumer_key: str,
        consumer_secret: str,
        callback_url: str = ""
    ) -> 'Token':
        """
        Return a request token carrying the given consumer credentials.

        The service label is kept; any previous token material is dropped.
        """
        return Token.request_token(consumer_key, consumer_secret, callback_url, self.service)

    def with_issued_token(self, token_string: str, token_secret: str) -> 'Token':
        """Return a copy holding the token identifier and secret issued by the provider."""
        return replace(self, token_string=token_string, token_secret=token_secret)

    def with_verifier(self, verifier: str) -> 'Token':
        """Return a copy holding the verifier returned after user authorization."""
        return replace(self, verifier=verifier)

    def with_service(self, service: str) -> 'Token':
        return replace(self, service=service)

    def promote_to_access_token(self, token_string: str, token_secret: str) -> 'Token':
        """
        Return an access token built from this token's consumer credentials.

        The verifier and callback URL belong to the authorization handshake
        and are not carried over.
        """
        return replace(
            self,
            kind=TokenType.ACCESS_TOKEN,
            callback_url="",
            token_string=token_string,
            token_secret=token_secret,
            verifier=""
        )

    def validate(self) -> None:
        """
        Check the required-field invariant for this token's kind.

        Raises:
            InvalidTokenError: If the token cannot be used for signing
        """
        if self.kind == TokenType.INVALID:
            raise InvalidTokenError(
                "Cannot sign with an invalid token",
                {"kind": self.kind.value}
            )

        missing = [
            name for name in ('consumer_key', 'consumer_secret')
            if not getattr(self, name)
        ]
        if self.kind == TokenType.ACCESS_TOKEN and not self.token_string:
            missing.append('token_string')

        if missing:
            raise InvalidTokenError(
                f"Token is missing required fields: {', '.join(missing)}",
                {"kind": self.kind.value, "missing_fields": missing}
            )

        if self.kind == TokenType.ACCESS_TOKEN and self.verifier:
            raise InvalidTokenError(
                "Access tokens must not carry a verifier",
                {"kind": self.kind.value}
            )
