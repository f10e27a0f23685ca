"""
HTTP client integration for request signing

This module connects the signer to the requests library: an auth class that
signs prepared requests and a session wrapper that signs every outgoing
request. The token exchange itself stays with the caller.
"""

import logging
from typing import Any, Optional, Union
from urllib.parse import parse_qsl

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest
from requests.sessions import Session

from ..exceptions import EncodingError
from ..token import Token
from .assembler import to_authorization_header
from .oauth1_signer import OAuth1Signer
from .types import (
    AuthMethod,
    ParameterList,
    SignatureMethod,
    SigningConfig,
    SigningOptions,
)

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class OAuth1Auth(AuthBase):
    """
    requests authentication handler that signs requests with OAuth 1.0a.

    Query parameters and ``application/x-www-form-urlencoded`` bodies are
    covered by the signature; other bodies are not, per RFC 5849.
    """

    def __init__(
        self,
        token: Token,
        config: Optional[SigningConfig] = None,
        signature_method: Union[SignatureMethod, str, None] = None,
        realm: Optional[str] = None
    ):
        """
        Initialize the auth handler.

        Args:
            token: Token to sign with
            config: Optional signing configuration
            signature_method: Override for the configured signature method
            realm: Optional realm for the Authorization header

        Raises:
            InvalidTokenError: If the token cannot be used for signing
        """
        token.validate()
        self.token = token
        self.signer = OAuth1Signer(config)
        self.signature_method = signature_method
        self.realm = realm

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        result = self.signer.sign(
            self.token,
            request.url,
            request.method,
            _form_parameters(request),
            AuthMethod.HTTP_HEADER,
            self.signature_method,
            SigningOptions(realm=self.realm)
        )
        request.headers['Authorization'] = to_authorization_header(result)
        logger.debug(f"Signed {request.method} request to {result.url}")
        return request


def _form_parameters(request: PreparedRequest) -> ParameterList:
    """Extract signed body parameters from a form-encoded request."""
    content_type = request.headers.get('Content-Type', '') or ''
    body = request.body
    if not body or FORM_CONTENT_TYPE not in content_type.lower():
        return []

    if isinstance(body, bytes):
        try:
            body = body.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"Form body is not valid UTF-8: {e.reason}",
                {"position": e.start}
            ) from e

    if not isinstance(body, str):
        return []

    try:
        return parse_qsl(body, keep_blank_values=True, encoding='utf-8', errors='strict')
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Form body is not valid UTF-8: {e.reason}",
            {"position": e.start}
        ) from e


class SigningSession:
    """
    HTTP session wrapper with automatic request signing capability.

    This class wraps a requests.Session and signs outgoing requests with the
    configured token. Signing failures are raised to the caller; a request is
    never sent unsigned while signing is enabled.
    """

    def __init__(
        self,
        token: Optional[Token] = None,
        config: Optional[SigningConfig] = None,
        session: Optional[Session] = None,
        auto_sign: bool = True
    ):
        """
        Initialize signing session.

        Args:
            token: Optional token to sign with
            config: Optional signing configuration
            session: Optional existing requests session to wrap
            auto_sign: Whether to automatically sign requests
        """
        self.session = session or requests.Session()
        self.token = token
        self.signing_config = config
        self.auth = OAuth1Auth(token, config) if token is not None else None
        self.auto_sign = auto_sign

    def configure_signing(
        self,
        token: Token,
        config: Optional[SigningConfig] = None,
        auto_sign: bool = True
    ) -> None:
        """
        Configure request signing for this session.

        Args:
            token: Token to sign with
            config: Optional signing configuration
            auto_sign: Whether to automatically sign requests
        """
        self.auth = OAuth1Auth(token, config)
        self.token = token
        self.signing_config = config
        self.auto_sign = auto_sign
        logger.info(f"Configured request signing for service: {token.service or '(unnamed)'}")

    def disable_signing(self) -> None:
        """Disable automatic request signing."""
        self.auto_sign = False
        logger.info("Disabled automatic request signing")

    def enable_signing(self) -> None:
        """Enable automatic request signing (if configured)."""
        if self.auth:
            self.auto_sign = True
            logger.info("Enabled automatic request signing")
        else:
            logger.warning("Cannot enable signing - no token configured")

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Make HTTP request with optional automatic signing.

        Args:
            method: HTTP method
            url: Request URL
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response: HTTP response
        """
        if self.auto_sign and self.auth:
            kwargs['auth'] = self.auth
        return self.session.request(method, url, **kwargs)

    def get(self, url: str, **kwargs) -> requests.Response:
        """Make GET request."""
        return self.request('GET', url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        """Make POST request."""
        return self.request('POST', url, **kwargs)

    def put(self, url: str, **kwargs) -> requests.Response:
        """Make PUT request."""
        return self.request('PUT', url, **kwargs)

    def delete(self, url: str, **kwargs) -> requests.Response:
        """Make DELETE request."""
        return self.request('DELETE', url, **kwargs)

    def head(self, url: str, **kwargs) -> requests.Response:
        """Make HEAD request."""
        return self.request('HEAD', url, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def create_signing_session(
    token: Optional[Token] = None,
    config: Optional[SigningConfig] = None,
    auto_sign: bool = True,
    **session_kwargs
) -> SigningSession:
    """
    Create a new signing session.

    Args:
        token: Optional token to sign with
        config: Optional signing configuration
        auto_sign: Whether to automatically sign requests
        **session_kwargs: Attributes to set on the requests.Session
            (e.g. ``headers``, ``verify``)

    Returns:
        SigningSession: Configured signing session
    """
    session = requests.Session()

    for key, value in session_kwargs.items():
        if hasattr(session, key):
            setattr(session, key, value)

    return SigningSession(
        token=token,
        config=config,
        session=session,
        auto_sign=auto_sign
    )
