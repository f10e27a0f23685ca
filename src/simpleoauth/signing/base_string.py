"""
Signature base string construction for OAuth 1.0a

This module builds the canonical byte sequence that OAuth 1.0a signatures
are computed over (RFC 5849 section 3.4.1) and the signing key shared by
the HMAC-SHA1 and PLAINTEXT methods (section 3.4.2 and 3.4.4).
"""

from typing import Optional

from ..exceptions import SigningError
from .types import HttpMethod, Parameters, SigningErrorCodes
from .utils import (
    normalize_parameters,
    normalize_url,
    percent_encode,
    to_parameter_pairs,
)


class SignatureBaseStringBuilder:
    """
    Builder for the OAuth 1.0a signature base string
    """

    def __init__(self, http_method: HttpMethod, url: str, parameters: Parameters):
        """
        Initialize the base string builder.

        Args:
            http_method: HTTP method of the request
            url: Request URL (query and fragment are ignored)
            parameters: Every parameter covered by the signature, including
                the oauth_* protocol parameters but not oauth_signature
        """
        self.http_method = http_method
        self.url = url
        self.parameters = parameters

    def build(self) -> str:
        """
        Build the signature base string.

        Returns:
            str: ``METHOD&enc(url)&enc(parameters)``

        Raises:
            SigningError: If the URL is invalid
            EncodingError: If a component cannot be encoded
        """
        if any(name == 'oauth_signature' for name, _ in to_parameter_pairs(self.parameters)):
            raise SigningError(
                "oauth_signature must not be part of the signed parameters",
                SigningErrorCodes.INVALID_PARAMETERS
            )

        return '&'.join([
            self.http_method.value.upper(),
            percent_encode(normalize_url(self.url)),
            percent_encode(normalize_parameters(self.parameters)),
        ])


def build_signature_base_string(http_method: HttpMethod, url: str, parameters: Parameters) -> str:
    """
    Build the signature base string for a request.

    Args:
        http_method: HTTP method of the request
        url: Request URL
        parameters: Parameters covered by the signature

    Returns:
        str: Signature base string
    """
    builder = SignatureBaseStringBuilder(http_method, url, parameters)
    return builder.build()


def build_signing_key(consumer_secret: str, token_secret: Optional[str] = None) -> str:
    """
    Build the signing key from the consumer and token secrets.

    Both secrets are percent-encoded and joined with ``&``; the token part
    is empty when no token secret is known yet.

    Args:
        consumer_secret: Consumer secret
        token_secret: Token secret, if any

    Returns:
        str: Signing key
    """
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret or '')}"
