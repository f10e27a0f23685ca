"""
Type definitions for request signing functionality

This module provides enumerations and data classes for the OAuth 1.0a
signing engine: selectors for HTTP method, signature method and output
format, per-request options, signer configuration and the signing result.
"""

from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"


class SignatureMethod(str, Enum):
    """OAuth 1.0a signature methods"""
    HMAC_SHA1 = "HMAC-SHA1"
    PLAINTEXT = "PLAINTEXT"


class AuthMethod(str, Enum):
    """How a signing result is rendered for the transport"""
    HTTP_HEADER = "http_header"
    SASL = "sasl"


OAUTH_VERSION = "1.0"
OAUTH_PARAMETER_PREFIX = "oauth_"


# Type aliases for convenience
NonceGenerator = Callable[[], str]
TimestampGenerator = Callable[[], int]
ParameterPair = Tuple[str, str]
ParameterList = List[ParameterPair]
Parameters = Union[
    None,
    Mapping[str, Union[str, int, Sequence[Union[str, int]]]],
    Sequence[Tuple[str, Union[str, int]]],
]


@dataclass(frozen=True)
class SigningOptions:
    """
    Signing options for individual requests

    Attributes:
        nonce: Custom nonce for this request
        timestamp: Custom timestamp for this request
        realm: Realm to emit in the Authorization header
    """
    nonce: Optional[str] = None
    timestamp: Optional[int] = None
    realm: Optional[str] = None


@dataclass(frozen=True)
class SigningConfig:
    """
    Configuration for the OAuth 1.0a signer

    Attributes:
        signature_method: Default signature method
        auth_method: Default output format for sign_request
        realm: Optional realm emitted in Authorization headers
        nonce_generator: Optional custom nonce generator function
        timestamp_generator: Optional custom timestamp generator function
        log_base_strings: Log every signature base string at debug level
    """
    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1
    auth_method: AuthMethod = AuthMethod.HTTP_HEADER
    realm: Optional[str] = None
    nonce_generator: Optional[NonceGenerator] = None
    timestamp_generator: Optional[TimestampGenerator] = None
    log_base_strings: bool = False


@dataclass(frozen=True)
class SigningResult:
    """
    Result of signing a request

    Attributes:
        parameters: Every parameter covered by the signature plus
            oauth_signature, in normalized order
        oauth_parameters: The oauth_* subset of parameters, in normalized order
        signature: The oauth_signature value
        signature_method: Signature method used
        auth_method: Output format requested by the caller
        http_method: HTTP method that was signed
        url: Normalized request URL
        base_string: Signature base string that was signed
        nonce: Nonce used for this request
        timestamp: Timestamp used for this request
        realm: Realm for the Authorization header, if any
    """
    parameters: Tuple[ParameterPair, ...]
    oauth_parameters: Tuple[ParameterPair, ...]
    signature: str
    signature_method: SignatureMethod
    auth_method: AuthMethod
    http_method: HttpMethod
    url: str
    base_string: str
    nonce: str
    timestamp: int
    realm: Optional[str] = None

    def __post_init__(self):
        """Validate signature result"""
        if not self.signature:
            raise ValueError("Signature cannot be empty")

        if ('oauth_signature', self.signature) not in self.oauth_parameters:
            raise ValueError("oauth_parameters must include oauth_signature")

    def get(self, name: str) -> Optional[str]:
        """Return the first value of a parameter, or None if absent."""
        for key, value in self.parameters:
            if key == name:
                return value
        return None


# Common signing error codes
class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"

    # Token errors
    INVALID_TOKEN = "INVALID_TOKEN"

    # Request errors
    INVALID_URL = "INVALID_URL"
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    PARAMETER_COLLISION = "PARAMETER_COLLISION"
    ENCODING_ERROR = "ENCODING_ERROR"

    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
    UNSUPPORTED_SIGNATURE_METHOD = "UNSUPPORTED_SIGNATURE_METHOD"
    UNSUPPORTED_AUTH_METHOD = "UNSUPPORTED_AUTH_METHOD"

    # Validation errors
    INVALID_NONCE = "INVALID_NONCE"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"

    # Crypto errors
    CRYPTO_ERROR = "CRYPTO_ERROR"
