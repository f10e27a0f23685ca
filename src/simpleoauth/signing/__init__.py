"""
SimpleOAuth - Request Signing Module

OAuth 1.0a (RFC 5849) request signing with the HMAC-SHA1 and PLAINTEXT
signature methods. This module turns a token plus a request's URL, method
and parameters into an Authorization header value or a SASL string.
"""

from .types import (
    HttpMethod,
    SignatureMethod,
    AuthMethod,
    SigningConfig,
    SigningOptions,
    SigningResult,
    SigningErrorCodes,
    OAUTH_VERSION,
)

from .utils import (
    percent_encode,
    percent_decode,
    normalize_parameters,
    normalize_url,
    extract_query_parameters,
    sort_parameters,
    to_parameter_pairs,
    generate_nonce,
    generate_timestamp,
    validate_nonce,
    validate_timestamp,
)

from .base_string import (
    build_signature_base_string,
    build_signing_key,
)

from .signing_config import (
    SigningConfigBuilder,
    create_signing_config,
    validate_signing_config,
    resolve_signature_method,
    resolve_http_method,
    resolve_auth_method,
)

from .assembler import (
    to_authorization_header,
    to_sasl_string,
    render,
)

from .oauth1_signer import (
    OAuth1Signer,
    create_signer,
    sign,
    sign_request,
)

from .integration import (
    OAuth1Auth,
    SigningSession,
    create_signing_session,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'OAuth1Signer',
    'create_signer',
    'sign',
    'sign_request',
    # Types
    'HttpMethod',
    'SignatureMethod',
    'AuthMethod',
    'SigningConfig',
    'SigningOptions',
    'SigningResult',
    'SigningErrorCodes',
    'OAUTH_VERSION',
    # Parameter encoding
    'percent_encode',
    'percent_decode',
    'normalize_parameters',
    'normalize_url',
    'extract_query_parameters',
    'sort_parameters',
    'to_parameter_pairs',
    'build_signature_base_string',
    'build_signing_key',
    # Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    'validate_signing_config',
    'resolve_signature_method',
    'resolve_http_method',
    'resolve_auth_method',
    # Rendering
    'to_authorization_header',
    'to_sasl_string',
    'render',
    # Utilities
    'generate_nonce',
    'generate_timestamp',
    'validate_nonce',
    'validate_timestamp',
    # HTTP Integration
    'OAuth1Auth',
    'SigningSession',
    'create_signing_session',
]
