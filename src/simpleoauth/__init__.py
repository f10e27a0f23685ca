"""
SimpleOAuth
OAuth 1.0a request signing with HMAC-SHA1 and PLAINTEXT support
"""

from .version import __version__
from .exceptions import (
    SimpleOAuthError,
    SigningError,
    InvalidTokenError,
    ParameterCollisionError,
    EncodingError,
    UnsupportedSignatureMethodError,
    ConfigError,
)
from .token import (
    Token,
    TokenType,
)
from .crypto import (
    hmac_sha1,
    check_platform_compatibility,
)
from .signing import (
    # Core signing functionality
    OAuth1Signer,
    create_signer,
    sign,
    sign_request,
    # Types
    HttpMethod,
    SignatureMethod,
    AuthMethod,
    SigningConfig,
    SigningOptions,
    SigningResult,
    # Parameter encoding
    percent_encode,
    normalize_parameters,
    normalize_url,
    # Configuration
    SigningConfigBuilder,
    create_signing_config,
    # Rendering
    to_authorization_header,
    to_sasl_string,
    render,
    # Utilities
    generate_nonce,
    generate_timestamp,
    # HTTP Integration
    OAuth1Auth,
    SigningSession,
    create_signing_session,
)
from .config import (
    ClientConfigManager,
    ServiceConfig,
    load_client_config_from_file,
    load_default_client_config,
)

# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'SimpleOAuthError',
    'SigningError',
    'InvalidTokenError',
    'ParameterCollisionError',
    'EncodingError',
    'UnsupportedSignatureMethodError',
    'ConfigError',
    # Token
    'Token',
    'TokenType',
    # Crypto
    'hmac_sha1',
    'check_platform_compatibility',
    # Request Signing - Core
    'OAuth1Signer',
    'create_signer',
    'sign',
    'sign_request',
    # Request Signing - Types
    'HttpMethod',
    'SignatureMethod',
    'AuthMethod',
    'SigningConfig',
    'SigningOptions',
    'SigningResult',
    # Request Signing - Parameter encoding
    'percent_encode',
    'normalize_parameters',
    'normalize_url',
    # Request Signing - Configuration
    'SigningConfigBuilder',
    'create_signing_config',
    # Request Signing - Rendering
    'to_authorization_header',
    'to_sasl_string',
    'render',
    # Request Signing - Utilities
    'generate_nonce',
    'generate_timestamp',
    # Request Signing - HTTP Integration
    'OAuth1Auth',
    'SigningSession',
    'create_signing_session',
    # Client configuration
    'ClientConfigManager',
    'ServiceConfig',
    'load_client_config_from_file',
    'load_default_client_config',
]
