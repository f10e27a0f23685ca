"""
Configuration management for request signing

This module provides the signer configuration builder, configuration
validation and the resolvers that turn user-facing selector values into the
closed enumerations used by the signing engine.
"""

from typing import Optional, Union

from ..exceptions import SigningError, UnsupportedSignatureMethodError
from .types import (
    AuthMethod,
    HttpMethod,
    NonceGenerator,
    SignatureMethod,
    SigningConfig,
    SigningErrorCodes,
    TimestampGenerator,
)
from .utils import (
    generate_nonce,
    generate_timestamp,
)


def resolve_signature_method(method: Union[SignatureMethod, str]) -> SignatureMethod:
    """
    Resolve a signature method selector.

    Args:
        method: SignatureMethod member or its name, e.g. ``"HMAC-SHA1"``

    Returns:
        SignatureMethod: Resolved signature method

    Raises:
        UnsupportedSignatureMethodError: For anything but HMAC-SHA1 or PLAINTEXT
    """
    if isinstance(method, SignatureMethod):
        return method

    if isinstance(method, str):
        try:
            return SignatureMethod(method.strip().upper())
        except ValueError:
            pass

    raise UnsupportedSignatureMethodError(
        f"Unsupported signature method: {method}",
        {"signature_method": str(method),
         "supported": [m.value for m in SignatureMethod]}
    )


def resolve_http_method(method: Union[HttpMethod, str]) -> HttpMethod:
    """
    Resolve an HTTP method selector.

    Raises:
        SigningError: If the method is not GET, POST, PUT, DELETE or HEAD
    """
    if isinstance(method, HttpMethod):
        return method

    if isinstance(method, str):
        try:
            return HttpMethod(method.strip().upper())
        except ValueError:
            pass

    raise SigningError(
        f"Unsupported HTTP method for signing: {method}",
        SigningErrorCodes.INVALID_METHOD,
        {"method": str(method), "supported": [m.value for m in HttpMethod]}
    )


def resolve_auth_method(method: Union[AuthMethod, str]) -> AuthMethod:
    """
    Resolve an output format selector (``http_header`` or ``sasl``).

    Raises:
        SigningError: For unknown output formats
    """
    if isinstance(method, AuthMethod):
        return method

    if isinstance(method, str):
        try:
            return AuthMethod(method.strip().lower().replace('-', '_'))
        except ValueError:
            pass

    raise SigningError(
        f"Unsupported auth method: {method}",
        SigningErrorCodes.UNSUPPORTED_AUTH_METHOD,
        {"auth_method": str(method), "supported": [m.value for m in AuthMethod]}
    )


class SigningConfigBuilder:
    """
    Builder for creating signing configurations with fluent API
    """

    def __init__(self):
        self._signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1
        self._auth_method: AuthMethod = AuthMethod.HTTP_HEADER
        self._realm: Optional[str] = None
        self._nonce_generator: Optional[NonceGenerator] = None
        self._timestamp_generator: Optional[TimestampGenerator] = None
        self._log_base_strings = False

    def signature_method(self, method: Union[SignatureMethod, str]) -> 'SigningConfigBuilder':
        """
        Set the default signature method.

        Args:
            method: HMAC-SHA1 or PLAINTEXT

        Returns:
            SigningConfigBuilder: Self for method chaining

        Raises:
            UnsupportedSignatureMethodError: For any other method
        """
        self._signature_method = resolve_signature_method(method)
        return self

    def auth_method(self, method: Union[AuthMethod, str]) -> 'SigningConfigBuilder':
        """
        Set the default output format used by sign_request.

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._auth_method = resolve_auth_method(method)
        return self

    def realm(self, realm: Optional[str]) -> 'SigningConfigBuilder':
        """
        Set the realm emitted in Authorization headers.

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._realm = realm
        return self

    def nonce_generator(self, generator: NonceGenerator) -> 'SigningConfigBuilder':
        """
        Set custom nonce generator.

        Args:
            generator: Function that returns nonce strings

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._nonce_generator = generator
        return self

    def timestamp_generator(self, generator: TimestampGenerator) -> 'SigningConfigBuilder':
        """
        Set custom timestamp generator.

        Args:
            generator: Function that returns Unix timestamps

        Returns:
            SigningConfigBuilder: Self for method chaining
        """
        self._timestamp_generator = generator
        return self

    def log_base_strings(self, enabled: bool = True) -> 'SigningConfigBuilder':
        self._log_base_strings = enabled
        return self

    def build(self) -> SigningConfig:
        """
        Build the signing configuration.

        Returns:
            SigningConfig: Complete signing configuration

        Raises:
            SigningError: If configuration is invalid
        """
        config = SigningConfig(
            signature_method=self._signature_method,
            auth_method=self._auth_method,
            realm=self._realm,
            nonce_generator=self._nonce_generator or generate_nonce,
            timestamp_generator=self._timestamp_generator or generate_timestamp,
            log_base_strings=self._log_base_strings
        )
        validate_signing_config(config)
        return config


def create_signing_config() -> SigningConfigBuilder:
    """
    Create a new signing configuration builder.

    Returns:
        SigningConfigBuilder: New configuration builder
    """
    return SigningConfigBuilder()


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Signing configuration to validate

    Raises:
        SigningError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise SigningError(
            "Configuration must be SigningConfig instance",
            SigningErrorCodes.INVALID_CONFIG
        )

    if not isinstance(config.signature_method, SignatureMethod):
        raise SigningError(
            f"Unsupported signature method: {config.signature_method}",
            SigningErrorCodes.INVALID_CONFIG
        )

    if not isinstance(config.auth_method, AuthMethod):
        raise SigningError(
            f"Unsupported auth method: {config.auth_method}",
            SigningErrorCodes.INVALID_CONFIG
        )

    if config.realm is not None and not isinstance(config.realm, str):
        raise SigningError(
            "Realm must be a string",
            SigningErrorCodes.INVALID_CONFIG
        )

    # Generated values are checked per request by the signer
    if config.nonce_generator is not None and not callable(config.nonce_generator):
        raise SigningError(
            "Nonce generator must be callable",
            SigningErrorCodes.INVALID_CONFIG
        )

    if config.timestamp_generator is not None and not callable(config.timestamp_generator):
        raise SigningError(
            "Timestamp generator must be callable",
            SigningErrorCodes.INVALID_CONFIG
        )
