"""
OAuth 1.0a request signer

This module provides the signing engine: it validates a token, generates the
oauth protocol parameters, merges them with the request's own parameters,
builds the signature base string and signs it with HMAC-SHA1 or PLAINTEXT.
"""

import logging
from typing import Optional, Union

from ..crypto.hmac_sha1 import hmac_sha1_base64
from ..exceptions import (
    InvalidTokenError,
    ParameterCollisionError,
    SigningError,
)
from ..token import Token, TokenType
from .assembler import render
from .base_string import build_signature_base_string, build_signing_key
from .signing_config import (
    resolve_auth_method,
    resolve_http_method,
    resolve_signature_method,
    validate_signing_config,
)
from .types import (
    OAUTH_VERSION,
    AuthMethod,
    HttpMethod,
    ParameterList,
    Parameters,
    SignatureMethod,
    SigningConfig,
    SigningErrorCodes,
    SigningOptions,
    SigningResult,
)
from .utils import (
    PerformanceTimer,
    extract_query_parameters,
    generate_nonce,
    generate_timestamp,
    is_oauth_parameter,
    normalize_url,
    sort_parameters,
    to_parameter_pairs,
    validate_nonce,
    validate_timestamp,
)

logger = logging.getLogger(__name__)

SLOW_SIGNING_THRESHOLD_MS = 10


class OAuth1Signer:
    """
    OAuth 1.0a request signer

    The signer holds only its (frozen) configuration, so one instance can be
    shared between threads. Every call to :meth:`sign` draws a fresh nonce
    and timestamp unless they are supplied through :class:`SigningOptions`.
    """

    def __init__(self, config: Optional[SigningConfig] = None):
        """
        Initialize the signer with configuration.

        Args:
            config: Signing configuration (defaults to HMAC-SHA1, HTTP header)

        Raises:
            SigningError: If configuration is invalid
        """
        if config is None:
            config = SigningConfig()
        validate_signing_config(config)
        self.config = config

    def sign(
        self,
        token: Token,
        url: str,
        http_method: Union[HttpMethod, str] = HttpMethod.GET,
        parameters: Parameters = None,
        auth_method: Union[AuthMethod, str, None] = None,
        signature_method: Union[SignatureMethod, str, None] = None,
        options: Optional[SigningOptions] = None
    ) -> SigningResult:
        """
        Sign a request.

        Args:
            token: Request or access token to sign with
            url: Absolute request URL; query parameters are signed too
            http_method: GET, POST, PUT, DELETE or HEAD
            parameters: Non-oauth query/body parameters covered by the signature
            auth_method: Output format recorded on the result
            signature_method: HMAC-SHA1 or PLAINTEXT (defaults to the config)
            options: Per-request nonce, timestamp and realm overrides

        Returns:
            SigningResult: Complete signed parameter set

        Raises:
            InvalidTokenError: If the token cannot be used for signing
            ParameterCollisionError: If a request parameter uses an oauth_* name
            EncodingError: If any input cannot be represented as UTF-8
            UnsupportedSignatureMethodError: For unknown signature methods
            SigningError: For invalid URLs, methods, nonces or timestamps
        """
        timer = PerformanceTimer()

        try:
            if not isinstance(token, Token):
                raise InvalidTokenError(
                    f"Expected a Token, got {type(token).__name__}",
                    {"token_type": type(token).__name__}
                )
            token.validate()

            method = resolve_http_method(http_method)
            sig_method = resolve_signature_method(signature_method or self.config.signature_method)
            output = resolve_auth_method(auth_method or self.config.auth_method)
            options = options or SigningOptions()

            normalized_url = normalize_url(url)
            request_params = self._collect_request_parameters(url, parameters)

            nonce = self._resolve_nonce(options)
            timestamp = self._resolve_timestamp(options)
            oauth_params = self._build_oauth_parameters(token, sig_method, nonce, timestamp)

            signed_params = oauth_params + request_params
            base_string = build_signature_base_string(method, url, signed_params)
            signing_key = build_signing_key(token.consumer_secret, token.token_secret)
            signature = self._compute_signature(sig_method, signing_key, base_string)

        except SigningError:
            raise
        except Exception as e:
            raise SigningError(
                f"Request signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": type(e).__name__}
            ) from e

        all_params = sort_parameters(signed_params + [('oauth_signature', signature)])
        result = SigningResult(
            parameters=tuple(all_params),
            oauth_parameters=tuple(p for p in all_params if is_oauth_parameter(p[0])),
            signature=signature,
            signature_method=sig_method,
            auth_method=output,
            http_method=method,
            url=normalized_url,
            base_string=base_string,
            nonce=nonce,
            timestamp=timestamp,
            realm=options.realm if options.realm is not None else self.config.realm
        )

        logger.debug(f"Signed {method.value} request to {normalized_url} with {sig_method.value}")
        if self.config.log_base_strings:
            logger.debug(f"Signature base string: {base_string}")

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > SLOW_SIGNING_THRESHOLD_MS:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (target: <{SLOW_SIGNING_THRESHOLD_MS}ms)")

        return result

    def sign_request(
        self,
        token: Token,
        url: str,
        http_method: Union[HttpMethod, str] = HttpMethod.GET,
        parameters: Parameters = None,
        auth_method: Union[AuthMethod, str, None] = None,
        signature_method: Union[SignatureMethod, str, None] = None,
        options: Optional[SigningOptions] = None
    ) -> str:
        """
        Sign a request and render the result for the transport.

        Returns:
            str: Authorization header value or SASL string, per auth_method
        """
        result = self.sign(token, url, http_method, parameters, auth_method, signature_method, options)
        return render(result)

    def _resolve_nonce(self, options: SigningOptions) -> str:
        nonce = options.nonce
        if nonce is None:
            nonce_gen = self.config.nonce_generator or generate_nonce
            nonce = nonce_gen()

        if not validate_nonce(nonce):
            raise SigningError(
                "Invalid nonce: must be a non-empty string without whitespace",
                SigningErrorCodes.INVALID_NONCE
            )
        return nonce

    def _resolve_timestamp(self, options: SigningOptions) -> int:
        timestamp = options.timestamp
        if timestamp is None:
            timestamp_gen = self.config.timestamp_generator or generate_timestamp
            timestamp = timestamp_gen()

        if not validate_timestamp(timestamp):
            raise SigningError(
                f"Invalid timestamp: {timestamp}",
                SigningErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": repr(timestamp)}
            )
        return timestamp

    def _collect_request_parameters(self, url: str, parameters: Parameters) -> ParameterList:
        """
        Gather the URL's query parameters and the caller's parameters.

        Raises:
            ParameterCollisionError: If any of them uses a reserved oauth_* name
        """
        request_params = extract_query_parameters(url) + to_parameter_pairs(parameters)

        reserved = sorted({name for name, _ in request_params if is_oauth_parameter(name)})
        if reserved:
            raise ParameterCollisionError(
                f"Request parameters must not use reserved oauth_* names: {', '.join(reserved)}",
                {"parameters": reserved}
            )

        return request_params

    def _build_oauth_parameters(
        self,
        token: Token,
        signature_method: SignatureMethod,
        nonce: str,
        timestamp: int
    ) -> ParameterList:
        """
        Generate the oauth protocol parameters for a token.

        ``oauth_token`` is sent whenever the token holds an issued token
        string. A request token adds ``oauth_callback`` before a token has
        been issued and ``oauth_verifier`` once the user has authorized it.
        """
        params = [
            ('oauth_consumer_key', token.consumer_key),
            ('oauth_nonce', nonce),
            ('oauth_signature_method', signature_method.value),
            ('oauth_timestamp', str(timestamp)),
            ('oauth_version', OAUTH_VERSION),
        ]

        if token.token_string:
            params.append(('oauth_token', token.token_string))

        if token.kind == TokenType.REQUEST_TOKEN:
            if token.callback_url and not token.token_string:
                params.append(('oauth_callback', token.callback_url))
            if token.verifier:
                params.append(('oauth_verifier', token.verifier))

        return params

    def _compute_signature(self, signature_method: SignatureMethod, signing_key: str, base_string: str) -> str:
        if signature_method == SignatureMethod.HMAC_SHA1:
            return hmac_sha1_base64(signing_key, base_string)
        # PLAINTEXT sends the signing key itself
        return signing_key


def create_signer(config: Optional[SigningConfig] = None) -> OAuth1Signer:
    """
    Create a new OAuth 1.0a signer.

    Args:
        config: Signing configuration

    Returns:
        OAuth1Signer: Configured signer instance
    """
    return OAuth1Signer(config)


def sign(
    token: Token,
    url: str,
    http_method: Union[HttpMethod, str] = HttpMethod.GET,
    parameters: Parameters = None,
    auth_method: Union[AuthMethod, str, None] = None,
    signature_method: Union[SignatureMethod, str, None] = None,
    options: Optional[SigningOptions] = None,
    config: Optional[SigningConfig] = None
) -> SigningResult:
    """
    Sign a request with the given configuration.

    Returns:
        SigningResult: Signing result
    """
    signer = create_signer(config)
    return signer.sign(token, url, http_method, parameters, auth_method, signature_method, options)


def sign_request(
    token: Token,
    url: str,
    http_method: Union[HttpMethod, str] = HttpMethod.GET,
    parameters: Parameters = None,
    auth_method: Union[AuthMethod, str, None] = None,
    signature_method: Union[SignatureMethod, str, None] = None,
    options: Optional[SigningOptions] = None,
    config: Optional[SigningConfig] = None
) -> str:
    """
    Sign a request and return the string to attach to it.

    Returns:
        str: ``OAuth ...`` header value, or the SASL string when
            auth_method is SASL
    """
    signer = create_signer(config)
    return signer.sign_request(token, url, http_method, parameters, auth_method, signature_method, options)
