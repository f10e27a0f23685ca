"""
Utility functions for request signing

This module provides the parameter encoding rules of OAuth 1.0a (RFC 5849
section 3.6 percent-encoding, parameter normalization and base string URI
construction) along with nonce generation, timestamp handling and input
validation.
"""

import re
import time
import secrets
from typing import Any, List, Mapping, Tuple
from urllib.parse import parse_qsl, quote, unquote, urlsplit

from ..exceptions import EncodingError, SigningError
from .types import (
    OAUTH_PARAMETER_PREFIX,
    ParameterList,
    Parameters,
    SigningErrorCodes,
)

DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
}

NONCE_BYTES = 16

_PERCENT_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _to_utf8(value: Any) -> bytes:
    """
    Convert a parameter component to its UTF-8 bytes.

    Raises:
        SigningError: If the value is not a string, bytes or integer
        EncodingError: If the value has no valid UTF-8 representation
    """
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
        try:
            data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise EncodingError(
                f"Value is not valid UTF-8: {e.reason}",
                {"position": e.start}
            ) from e
        return data

    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise SigningError(
            f"Unsupported parameter value type: {type(value).__name__}",
            SigningErrorCodes.INVALID_PARAMETERS,
            {"value_type": type(value).__name__}
        )

    try:
        return str(value).encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Value cannot be encoded as UTF-8: {e.reason}",
            {"position": e.start}
        ) from e


def _to_text(value: Any) -> str:
    return _to_utf8(value).decode('utf-8')


def percent_encode(value: Any) -> str:
    """
    Percent-encode a value per RFC 3986 as required by OAuth 1.0a.

    Every byte of the UTF-8 representation outside the unreserved set
    ``A-Z a-z 0-9 - . _ ~`` becomes ``%XX`` with uppercase hex digits.

    Args:
        value: String, bytes (valid UTF-8) or integer to encode

    Returns:
        str: Encoded value

    Raises:
        SigningError: For values of any other type
        EncodingError: If the value cannot be represented as UTF-8
    """
    return quote(_to_utf8(value), safe='~')


def percent_decode(value: str) -> str:
    """
    Decode an RFC 3986 percent-encoded string.

    Raises:
        EncodingError: If the value is malformed or decodes to invalid UTF-8
    """
    if _PERCENT_ESCAPE.search(value):
        raise EncodingError(
            "Malformed percent-encoding",
            {"value": value}
        )
    try:
        return unquote(value, encoding='utf-8', errors='strict')
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Decoded value is not valid UTF-8: {e.reason}",
            {"value": value}
        ) from e


def to_parameter_pairs(params: Parameters) -> ParameterList:
    """
    Flatten a parameter multimap into a list of (name, value) pairs.

    Accepts None, a mapping of name to a value or to a list/tuple of values,
    or an iterable of (name, value) pairs.

    Raises:
        SigningError: If the parameters have an unsupported shape
        EncodingError: If a name or value cannot be represented as UTF-8
    """
    if params is None:
        return []

    pairs: List[Tuple[Any, Any]] = []

    if isinstance(params, Mapping):
        for name, value in params.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((name, item) for item in value)
            else:
                pairs.append((name, value))
    elif isinstance(params, (str, bytes)):
        raise SigningError(
            "Parameters must be a mapping or a sequence of pairs, not a string",
            SigningErrorCodes.INVALID_PARAMETERS
        )
    else:
        for item in params:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise SigningError(
                    f"Parameter entries must be (name, value) pairs, got {item!r}",
                    SigningErrorCodes.INVALID_PARAMETERS
                )
            pairs.append((item[0], item[1]))

    return [(_to_text(name), _to_text(value)) for name, value in pairs]


def sort_parameters(params: Parameters) -> ParameterList:
    """
    Sort parameters in OAuth normalized order.

    Pairs are ordered by encoded name, then by encoded value. Encoded values
    are pure ASCII, so string ordering equals byte-wise ordering.
    """
    pairs = to_parameter_pairs(params)
    return sorted(pairs, key=lambda pair: (percent_encode(pair[0]), percent_encode(pair[1])))


def normalize_parameters(params: Parameters) -> str:
    """
    Build the OAuth normalized parameter string.

    Every name and value is percent-encoded separately, the encoded pairs are
    sorted by name then value, joined with ``=`` and then with ``&``.

    Args:
        params: Parameter multimap (mapping or sequence of pairs)

    Returns:
        str: Normalized parameter string
    """
    encoded = sorted(
        (percent_encode(name), percent_encode(value))
        for name, value in to_parameter_pairs(params)
    )
    return '&'.join(f"{name}={value}" for name, value in encoded)


def normalize_url(url: str) -> str:
    """
    Build the base string URI for a request URL.

    The scheme and host are lower-cased, a default port is dropped, userinfo,
    query and fragment are removed and the path is kept exactly as given.

    Args:
        url: Absolute http or https URL

    Returns:
        str: Normalized URL

    Raises:
        SigningError: If the URL is not an absolute http(s) URL
    """
    if not isinstance(url, str) or not url:
        raise SigningError(
            "Request URL must be a non-empty string",
            SigningErrorCodes.INVALID_URL,
            {"url": repr(url)}
        )

    try:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise SigningError(
            f"Failed to parse URL: {e}",
            SigningErrorCodes.INVALID_URL,
            {"url": url}
        ) from e

    if scheme not in DEFAULT_PORTS:
        raise SigningError(
            f"Unsupported URL scheme: {parts.scheme or '(none)'}",
            SigningErrorCodes.INVALID_URL,
            {"url": url, "scheme": parts.scheme}
        )

    if not host:
        raise SigningError(
            f"Invalid URL format: {url}",
            SigningErrorCodes.INVALID_URL,
            {"url": url}
        )

    if ':' in host:
        host = f"[{host}]"

    netloc = host
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"

    return f"{scheme}://{netloc}{parts.path}"


def extract_query_parameters(url: str) -> ParameterList:
    """
    Extract the query string parameters of a URL as ordered pairs.

    Blank values are kept; ``+`` decodes to a space as in form encoding.

    Raises:
        EncodingError: If the query decodes to invalid UTF-8
    """
    query = urlsplit(url).query
    if not query:
        return []
    try:
        return parse_qsl(query, keep_blank_values=True, encoding='utf-8', errors='strict')
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Query string is not valid UTF-8: {e.reason}",
            {"url": url}
        ) from e


def is_oauth_parameter(name: str) -> bool:
    return name.startswith(OAUTH_PARAMETER_PREFIX)


def generate_nonce() -> str:
    """
    Generate a nonce for replay protection.

    Uses the operating system CSPRNG through ``secrets``, which is safe to
    call from multiple threads.

    Returns:
        str: 32 lowercase hex characters
    """
    return secrets.token_hex(NONCE_BYTES)


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def validate_nonce(nonce: str) -> bool:
    """
    Validate a nonce value.

    Args:
        nonce: Nonce string to validate

    Returns:
        bool: True if nonce is a non-empty string without whitespace
    """
    if not isinstance(nonce, str) or not nonce:
        return False

    return not any(ch.isspace() for ch in nonce)


def validate_timestamp(timestamp: int) -> bool:
    """
    Validate timestamp (should be a non-negative Unix timestamp in seconds).

    Args:
        timestamp: Unix timestamp to validate

    Returns:
        bool: True if timestamp is valid
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        return False

    return timestamp >= 0


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
