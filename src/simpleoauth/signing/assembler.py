"""
Rendering of signing results

Pure formatting over a SigningResult: the ``Authorization: OAuth ...``
header value (RFC 5849 section 3.5.1) or a SASL continuation string.
"""

from typing import Optional, Union

from ..exceptions import SigningError
from .types import AuthMethod, SigningErrorCodes, SigningResult
from .utils import percent_encode

AUTHORIZATION_SCHEME = "OAuth"


def to_authorization_header(result: SigningResult, realm: Optional[str] = None) -> str:
    """
    Render the oauth_* parameters as an Authorization header value.

    Each parameter becomes ``name="value"`` with both parts percent-encoded,
    joined by ``", "`` in normalized order. Caller parameters are not
    included. A realm, when given here or on the result, comes first; it is
    not covered by the signature.

    Args:
        result: Signing result
        realm: Optional realm overriding the result's realm

    Returns:
        str: Header value, e.g. ``OAuth oauth_consumer_key="ck", ...``
    """
    realm = realm if realm is not None else result.realm

    fields = []
    if realm is not None:
        fields.append(f'realm="{_quote_realm(realm)}"')

    fields.extend(
        f'{percent_encode(name)}="{percent_encode(value)}"'
        for name, value in result.oauth_parameters
    )

    return f"{AUTHORIZATION_SCHEME} " + ", ".join(fields)


def to_sasl_string(result: SigningResult) -> str:
    """
    Render the oauth_* parameters as a SASL continuation string.

    Same parameters and order as the header, as ``name=value`` joined by
    ``,`` with no scheme prefix and no quoting.
    """
    return ",".join(
        f"{percent_encode(name)}={percent_encode(value)}"
        for name, value in result.oauth_parameters
    )


def render(result: SigningResult, auth_method: Union[AuthMethod, str, None] = None) -> str:
    """
    Render a signing result in the requested output format.

    Args:
        result: Signing result
        auth_method: Output format; defaults to the one recorded on the result

    Raises:
        SigningError: For unknown output formats
    """
    method = auth_method or result.auth_method
    if method == AuthMethod.HTTP_HEADER:
        return to_authorization_header(result)
    if method == AuthMethod.SASL:
        return to_sasl_string(result)

    raise SigningError(
        f"Unsupported auth method: {method}",
        SigningErrorCodes.UNSUPPORTED_AUTH_METHOD,
        {"auth_method": str(method)}
    )


def _quote_realm(realm: str) -> str:
    return realm.replace('\\', '\\\\').replace('"', '\\"')
