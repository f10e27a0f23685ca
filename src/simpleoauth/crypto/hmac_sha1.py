"""
HMAC-SHA1 for OAuth 1.0a signatures

This module computes the keyed digest behind the HMAC-SHA1 signature method
using the cryptography package.
"""

import sys
import base64
import platform
from typing import Any, Dict, Union

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import SigningError

HMAC_SHA1_DIGEST_LENGTH = 20


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    return value


def hmac_sha1(key: Union[str, bytes], message: Union[str, bytes]) -> bytes:
    """
    Compute the raw HMAC-SHA1 digest of a message.
    
    Args:
        key: Signing key (string or bytes)
        message: Message to authenticate (string or bytes)
        
    Returns:
        bytes: 20-byte digest
        
    Raises:
        SigningError: If the digest cannot be computed
    """
    try:
        mac = hmac.HMAC(_to_bytes(key), hashes.SHA1())
        mac.update(_to_bytes(message))
        return mac.finalize()
    except Exception as e:
        raise SigningError(
            f"HMAC-SHA1 computation failed: {e}",
            "CRYPTO_ERROR",
            {"original_error": type(e).__name__}
        ) from e


def hmac_sha1_base64(key: Union[str, bytes], message: Union[str, bytes]) -> str:
    """Compute HMAC-SHA1 and return the digest base64-encoded."""
    return base64.b64encode(hmac_sha1(key, message)).decode('ascii')


def check_platform_compatibility() -> Dict[str, Any]:
    """
    Check platform compatibility for HMAC-SHA1 signing.
    
    Returns:
        dict: Compatibility information including HMAC-SHA1 support and
              platform details
    """
    compatibility = {
        'hmac_sha1_supported': False,
        'platform_info': {
            'system': platform.system(),
            'python_version': sys.version,
            'architecture': platform.architecture()[0],
        }
    }
    
    try:
        compatibility['hmac_sha1_supported'] = len(hmac_sha1(b'key', b'message')) == HMAC_SHA1_DIGEST_LENGTH
    except SigningError:
        compatibility['hmac_sha1_supported'] = False
    
    return compatibility
