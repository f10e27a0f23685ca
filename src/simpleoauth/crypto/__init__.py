"""
Cryptographic operations for SimpleOAuth
"""

from .hmac_sha1 import (
    hmac_sha1,
    hmac_sha1_base64,
    check_platform_compatibility,
)

__all__ = [
    'hmac_sha1',
    'hmac_sha1_base64',
    'check_platform_compatibility',
]
