"""
Shared fixtures for the SimpleOAuth test suite
"""

import pytest

from simpleoauth import SigningOptions, Token

FIXED_NONCE = "abc123"
FIXED_TIMESTAMP = 1318622958


@pytest.fixture
def access_token():
    """Access token from the reference signing scenario"""
    return Token.access_token("ck", "cs", "tk", "ts", service="tasks")


@pytest.fixture
def request_token():
    """Fresh request token with a callback"""
    return Token.request_token("ck", "cs", callback_url="https://app.example.com/callback")


@pytest.fixture
def fixed_options():
    """Signing options with a fixed nonce and timestamp"""
    return SigningOptions(nonce=FIXED_NONCE, timestamp=FIXED_TIMESTAMP)
