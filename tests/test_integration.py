"""
Test suite for the requests integration

Signs prepared requests through OAuth1Auth and SigningSession without any
network traffic.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from simpleoauth import (
    EncodingError,
    InvalidTokenError,
    ParameterCollisionError,
    Token,
)
from simpleoauth.signing import (
    OAuth1Auth,
    SigningOptions,
    SigningSession,
    create_signer,
    create_signing_config,
    create_signing_session,
)

URL = "https://api.example.com/v1/items"
NONCE = "abc123"
TIMESTAMP = 1318622958


def fixed_config():
    return (create_signing_config()
            .nonce_generator(lambda: NONCE)
            .timestamp_generator(lambda: TIMESTAMP)
            .build())


def expected_header(token, url, method="GET", parameters=None, realm=None):
    """Header produced by signing the same request directly."""
    return create_signer().sign_request(
        token, url, method, parameters,
        options=SigningOptions(nonce=NONCE, timestamp=TIMESTAMP, realm=realm)
    )


class TestOAuth1Auth:
    """Test the requests authentication handler"""

    def setup_method(self):
        """Set up test fixtures"""
        self.token = Token.access_token("ck", "cs", "tk", "ts")
        self.auth = OAuth1Auth(self.token, fixed_config())

    def test_signs_get_request(self):
        prepared = requests.Request('GET', URL, auth=self.auth).prepare()

        assert prepared.headers['Authorization'] == expected_header(self.token, URL)
        assert prepared.headers['Authorization'].startswith('OAuth oauth_consumer_key="ck"')

    def test_query_parameters_signed(self):
        """Query parameters added by requests are covered by the signature"""
        prepared = requests.Request('GET', URL, params={'limit': 10, 'tag': ['b', 'a']}).prepare()
        self.auth(prepared)

        assert prepared.url == URL + "?limit=10&tag=b&tag=a"
        assert prepared.headers['Authorization'] == expected_header(self.token, prepared.url)
        assert prepared.headers['Authorization'] != expected_header(self.token, URL)

    def test_form_body_signed(self):
        """Form-encoded body parameters are covered by the signature"""
        data = {'status': 'Hello Ladies + Gentlemen, a signed OAuth request!'}
        prepared = requests.Request('POST', URL, data=data).prepare()
        self.auth(prepared)

        assert prepared.headers['Authorization'] == expected_header(self.token, URL, "POST", data)
        assert prepared.headers['Authorization'] != expected_header(self.token, URL, "POST")

    def test_form_body_bytes(self):
        prepared = requests.Request(
            'PUT', URL,
            data='a=1&b=caf%C3%A9'.encode('ascii'),
            headers={'Content-Type': 'application/x-www-form-urlencoded; charset=utf-8'}
        ).prepare()
        self.auth(prepared)

        expected = expected_header(self.token, URL, "PUT", [("a", "1"), ("b", "café")])
        assert prepared.headers['Authorization'] == expected

    def test_json_body_not_signed(self):
        """Non-form bodies are not part of the signature"""
        prepared = requests.Request('POST', URL, json={'status': 'hello'}).prepare()
        self.auth(prepared)

        assert prepared.headers['Authorization'] == expected_header(self.token, URL, "POST")

    def test_invalid_form_body(self):
        prepared = requests.Request(
            'POST', URL,
            data=b'a=\xff',
            headers={'Content-Type': 'application/x-www-form-urlencoded'}
        ).prepare()

        with pytest.raises(EncodingError):
            self.auth(prepared)

    def test_reserved_query_parameter(self):
        prepared = requests.Request('GET', URL, params={'oauth_token': 'evil'}).prepare()
        with pytest.raises(ParameterCollisionError):
            self.auth(prepared)

    def test_realm_and_signature_method(self):
        """Test per-handler realm and signature method overrides"""
        auth = OAuth1Auth(self.token, fixed_config(), signature_method="PLAINTEXT", realm="Photos")
        prepared = requests.Request('GET', URL, auth=auth).prepare()

        header = prepared.headers['Authorization']
        assert header.startswith('OAuth realm="Photos", ')
        assert 'oauth_signature="cs%26ts"' in header
        assert 'oauth_signature_method="PLAINTEXT"' in header

    def test_invalid_token_rejected(self):
        with pytest.raises(InvalidTokenError):
            OAuth1Auth(Token())


class TestSigningSession:
    """Test the signing session wrapper"""

    def setup_method(self):
        self.token = Token.access_token("ck", "cs", "tk", "ts")

    @patch('requests.Session.send')
    def test_requests_signed(self, mock_send):
        """Test that outgoing requests carry an Authorization header"""
        mock_send.return_value = Mock(status_code=200)

        with create_signing_session(self.token, fixed_config(), trust_env=False) as session:
            response = session.get(URL, params={'limit': 10})

        assert response.status_code == 200
        prepared = mock_send.call_args[0][0]
        assert prepared.headers['Authorization'] == expected_header(self.token, URL + "?limit=10")

    @patch('requests.Session.send')
    def test_disable_and_enable_signing(self, mock_send):
        mock_send.return_value = Mock(status_code=200)
        session = create_signing_session(self.token, fixed_config(), trust_env=False)

        session.disable_signing()
        session.post(URL, data={'a': '1'})
        assert 'Authorization' not in mock_send.call_args[0][0].headers

        session.enable_signing()
        session.post(URL, data={'a': '1'})
        assert mock_send.call_args[0][0].headers['Authorization'] == expected_header(
            self.token, URL, "POST", {'a': '1'}
        )

    def test_unconfigured_session(self):
        """Without a token requests go out unsigned"""
        inner = Mock()
        session = SigningSession(session=inner)

        session.enable_signing()
        session.delete(URL)

        inner.request.assert_called_once_with('DELETE', URL)

    def test_configure_signing(self):
        inner = Mock()
        session = SigningSession(session=inner, auto_sign=False)
        session.configure_signing(self.token, fixed_config())

        session.head(URL)

        _, kwargs = inner.request.call_args
        assert isinstance(kwargs['auth'], OAuth1Auth)
        assert kwargs['auth'].token == self.token
        assert session.auto_sign

    def test_http_verbs(self):
        """Test that each helper forwards its method"""
        inner = Mock()
        session = SigningSession(self.token, fixed_config(), session=inner)

        session.get(URL)
        session.post(URL)
        session.put(URL)
        session.delete(URL)
        session.head(URL)

        methods = [call[0][0] for call in inner.request.call_args_list]
        assert methods == ['GET', 'POST', 'PUT', 'DELETE', 'HEAD']

    def test_close(self):
        inner = Mock()
        with SigningSession(self.token, session=inner):
            pass
        inner.close.assert_called_once()

    def test_session_kwargs(self):
        session = create_signing_session(headers={'User-Agent': 'simpleoauth-tests'}, verify=False)
        assert session.session.headers['User-Agent'] == 'simpleoauth-tests'
        assert session.session.verify is False
        assert session.auth is None
        session.close()
