"""
Test suite for client configuration loading
"""

import json

import pytest

from simpleoauth.config import (
    CONFIG_ENV_VAR,
    ClientConfigManager,
    load_client_config_from_file,
    load_client_config_from_json,
    load_default_client_config,
)
from simpleoauth.exceptions import ConfigError
from simpleoauth.signing import AuthMethod, SignatureMethod
from simpleoauth.token import TokenType


def sample_config():
    return {
        "config_format_version": "1.0",
        "default_service": "tasks",
        "services": {
            "tasks": {
                "consumer_key": "tasks-key",
                "consumer_secret": "tasks-secret",
                "callback_url": "https://app.example.com/callback"
            },
            "mail": {
                "consumer_key": "mail-key",
                "consumer_secret": "mail-secret",
                "signature_method": "PLAINTEXT",
                "auth_method": "sasl",
                "realm": "imap.example.com"
            }
        },
        "logging": {
            "level": "DEBUG",
            "log_base_strings": True
        }
    }


class TestClientConfigLoading:
    """Test parsing and validation of configuration documents"""

    def test_from_json(self):
        """Test loading a complete configuration"""
        manager = ClientConfigManager.from_json(json.dumps(sample_config()))

        assert manager.current_service == "tasks"
        assert manager.list_services() == ["tasks", "mail"]

        tasks = manager.get_service()
        assert tasks.consumer_key == "tasks-key"
        assert tasks.signature_method == SignatureMethod.HMAC_SHA1
        assert tasks.auth_method == AuthMethod.HTTP_HEADER
        assert tasks.realm is None

        mail = manager.get_service("mail")
        assert mail.signature_method == SignatureMethod.PLAINTEXT
        assert mail.auth_method == AuthMethod.SASL
        assert mail.realm == "imap.example.com"

        logging_config = manager.get_logging_config()
        assert logging_config.level == "DEBUG"
        assert logging_config.log_base_strings is True

    def test_minimal_config(self):
        """Default service falls back to the first one listed"""
        data = {"services": {"only": {"consumer_key": "k", "consumer_secret": "s"}}}
        manager = load_client_config_from_json(json.dumps(data))

        assert manager.current_service == "only"
        assert manager.get_logging_config().level == "WARNING"

    def test_secret_not_in_repr(self):
        manager = ClientConfigManager.from_json(json.dumps(sample_config()))
        assert "tasks-secret" not in repr(manager.get_service())

    def test_parse_error(self):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_json("{not json")
        assert exc_info.value.error_code == "PARSE_ERROR"

    def test_invalid_format(self):
        """Test documents with missing or malformed fields"""
        documents = [
            {},
            {"services": {}},
            {"services": {"a": {"consumer_key": "k"}}},
            {"services": {"a": {"consumer_key": "k", "consumer_secret": "s", "signature_method": "RSA-SHA1"}}},
            {"services": {"a": {"consumer_key": "k", "consumer_secret": "s"}}, "logging": {"colour": True}},
            {"services": ["a"]},
        ]
        for document in documents:
            with pytest.raises(ConfigError) as exc_info:
                ClientConfigManager.from_json(json.dumps(document))
            assert exc_info.value.error_code == "INVALID_FORMAT", document

    def test_unsupported_version(self):
        data = sample_config()
        data["config_format_version"] = "2.0"
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_unknown_log_level(self):
        data = sample_config()
        data["logging"]["level"] = "CHATTY"
        with pytest.raises(ConfigError):
            ClientConfigManager.from_json(json.dumps(data))

        data["logging"]["level"] = 5
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_FORMAT"

    def test_empty_credentials(self):
        data = sample_config()
        data["services"]["mail"]["consumer_secret"] = ""
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_json(json.dumps(data))
        assert exc_info.value.error_code == "INVALID_SERVICE"

    def test_unknown_default_service(self):
        data = sample_config()
        data["default_service"] = "calendar"
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_json(json.dumps(data))
        assert exc_info.value.error_code == "SERVICE_NOT_FOUND"


class TestServiceSelection:
    """Test service switching and derived objects"""

    def setup_method(self):
        self.manager = ClientConfigManager.from_json(json.dumps(sample_config()))

    def test_select_service(self):
        manager = ClientConfigManager.from_json(json.dumps(sample_config()), service="mail")
        assert manager.current_service == "mail"

        self.manager.set_service("mail")
        assert self.manager.get_service().name == "mail"

    def test_unknown_service(self):
        with pytest.raises(ConfigError) as exc_info:
            self.manager.set_service("calendar")
        assert exc_info.value.error_code == "SERVICE_NOT_FOUND"

        with pytest.raises(ConfigError):
            self.manager.get_service("calendar")

    def test_to_signing_config(self):
        """Test signer configuration derived from a service"""
        config = self.manager.to_signing_config("mail")
        assert config.signature_method == SignatureMethod.PLAINTEXT
        assert config.auth_method == AuthMethod.SASL
        assert config.realm == "imap.example.com"
        assert config.log_base_strings is True

    def test_to_request_token(self):
        token = self.manager.to_request_token()
        assert token.kind == TokenType.REQUEST_TOKEN
        assert token.consumer_key == "tasks-key"
        assert token.consumer_secret == "tasks-secret"
        assert token.callback_url == "https://app.example.com/callback"
        assert token.service == "tasks"

    def test_to_access_token(self):
        token = self.manager.to_access_token("tk", "ts", service="mail")
        assert token.kind == TokenType.ACCESS_TOKEN
        assert token.consumer_key == "mail-key"
        assert token.token_string == "tk"
        assert token.service == "mail"
        token.validate()


class TestConfigFiles:
    """Test loading configuration from disk"""

    def write_config(self, path, data=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data or sample_config()), encoding='utf-8')
        return path

    def test_from_file(self, tmp_path):
        path = self.write_config(tmp_path / "client.json")
        manager = load_client_config_from_file(path, service="mail")
        assert manager.current_service == "mail"

        manager = ClientConfigManager.from_file(str(path))
        assert manager.current_service == "tasks"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.from_file(tmp_path / "missing.json")
        assert exc_info.value.error_code == "FILE_ERROR"

    def test_default_from_environment(self, tmp_path, monkeypatch):
        """The environment variable takes precedence over default paths"""
        path = self.write_config(tmp_path / "env.json")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        monkeypatch.chdir(tmp_path)

        manager = load_default_client_config()
        assert manager.list_services() == ["tasks", "mail"]

    def test_default_from_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        self.write_config(tmp_path / "simpleoauth.json", {
            "services": {"local": {"consumer_key": "k", "consumer_secret": "s"}}
        })

        manager = ClientConfigManager.load_default()
        assert manager.current_service == "local"

    def test_default_from_home(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.chdir(work)
        self.write_config(home / ".config" / "simpleoauth" / "config.json")

        manager = ClientConfigManager.load_default(service="mail")
        assert manager.current_service == "mail"

    def test_no_default_config(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "empty-home"))
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigError) as exc_info:
            ClientConfigManager.load_default()
        assert exc_info.value.error_code == "FILE_NOT_FOUND"
