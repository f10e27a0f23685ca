"""
Client configuration management for SimpleOAuth

Loads consumer credentials and signing defaults per remote service from a
JSON document. Only consumer-side settings live here; tokens obtained from
the provider are never written back.
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import ConfigError, SimpleOAuthError
from ..signing.signing_config import (
    create_signing_config,
    resolve_auth_method,
    resolve_signature_method,
)
from ..signing.types import AuthMethod, SignatureMethod, SigningConfig
from ..token import Token

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SIMPLEOAUTH_CONFIG"
SUPPORTED_FORMAT_VERSIONS = ("1.0",)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServiceConfig:
    """Consumer credentials and signing defaults for one remote service"""
    name: str
    consumer_key: str
    consumer_secret: str = field(repr=False)
    callback_url: str = ""
    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1
    auth_method: AuthMethod = AuthMethod.HTTP_HEADER
    realm: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "WARNING"
    log_base_strings: bool = False


@dataclass
class ClientConfig:
    """Client configuration structure"""
    config_format_version: str
    services: Dict[str, ServiceConfig]
    default_service: str
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ClientConfigManager:
    """Client configuration manager"""

    def __init__(self, config: ClientConfig, service: Optional[str] = None):
        self.config = config
        self.current_service = service or config.default_service
        self._validate()

    @classmethod
    def from_json(cls, json_string: str, service: Optional[str] = None) -> 'ClientConfigManager':
        """Load client configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR") from e

        try:
            config = cls._parse_config_dict(data)
        except SimpleOAuthError as e:
            raise ConfigError(f"Invalid configuration format: {e.message}", "INVALID_FORMAT") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigError(f"Invalid configuration format: {e}", "INVALID_FORMAT") from e

        return cls(config, service)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], service: Optional[str] = None) -> 'ClientConfigManager':
        """Load client configuration from file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR") from e

        logger.debug(f"Loaded client configuration from {path}")
        return cls.from_json(json_string, service)

    @classmethod
    def load_default(cls, service: Optional[str] = None) -> 'ClientConfigManager':
        """
        Load configuration from the default locations.

        ``$SIMPLEOAUTH_CONFIG`` wins when set; otherwise
        ``./simpleoauth.json`` and ``~/.config/simpleoauth/config.json``
        are tried in order.
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return cls.from_file(env_path, service)

        default_paths = [
            Path("simpleoauth.json"),
            Path.home() / ".config" / "simpleoauth" / "config.json",
        ]

        for path in default_paths:
            if path.exists():
                return cls.from_file(path, service)

        raise ConfigError("Default configuration file not found", "FILE_NOT_FOUND")

    def set_service(self, service: str) -> None:
        """Set current service"""
        if service not in self.config.services:
            raise ConfigError(f"Service '{service}' not found", "SERVICE_NOT_FOUND")
        self.current_service = service

    def get_service(self, service: Optional[str] = None) -> ServiceConfig:
        """Get service configuration (current service when omitted)"""
        name = service or self.current_service
        service_config = self.config.services.get(name)
        if not service_config:
            raise ConfigError(f"Service '{name}' not found", "SERVICE_NOT_FOUND")
        return service_config

    def list_services(self) -> List[str]:
        """List configured services"""
        return list(self.config.services.keys())

    def get_logging_config(self) -> LoggingConfig:
        return self.config.logging

    def to_signing_config(self, service: Optional[str] = None) -> SigningConfig:
        """Build a signer configuration from a service's defaults"""
        service_config = self.get_service(service)
        return (create_signing_config()
                .signature_method(service_config.signature_method)
                .auth_method(service_config.auth_method)
                .realm(service_config.realm)
                .log_base_strings(self.config.logging.log_base_strings)
                .build())

    def to_request_token(self, service: Optional[str] = None) -> Token:
        """Build a fresh request token carrying a service's consumer credentials"""
        service_config = self.get_service(service)
        return Token.request_token(
            service_config.consumer_key,
            service_config.consumer_secret,
            callback_url=service_config.callback_url,
            service=service_config.name
        )

    def to_access_token(self, token_string: str, token_secret: str, service: Optional[str] = None) -> Token:
        """Build an access token from a service's consumer credentials and an issued token"""
        service_config = self.get_service(service)
        return Token.access_token(
            service_config.consumer_key,
            service_config.consumer_secret,
            token_string,
            token_secret,
            service=service_config.name
        )

    def _validate(self) -> None:
        """Validate the configuration"""
        if self.config.config_format_version not in SUPPORTED_FORMAT_VERSIONS:
            raise ConfigError(
                f"Unsupported configuration format version '{self.config.config_format_version}'",
                "INVALID_FORMAT"
            )

        if self.current_service not in self.config.services:
            raise ConfigError(
                f"Service '{self.current_service}' not found",
                "SERVICE_NOT_FOUND"
            )

        for name, service_config in self.config.services.items():
            if not service_config.consumer_key or not service_config.consumer_secret:
                raise ConfigError(
                    f"Service '{name}' requires consumer_key and consumer_secret",
                    "INVALID_SERVICE"
                )

        level = self.config.logging.level
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Unknown logging level '{level}'",
                "INVALID_FORMAT"
            )

    @staticmethod
    def _parse_config_dict(data: Dict[str, Any]) -> ClientConfig:
        """Parse configuration dictionary into structured objects"""
        services = {}
        for name, service_data in data['services'].items():
            services[name] = ServiceConfig(
                name=name,
                consumer_key=service_data['consumer_key'],
                consumer_secret=service_data['consumer_secret'],
                callback_url=service_data.get('callback_url', ''),
                signature_method=resolve_signature_method(
                    service_data.get('signature_method', SignatureMethod.HMAC_SHA1)
                ),
                auth_method=resolve_auth_method(
                    service_data.get('auth_method', AuthMethod.HTTP_HEADER)
                ),
                realm=service_data.get('realm')
            )

        if not services:
            raise ValueError("at least one service must be configured")

        default_service = data.get('default_service')
        if default_service is None:
            default_service = next(iter(services))

        return ClientConfig(
            config_format_version=data.get('config_format_version', '1.0'),
            services=services,
            default_service=default_service,
            logging=LoggingConfig(**data.get('logging', {}))
        )


def load_client_config_from_json(json_string: str, service: Optional[str] = None) -> ClientConfigManager:
    """Load client configuration from JSON string"""
    return ClientConfigManager.from_json(json_string, service)


def load_client_config_from_file(file_path: Union[str, Path], service: Optional[str] = None) -> ClientConfigManager:
    """Load client configuration from file"""
    return ClientConfigManager.from_file(file_path, service)


def load_default_client_config(service: Optional[str] = None) -> ClientConfigManager:
    """Load default client configuration"""
    return ClientConfigManager.load_default(service)
