"""
Exception classes for SimpleOAuth
"""

from typing import Optional, Dict, Any


class SimpleOAuthError(Exception):
    """Base exception for all SimpleOAuth errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
    
    @property
    def code(self) -> str:
        return self.error_code
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.error_code}, details: {self.details})"
        return f"{self.message} (code: {self.error_code})"
    
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message='{self.message}', "
            f"code='{self.error_code}', details={self.details})"
        )


class SigningError(SimpleOAuthError):
    """
    Error class for signing operations
    
    Attributes:
        message: Error message
        error_code: Error code for programmatic handling
        details: Optional additional error details (never secrets)
    """
    
    def __init__(self, message: str, code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)


class InvalidTokenError(SigningError):
    """Raised when a token's kind or fields are insufficient for signing"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "INVALID_TOKEN", details)


class ParameterCollisionError(SigningError):
    """Raised when a caller parameter uses a reserved oauth_* name"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PARAMETER_COLLISION", details)


class EncodingError(SigningError):
    """Raised when input cannot be represented as UTF-8"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "ENCODING_ERROR", details)


class UnsupportedSignatureMethodError(SigningError):
    """Raised for signature methods other than HMAC-SHA1 and PLAINTEXT"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UNSUPPORTED_SIGNATURE_METHOD", details)


class ConfigError(SimpleOAuthError):
    """Exception raised for client configuration loading and validation errors"""
    pass
