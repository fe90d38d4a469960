"""
Custom Exceptions - Application-specific error types
"""


class CadenceError(Exception):
    """Base exception for all habit tracker errors"""
    pass


class ValidationError(CadenceError):
    """Raised when request input is missing or malformed"""
    pass


class NotFoundError(CadenceError):
    """Raised when a referenced habit does not exist"""
    pass


class StoreError(CadenceError):
    """Raised when a database statement, commit or connection fails"""
    pass
