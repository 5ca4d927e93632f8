"""
Error definitions for the Exchange Adapter
"""

from .exceptions import (
    ErrorCode,
    ExchangeAdapterError,
    DivisionByZero,
    RemoteCallFailure,
    InvalidInput,
    SignerError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "ExchangeAdapterError",
    "DivisionByZero",
    "RemoteCallFailure",
    "InvalidInput",
    "SignerError",
    "ConfigurationError",
]
