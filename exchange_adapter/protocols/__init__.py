"""
Protocol adapters
"""

from .cryptodev import ExchangeAdapter

__all__ = ["ExchangeAdapter"]
