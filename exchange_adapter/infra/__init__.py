"""
Infrastructure layer for the Exchange Adapter

Provides:
- EVMSigner: local transaction signing using web3.py / eth-account
- create_web3: read-only provider factory
- wait_for_confirmation: block until a transaction is mined
- CorrelationContext: correlation IDs for transaction tracing
"""

from .evm_signer import (
    EVMSigner,
    create_web3,
    create_evm_signer,
    wait_for_confirmation,
)
from .tracing import (
    CorrelationContext,
    classify_error,
    generate_correlation_id,
    get_correlation_id,
    log_with_correlation,
)

__all__ = [
    "EVMSigner",
    "create_web3",
    "create_evm_signer",
    "wait_for_confirmation",
    "CorrelationContext",
    "classify_error",
    "generate_correlation_id",
    "get_correlation_id",
    "log_with_correlation",
]
