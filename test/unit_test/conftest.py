"""
Shared fixtures for unit tests.

Web3 and the contracts are replaced with mocks; no network access is needed.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from exchange_adapter.config import ExchangeConfig
from exchange_adapter.infra.evm_signer import EVMSigner
from exchange_adapter.protocols.cryptodev.api import EXCHANGE_ABI

# Well-known test key from the web3.py documentation - DO NOT use with real funds
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

EXCHANGE_ADDRESS = "0x" + "11" * 20
TOKEN_ADDRESS = "0x" + "22" * 20
WALLET_ADDRESS = "0x" + "33" * 20


class ContractMocks:
    """Mock web3 whose eth.contract() hands out one mock per ABI"""

    def __init__(self):
        self.web3 = MagicMock(name="web3")
        self.exchange = MagicMock(name="exchange_contract")
        self.token = MagicMock(name="token_contract")

        def _contract(address, abi):
            return self.exchange if abi is EXCHANGE_ABI else self.token

        self.web3.eth.contract.side_effect = _contract

    def set_reads(self, total_supply=0, reserve=0, exchange_eth=0):
        self.exchange.functions.totalSupply.return_value.call.return_value = total_supply
        self.exchange.functions.getReserve.return_value.call.return_value = reserve
        self.web3.eth.get_balance.return_value = exchange_eth


def receipt_result(tx_hash: str, block_number: int = 100) -> dict:
    """Signer result dict for a mined transaction"""
    return {
        "status": "success",
        "tx_hash": tx_hash,
        "block_number": block_number,
        "gas_used": 50_000,
        "effective_gas_price": 10,
        "receipt": {},
    }


def make_signer(results=None):
    """
    Mock signer; sign_and_send returns successive receipt results and records
    the operation names in signer.operations
    """
    signer = MagicMock(spec=EVMSigner)
    signer.address = WALLET_ADDRESS
    signer.operations = []
    results = list(results) if results is not None else None

    def _sign_and_send(web3, tx, wait_for_receipt=True, timeout=None, operation=None):
        signer.operations.append(operation)
        if results is None:
            return receipt_result(f"0x{len(signer.operations):064x}")
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    signer.sign_and_send.side_effect = _sign_and_send
    return signer


@pytest.fixture
def exchange_config():
    return ExchangeConfig(exchange_address=EXCHANGE_ADDRESS, token_address=TOKEN_ADDRESS)


@pytest.fixture
def contracts():
    return ContractMocks()


@pytest.fixture
def signer():
    return make_signer()
