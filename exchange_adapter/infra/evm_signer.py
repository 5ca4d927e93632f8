"""
EVM ledger client using web3.py

Provides the read-only provider factory, local private key signing, and
confirmation waits for the exchange transactions.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Dict, Any, Tuple, Union

from web3 import Web3, HTTPProvider
from web3.exceptions import TimeExhausted
from web3.middleware import ExtraDataToPOAMiddleware
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import SignerError, RemoteCallFailure, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)

# Proof-of-authority chains need the extraData middleware (BSC, BSC testnet, Rinkeby)
POA_CHAIN_IDS = (56, 97, 4)


def _hash_hex(tx_hash: Union[bytes, str]) -> str:
    """Normalize a transaction hash to 0x-prefixed hex"""
    if isinstance(tx_hash, str):
        return tx_hash if tx_hash.startswith("0x") else "0x" + tx_hash
    return Web3.to_hex(tx_hash)


def wait_for_confirmation(
    web3: Web3,
    tx_hash: Union[bytes, str],
    timeout: Optional[float] = None,
    poll_latency: Optional[float] = None,
    operation: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Block until the transaction is mined (first confirmation)

    Args:
        web3: Web3 instance
        tx_hash: Transaction hash
        timeout: Seconds to wait for the receipt (defaults to config.tx.confirmation_timeout)
        poll_latency: Seconds between receipt polls (defaults to config.tx.poll_latency)
        operation: Operation name for error messages

    Returns:
        Transaction receipt

    Raises:
        RemoteCallFailure: If the transaction reverted, the wait timed out,
            or the node could not be reached
    """
    timeout = timeout if timeout is not None else global_config.tx.confirmation_timeout
    poll_latency = poll_latency if poll_latency is not None else global_config.tx.poll_latency
    tx_hash_hex = _hash_hex(tx_hash)

    try:
        receipt = web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_latency
        )
    except TimeExhausted:
        raise RemoteCallFailure.confirmation_timeout(tx_hash_hex, timeout)
    except Exception as e:
        raise RemoteCallFailure.from_exception(operation or "wait_for_confirmation", e)

    if receipt["status"] != 1:
        raise RemoteCallFailure.reverted(tx_hash_hex, operation)

    logger.debug(f"Confirmed {tx_hash_hex} in block {receipt['blockNumber']}")
    return receipt


class EVMSigner:
    """
    Local EVM signer using web3.py

    Usage:
        # From private key
        signer = EVMSigner.from_private_key("0x...")

        # From environment variable
        signer = EVMSigner.from_env()

        # Sign, send and wait for the receipt
        result = signer.sign_and_send(web3, tx_dict)
    """

    def __init__(self, account: LocalAccount):
        """
        Initialize with eth_account LocalAccount

        Args:
            account: LocalAccount from eth_account
        """
        self._account = account

    @property
    def address(self) -> str:
        """Get wallet address (checksummed)"""
        return self._account.address

    def sign_transaction(self, tx_dict: Dict[str, Any]) -> Tuple[bytes, str]:
        """
        Sign a transaction

        Args:
            tx_dict: Transaction dictionary with to, data, value, gas, gasPrice, nonce, chainId

        Returns:
            (raw_tx_bytes, tx_hash_hex)
        """
        try:
            signed = self._account.sign_transaction(tx_dict)
        except Exception as e:
            raise SignerError.failed(str(e))
        return signed.raw_transaction, _hash_hex(signed.hash)

    def sign_and_send(
        self,
        web3: Web3,
        tx_dict: Dict[str, Any],
        wait_for_receipt: bool = True,
        timeout: Optional[float] = None,
        operation: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Sign and send a transaction, then optionally wait for its receipt.

        The nonce is read from the node ("pending") for every transaction.

        Args:
            web3: Web3 instance connected to RPC
            tx_dict: Transaction dictionary
            wait_for_receipt: Block until the transaction is mined
            timeout: Timeout in seconds for receipt
            operation: Operation name for logs and errors

        Returns:
            Dict with status, tx_hash, and block_number/gas_used/receipt when mined

        Raises:
            RemoteCallFailure: If sending fails or the transaction reverts
            SignerError: If signing fails
        """
        label = operation or "transaction"

        try:
            if "nonce" not in tx_dict:
                tx_dict["nonce"] = web3.eth.get_transaction_count(self.address, "pending")
            if "chainId" not in tx_dict:
                tx_dict["chainId"] = web3.eth.chain_id
        except Exception as e:
            raise RemoteCallFailure.from_exception(label, e)

        raw_tx, _ = self.sign_transaction(tx_dict)

        try:
            tx_hash = web3.eth.send_raw_transaction(raw_tx)
        except Exception as e:
            logger.error(f"Failed to send {label}: {e}")
            raise RemoteCallFailure.send_failed(label, e)

        tx_hash_hex = _hash_hex(tx_hash)
        logger.info(f"Sent {label}: {tx_hash_hex} (nonce={tx_dict['nonce']})")

        if not wait_for_receipt:
            return {
                "status": "pending",
                "tx_hash": tx_hash_hex,
            }

        receipt = wait_for_confirmation(web3, tx_hash, timeout=timeout, operation=label)
        return {
            "status": "success",
            "tx_hash": tx_hash_hex,
            "block_number": receipt["blockNumber"],
            "gas_used": receipt["gasUsed"],
            "effective_gas_price": receipt.get("effectiveGasPrice", 0),
            "receipt": dict(receipt),
        }

    @classmethod
    def from_private_key(cls, private_key: str) -> "EVMSigner":
        """
        Create signer from private key

        Args:
            private_key: Hex-encoded private key (with or without 0x prefix)
        """
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        try:
            account = Account.from_key(private_key)
        except Exception as e:
            raise SignerError.failed(f"invalid private key: {e}")
        return cls(account)

    @classmethod
    def from_env(cls, env_var: Optional[str] = None) -> "EVMSigner":
        """
        Create signer from environment variable

        Args:
            env_var: Name of environment variable containing private key
                (defaults to config.signer.private_key_env)

        Raises:
            SignerError: If environment variable is not set
        """
        env_var = env_var or global_config.signer.private_key_env
        private_key = os.getenv(env_var, "")
        if not private_key:
            raise SignerError.not_configured()

        return cls.from_private_key(private_key)

    @classmethod
    def from_keystore(
        cls,
        keystore_path: str,
        password: str,
    ) -> "EVMSigner":
        """
        Create signer from encrypted keystore file

        Args:
            keystore_path: Path to keystore JSON file
            password: Password to decrypt keystore
        """
        with open(keystore_path, "r") as f:
            keystore = f.read()

        try:
            private_key = Account.decrypt(keystore, password)
        except ValueError as e:
            raise SignerError.failed(f"cannot decrypt keystore: {e}")
        return cls(Account.from_key(private_key))

    def __repr__(self) -> str:
        return f"EVMSigner(address={self.address})"


def create_web3(
    rpc_url: Optional[str] = None,
    chain_id: Optional[int] = None,
    timeout: Optional[float] = None,
) -> Web3:
    """
    Create a read-only Web3 instance

    Args:
        rpc_url: RPC endpoint URL (defaults to config.rpc.url)
        chain_id: Chain ID. If None, uses config.rpc.chain_id or detects from RPC.
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance
    """
    rpc_url = rpc_url or global_config.rpc.url
    if not rpc_url:
        raise ConfigurationError.missing("ETH_RPC_URL")
    timeout = timeout if timeout is not None else global_config.rpc.timeout_seconds
    if chain_id is None:
        chain_id = global_config.rpc.chain_id

    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )

    web3 = Web3(provider)

    if chain_id is None:
        try:
            chain_id = web3.eth.chain_id
        except Exception as e:
            logger.warning(f"Failed to detect chain ID from RPC: {e}")

    if chain_id in POA_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    return web3


def create_evm_signer(
    private_key: Optional[str] = None,
    keystore_path: Optional[str] = None,
    keystore_password: Optional[str] = None,
) -> EVMSigner:
    """
    Create EVM signer based on configuration

    Priority:
    1. private_key: Use provided private key
    2. keystore_path (or config.signer.keystore_path) + keystore_password
    3. Private key environment variable (config.signer.private_key_env)

    Raises:
        SignerError: If no valid signer configuration found
    """
    if private_key is not None:
        return EVMSigner.from_private_key(private_key)

    keystore_path = keystore_path or global_config.signer.keystore_path or None
    if keystore_path is not None and keystore_password is not None:
        return EVMSigner.from_keystore(keystore_path, keystore_password)

    return EVMSigner.from_env()
