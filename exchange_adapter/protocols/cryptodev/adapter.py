"""
Crypto Dev Exchange Contract Adapter

Typed wrapper over the Exchange and Token contracts. Read calls return ints;
transaction calls submit, block until the receipt arrives and return a
TxResult. Every remote failure is raised as RemoteCallFailure.

The AMM pricing itself (constant product with fee) stays inside the contract.
"""

import logging
from typing import Any, Optional

from web3 import Web3

from ...types.amounts import require_amount
from ...types.result import TxResult
from ...infra.evm_signer import EVMSigner
from ...errors import SignerError, RemoteCallFailure, InvalidInput
from ...config import ExchangeConfig, TxConfig, config as global_config

from .api import EXCHANGE_ABI, TOKEN_ABI

logger = logging.getLogger(__name__)


def _checksum(address: str, field_name: str) -> str:
    """Checksum a caller-supplied address, rejecting malformed input"""
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidInput.address(field_name, address)
    return Web3.to_checksum_address(address)


class ExchangeAdapter:
    """
    Contract interface for the ETH / Crypto Dev exchange

    Without a signer the adapter is read-only (provider context); any
    transaction method raises SignerError.

    Usage:
        web3 = create_web3("https://...")
        adapter = ExchangeAdapter(web3, ExchangeConfig(...).validate(), signer=signer)

        supply = adapter.total_supply()
        out = adapter.get_amount_of_tokens(10**18, eth_reserve, cd_reserve)
        result = adapter.remove_liquidity(10**17)
    """

    name = "cryptodev"

    def __init__(
        self,
        web3: Web3,
        exchange: ExchangeConfig,
        signer: Optional[EVMSigner] = None,
        tx_config: Optional[TxConfig] = None,
    ):
        """
        Args:
            web3: Web3 instance connected to the chain hosting the contracts
            exchange: Contract addresses
            signer: Optional signer for executing transactions
            tx_config: Confirmation settings (uses global config if not provided)
        """
        self._web3 = web3
        self._exchange = exchange.validate()
        self._signer = signer
        self._tx_config = tx_config or global_config.tx

        self._exchange_contract = web3.eth.contract(
            address=self._exchange.exchange_address,
            abi=EXCHANGE_ABI,
        )
        self._token_contract = web3.eth.contract(
            address=self._exchange.token_address,
            abi=TOKEN_ABI,
        )

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def exchange_address(self) -> str:
        return self._exchange.exchange_address

    @property
    def token_address(self) -> str:
        return self._exchange.token_address

    @property
    def signer(self) -> Optional[EVMSigner]:
        return self._signer

    @property
    def address(self) -> Optional[str]:
        return self._signer.address if self._signer else None

    @property
    def can_sign(self) -> bool:
        return self._signer is not None

    # =========================================================================
    # Read Calls
    # =========================================================================

    def _call(self, function, operation: str) -> Any:
        try:
            return function.call()
        except Exception as e:
            logger.error(f"{operation} call failed: {e}")
            raise RemoteCallFailure.from_exception(operation, e)

    def total_supply(self) -> int:
        """Total LP token supply"""
        return self._call(self._exchange_contract.functions.totalSupply(), "totalSupply")

    def lp_balance_of(self, owner: str) -> int:
        """LP tokens held by owner"""
        return self._call(
            self._exchange_contract.functions.balanceOf(_checksum(owner, "owner")),
            "balanceOf",
        )

    def get_reserve(self) -> int:
        """Crypto Dev tokens held by the exchange"""
        return self._call(self._exchange_contract.functions.getReserve(), "getReserve")

    def get_amount_of_tokens(self, input_amount: int, input_reserve: int, output_reserve: int) -> int:
        """Output amount for a swap, as priced by the contract"""
        require_amount(input_amount, "input_amount")
        require_amount(input_reserve, "input_reserve")
        require_amount(output_reserve, "output_reserve")
        return self._call(
            self._exchange_contract.functions.getAmountOfTokens(input_amount, input_reserve, output_reserve),
            "getAmountOfTokens",
        )

    def token_balance_of(self, owner: str) -> int:
        """Crypto Dev tokens held by owner"""
        return self._call(
            self._token_contract.functions.balanceOf(_checksum(owner, "owner")),
            "token.balanceOf",
        )

    def allowance(self, owner: str, spender: str) -> int:
        return self._call(
            self._token_contract.functions.allowance(
                _checksum(owner, "owner"),
                _checksum(spender, "spender"),
            ),
            "token.allowance",
        )

    def ether_balance_of(self, address: str) -> int:
        """Native balance in wei"""
        address = _checksum(address, "address")
        try:
            return self._web3.eth.get_balance(address)
        except Exception as e:
            raise RemoteCallFailure.from_exception("eth_getBalance", e)

    # =========================================================================
    # Transactions
    # =========================================================================

    def _transact(self, function, operation: str, value: int = 0) -> TxResult:
        """Build, sign, send and wait for one contract transaction"""
        if not self._signer:
            raise SignerError.not_configured()

        try:
            # Gas limit and fees are filled in by the node
            tx = function.build_transaction({
                "from": self._signer.address,
                "value": value,
            })
        except Exception as e:
            logger.error(f"Failed to build {operation}: {e}")
            raise RemoteCallFailure.from_exception(operation, e)

        result = self._signer.sign_and_send(
            self._web3,
            tx,
            wait_for_receipt=True,
            timeout=self._tx_config.confirmation_timeout,
            operation=operation,
        )
        tx_result = TxResult.from_receipt(result)
        logger.info(f"{operation} confirmed: {tx_result}")
        return tx_result

    def remove_liquidity(self, lp_amount: int) -> TxResult:
        """Burn lp_amount LP tokens for ETH and Crypto Dev tokens"""
        require_amount(lp_amount, "lp_amount")
        return self._transact(
            self._exchange_contract.functions.removeLiquidity(lp_amount),
            "removeLiquidity",
        )

    def add_liquidity(self, paired_amount: int, base_amount: int) -> TxResult:
        """Deposit paired_amount Crypto Dev tokens with base_amount ETH attached"""
        require_amount(paired_amount, "paired_amount")
        require_amount(base_amount, "base_amount")
        return self._transact(
            self._exchange_contract.functions.addLiquidity(paired_amount),
            "addLiquidity",
            value=base_amount,
        )

    def eth_to_token(self, min_tokens: int, value: int) -> TxResult:
        """Swap value ETH for at least min_tokens Crypto Dev tokens"""
        require_amount(min_tokens, "min_tokens")
        require_amount(value, "value")
        return self._transact(
            self._exchange_contract.functions.ethToCryptoDevToken(min_tokens),
            "ethToCryptoDevToken",
            value=value,
        )

    def token_to_eth(self, tokens_sold: int, min_eth: int) -> TxResult:
        """Swap tokens_sold Crypto Dev tokens for at least min_eth ETH"""
        require_amount(tokens_sold, "tokens_sold")
        require_amount(min_eth, "min_eth")
        return self._transact(
            self._exchange_contract.functions.cryptoDevTokenToEth(tokens_sold, min_eth),
            "cryptoDevTokenToEth",
        )

    def approve(self, spender: str, amount: int) -> TxResult:
        """Grant spender an allowance of amount Crypto Dev tokens"""
        require_amount(amount, "amount")
        return self._transact(
            self._token_contract.functions.approve(_checksum(spender, "spender"), amount),
            "approve",
        )

    def __repr__(self) -> str:
        addr = self.address[:10] + "..." if self.address else "read-only"
        return f"ExchangeAdapter(exchange={self.exchange_address[:10]}..., signer={addr})"
