"""
Test Exchange Adapter

Contract reads and transactions against mocked contracts and a mock signer.
"""

import pytest
from web3 import Web3

from exchange_adapter.protocols.cryptodev import ExchangeAdapter
from exchange_adapter.errors import (
    ErrorCode,
    InvalidInput,
    RemoteCallFailure,
    SignerError,
)
from exchange_adapter.types import TxStatus

from conftest import EXCHANGE_ADDRESS, TOKEN_ADDRESS, WALLET_ADDRESS, make_signer


@pytest.fixture
def adapter(contracts, exchange_config, signer):
    return ExchangeAdapter(contracts.web3, exchange_config, signer=signer)


@pytest.fixture
def read_only_adapter(contracts, exchange_config):
    return ExchangeAdapter(contracts.web3, exchange_config)


class TestConstruction:

    def test_contracts_bound_to_checksummed_addresses(self, contracts, adapter):
        addresses = [c.kwargs["address"] for c in contracts.web3.eth.contract.call_args_list]
        assert addresses == [
            Web3.to_checksum_address(EXCHANGE_ADDRESS),
            Web3.to_checksum_address(TOKEN_ADDRESS),
        ]
        assert adapter.can_sign
        assert adapter.address == WALLET_ADDRESS

    def test_read_only(self, read_only_adapter):
        assert not read_only_adapter.can_sign
        assert read_only_adapter.address is None
        assert "read-only" in repr(read_only_adapter)


class TestReads:

    def test_pool_reads(self, contracts, adapter):
        contracts.set_reads(total_supply=500, reserve=300, exchange_eth=100)

        assert adapter.total_supply() == 500
        assert adapter.get_reserve() == 300
        assert adapter.ether_balance_of(EXCHANGE_ADDRESS) == 100
        contracts.web3.eth.get_balance.assert_called_once_with(
            Web3.to_checksum_address(EXCHANGE_ADDRESS)
        )

    def test_balances(self, contracts, adapter):
        contracts.exchange.functions.balanceOf.return_value.call.return_value = 11
        contracts.token.functions.balanceOf.return_value.call.return_value = 22
        contracts.token.functions.allowance.return_value.call.return_value = 33

        assert adapter.lp_balance_of(WALLET_ADDRESS) == 11
        assert adapter.token_balance_of(WALLET_ADDRESS) == 22
        assert adapter.allowance(WALLET_ADDRESS, EXCHANGE_ADDRESS) == 33

    def test_get_amount_of_tokens(self, contracts, adapter):
        contracts.exchange.functions.getAmountOfTokens.return_value.call.return_value = 42

        assert adapter.get_amount_of_tokens(10, 100, 300) == 42
        contracts.exchange.functions.getAmountOfTokens.assert_called_once_with(10, 100, 300)

    def test_get_amount_of_tokens_rejects_negative(self, contracts, adapter):
        with pytest.raises(InvalidInput) as exc_info:
            adapter.get_amount_of_tokens(-1, 100, 300)
        assert exc_info.value.field_name == "input_amount"
        contracts.exchange.functions.getAmountOfTokens.assert_not_called()

    def test_call_failure_wrapped(self, contracts, adapter):
        original = ConnectionError("connection refused")
        contracts.exchange.functions.totalSupply.return_value.call.side_effect = original

        with pytest.raises(RemoteCallFailure) as exc_info:
            adapter.total_supply()

        error = exc_info.value
        assert error.operation == "totalSupply"
        assert error.code == ErrorCode.RPC_CONNECTION_FAILED
        assert error.original_error is original

    def test_get_balance_failure_wrapped(self, contracts, adapter):
        contracts.web3.eth.get_balance.side_effect = ValueError("bad block")

        with pytest.raises(RemoteCallFailure) as exc_info:
            adapter.ether_balance_of(EXCHANGE_ADDRESS)
        assert exc_info.value.code == ErrorCode.RPC_CALL_FAILED


class TestTransactions:

    def test_read_only_cannot_transact(self, contracts, read_only_adapter):
        with pytest.raises(SignerError) as exc_info:
            read_only_adapter.remove_liquidity(10)
        assert exc_info.value.code == ErrorCode.SIGNER_NOT_CONFIGURED
        contracts.exchange.functions.removeLiquidity.return_value.build_transaction.assert_not_called()

    def test_remove_liquidity(self, contracts, adapter, signer):
        result = adapter.remove_liquidity(10)

        assert result.status == TxStatus.SUCCESS
        assert result.tx_hash == f"0x{1:064x}"
        assert result.block_number == 100
        assert result.fee_wei == 500_000
        contracts.exchange.functions.removeLiquidity.assert_called_once_with(10)
        contracts.exchange.functions.removeLiquidity.return_value.build_transaction.assert_called_once_with(
            {"from": WALLET_ADDRESS, "value": 0}
        )
        assert signer.operations == ["removeLiquidity"]

    def test_eth_to_token_attaches_value(self, contracts, adapter, signer):
        adapter.eth_to_token(min_tokens=90, value=10**18)

        contracts.exchange.functions.ethToCryptoDevToken.assert_called_once_with(90)
        contracts.exchange.functions.ethToCryptoDevToken.return_value.build_transaction.assert_called_once_with(
            {"from": WALLET_ADDRESS, "value": 10**18}
        )
        assert signer.operations == ["ethToCryptoDevToken"]

    def test_token_to_eth(self, contracts, adapter, signer):
        adapter.token_to_eth(tokens_sold=500, min_eth=7)

        contracts.exchange.functions.cryptoDevTokenToEth.assert_called_once_with(500, 7)
        contracts.exchange.functions.cryptoDevTokenToEth.return_value.build_transaction.assert_called_once_with(
            {"from": WALLET_ADDRESS, "value": 0}
        )

    def test_add_liquidity(self, contracts, adapter):
        adapter.add_liquidity(paired_amount=300, base_amount=100)

        contracts.exchange.functions.addLiquidity.assert_called_once_with(300)
        contracts.exchange.functions.addLiquidity.return_value.build_transaction.assert_called_once_with(
            {"from": WALLET_ADDRESS, "value": 100}
        )

    def test_approve_uses_token_contract(self, contracts, adapter, signer):
        adapter.approve(EXCHANGE_ADDRESS, 7)

        contracts.token.functions.approve.assert_called_once_with(
            Web3.to_checksum_address(EXCHANGE_ADDRESS), 7
        )
        contracts.exchange.functions.approve.assert_not_called()
        assert signer.operations == ["approve"]

    def test_confirmation_timeout_passed_to_signer(self, contracts, exchange_config, signer):
        from exchange_adapter.config import TxConfig

        adapter = ExchangeAdapter(
            contracts.web3, exchange_config, signer=signer, tx_config=TxConfig(confirmation_timeout=9.0)
        )
        adapter.remove_liquidity(1)

        assert signer.sign_and_send.call_args.kwargs["timeout"] == 9.0
        assert signer.sign_and_send.call_args.kwargs["wait_for_receipt"] is True

    def test_build_failure_wrapped(self, contracts, adapter, signer):
        contracts.exchange.functions.removeLiquidity.return_value.build_transaction.side_effect = ValueError(
            "execution reverted: insufficient output amount"
        )

        with pytest.raises(RemoteCallFailure) as exc_info:
            adapter.remove_liquidity(10)

        assert exc_info.value.code == ErrorCode.SLIPPAGE_EXCEEDED
        signer.sign_and_send.assert_not_called()

    def test_send_failure_propagates(self, contracts, exchange_config):
        failing = make_signer([RemoteCallFailure.reverted("0xdead", "removeLiquidity")])
        adapter = ExchangeAdapter(contracts.web3, exchange_config, signer=failing)

        with pytest.raises(RemoteCallFailure) as exc_info:
            adapter.remove_liquidity(10)
        assert exc_info.value.code == ErrorCode.TX_REVERTED

    def test_negative_amount_never_sent(self, contracts, adapter, signer):
        with pytest.raises(InvalidInput):
            adapter.token_to_eth(tokens_sold=-5, min_eth=0)
        signer.sign_and_send.assert_not_called()


class TestInputValidation:

    def test_amount_above_uint256_rejected(self, contracts, adapter, signer):
        with pytest.raises(InvalidInput) as exc_info:
            adapter.remove_liquidity(2**256)

        assert exc_info.value.code == ErrorCode.INVALID_AMOUNT
        contracts.exchange.functions.removeLiquidity.assert_not_called()
        signer.sign_and_send.assert_not_called()

    def test_largest_uint256_accepted(self, contracts, adapter):
        adapter.eth_to_token(min_tokens=2**256 - 1, value=1)
        contracts.exchange.functions.ethToCryptoDevToken.assert_called_once_with(2**256 - 1)

    @pytest.mark.parametrize("call", [
        lambda a: a.lp_balance_of("0x1234"),
        lambda a: a.token_balance_of("not an address"),
        lambda a: a.allowance(WALLET_ADDRESS, "0x1234"),
        lambda a: a.ether_balance_of("0x1234"),
        lambda a: a.approve(None, 1),
    ])
    def test_malformed_address_is_invalid_input(self, contracts, adapter, call):
        with pytest.raises(InvalidInput) as exc_info:
            call(adapter)

        assert exc_info.value.code == ErrorCode.INVALID_ADDRESS
        contracts.web3.eth.get_balance.assert_not_called()
