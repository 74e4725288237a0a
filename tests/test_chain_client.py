import pytest
from unittest.mock import Mock, patch
from web3.exceptions import Web3Exception

from nollyspot.core.errors import ChainError
from nollyspot.services.chain import ChainClient

RPC_URL = "http://localhost:8545"
PRIVATE_KEY = "0x" + "1" * 64
TOKEN = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
RECIPIENT = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb1"


def _wire(mock_web3_class, mock_account_class, receipt_status=1, connected=True):
    """Wire the patched Web3/Account classes and return (w3, account, transfer_fn)."""
    mock_web3_instance = Mock()
    mock_web3_instance.is_connected.return_value = connected
    mock_web3_instance.eth.get_transaction_count.return_value = 7
    mock_web3_instance.eth.send_raw_transaction.return_value = b"\x12\x34" * 16
    mock_web3_instance.eth.wait_for_transaction_receipt.return_value = {"status": receipt_status}

    mock_web3_class.return_value = mock_web3_instance
    mock_web3_class.HTTPProvider = Mock()
    mock_web3_class.to_checksum_address = lambda x: x
    mock_web3_class.to_hex = lambda b: "0x" + b.hex()

    mock_account_instance = Mock()
    mock_account_instance.address = "0x9999999999999999999999999999999999999999"
    mock_account_instance.sign_transaction.return_value = Mock(raw_transaction=b"signed_data")
    mock_account_class.from_key.return_value = mock_account_instance

    mock_contract = Mock()
    mock_function = Mock()
    mock_function.build_transaction.return_value = {"from": mock_account_instance.address}
    mock_contract.functions.transfer.return_value = mock_function
    mock_web3_instance.eth.contract.return_value = mock_contract

    return mock_web3_instance, mock_account_instance, mock_contract, mock_function


class TestChainClient:
    """Tests for the ChainClient ERC-20 transfer wrapper"""

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_construction_does_not_touch_network(self, mock_account_class, mock_web3_class):
        ChainClient(RPC_URL, PRIVATE_KEY)

        mock_web3_class.assert_not_called()
        mock_account_class.from_key.assert_not_called()

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_transfer_success(self, mock_account_class, mock_web3_class):
        w3, acct, contract, fn = _wire(mock_web3_class, mock_account_class)
        client = ChainClient(RPC_URL, PRIVATE_KEY, receipt_timeout=30)

        result = client.transfer(TOKEN, RECIPIENT, 5 * 10 ** 18)

        assert result == "0x" + ("1234" * 16)
        contract.functions.transfer.assert_called_once_with(RECIPIENT, 5 * 10 ** 18)
        tx_params = fn.build_transaction.call_args[0][0]
        assert tx_params["from"] == acct.address
        assert tx_params["nonce"] == 7
        w3.eth.send_raw_transaction.assert_called_once_with(b"signed_data")
        w3.eth.wait_for_transaction_receipt.assert_called_once_with(b"\x12\x34" * 16, timeout=30)

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_contract_bound_to_token_address(self, mock_account_class, mock_web3_class):
        w3, _, _, _ = _wire(mock_web3_class, mock_account_class)

        ChainClient(RPC_URL, PRIVATE_KEY).transfer(TOKEN, RECIPIENT, 1)

        assert w3.eth.contract.call_args.kwargs["address"] == TOKEN

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_reverted_receipt_raises(self, mock_account_class, mock_web3_class):
        _wire(mock_web3_class, mock_account_class, receipt_status=0)

        with pytest.raises(ChainError, match="reverted"):
            ChainClient(RPC_URL, PRIVATE_KEY).transfer(TOKEN, RECIPIENT, 1)

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_web3_exception_surfaces_message(self, mock_account_class, mock_web3_class):
        w3, _, _, _ = _wire(mock_web3_class, mock_account_class)
        w3.eth.send_raw_transaction.side_effect = Web3Exception("insufficient funds for gas")

        with pytest.raises(ChainError, match="insufficient funds for gas"):
            ChainClient(RPC_URL, PRIVATE_KEY).transfer(TOKEN, RECIPIENT, 1)

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_unreachable_rpc(self, mock_account_class, mock_web3_class):
        _wire(mock_web3_class, mock_account_class, connected=False)

        with pytest.raises(ChainError, match="Chain RPC not reachable"):
            ChainClient(RPC_URL, PRIVATE_KEY).transfer(TOKEN, RECIPIENT, 1)

    def test_missing_provider_url(self):
        with pytest.raises(ChainError, match="PROVIDER_URL"):
            ChainClient(None, PRIVATE_KEY).transfer(TOKEN, RECIPIENT, 1)

    @patch("nollyspot.services.chain.Web3")
    @patch("nollyspot.services.chain.Account")
    def test_missing_private_key(self, mock_account_class, mock_web3_class):
        _wire(mock_web3_class, mock_account_class)

        with pytest.raises(ChainError, match="MERCHANT_PRIVATE_KEY"):
            ChainClient(RPC_URL, None).transfer(TOKEN, RECIPIENT, 1)

    def test_missing_recipient(self):
        with pytest.raises(ChainError, match="Recipient"):
            ChainClient(RPC_URL, PRIVATE_KEY).transfer(TOKEN, None, 1)
