from __future__ import annotations

from functools import cached_property

from eth_account import Account
from loguru import logger
from web3 import Web3
from web3.exceptions import Web3Exception

from nollyspot.core.config import Settings
from nollyspot.core.errors import ChainError
from nollyspot.core.logging import mask_address


ERC20_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "to", "type": "address"},
            {"internalType": "uint256", "name": "value", "type": "uint256"},
        ],
        "name": "transfer",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


class ChainClient:
    """
    Signs and submits ERC-20 transfers from the merchant wallet.

    Nothing touches the network or the key until the first transfer.
    """

    def __init__(self, rpc_url: str | None, private_key: str | None, receipt_timeout: float = 120.0) -> None:
        self.rpc_url = rpc_url
        self._private_key = private_key
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainClient":
        return cls(
            settings.provider_url,
            settings.merchant_private_key,
            receipt_timeout=settings.chain_receipt_timeout,
        )

    @cached_property
    def w3(self) -> Web3:
        if not self.rpc_url:
            raise ChainError("PROVIDER_URL is not configured")
        w3 = Web3(Web3.HTTPProvider(self.rpc_url))
        if not w3.is_connected():
            raise ChainError("Chain RPC not reachable")
        return w3

    @cached_property
    def acct(self):
        if not self._private_key:
            raise ChainError("MERCHANT_PRIVATE_KEY is not configured")
        try:
            return Account.from_key(self._private_key)
        except (ValueError, TypeError) as e:
            raise ChainError(f"Invalid merchant private key: {e}") from e

    def transfer(self, token_address: str, to_address: str | None, amount_units: int) -> str:
        """
        Transfer `amount_units` (fixed-point) of the token to `to_address`
        and block until the receipt arrives. Returns the 0x-prefixed hash.
        """
        if not to_address:
            raise ChainError("Recipient address is not configured")

        w3 = self.w3
        acct = self.acct

        try:
            contract = w3.eth.contract(
                address=Web3.to_checksum_address(token_address),
                abi=ERC20_ABI,
            )
            nonce = w3.eth.get_transaction_count(acct.address)
            tx = contract.functions.transfer(
                Web3.to_checksum_address(to_address),
                amount_units,
            ).build_transaction({
                "from": acct.address,
                "nonce": nonce,
            })

            signed = acct.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
            tx_hex = Web3.to_hex(tx_hash)
            logger.info(
                f"Transfer submitted: token={mask_address(token_address)} "
                f"to={mask_address(to_address)} units={amount_units} tx={tx_hex}"
            )

            receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except (Web3Exception, ValueError, OSError) as e:
            raise ChainError(str(e)) from e

        # status 1 = success
        if receipt.get("status") != 1:
            raise ChainError(f"Token transfer reverted: {tx_hex}")

        return tx_hex

