"""Throwaway EVM wallet generation."""

import logging

from eth_account import Account

from ..models import WalletRecord

logger = logging.getLogger(__name__)


class WalletService:
    """Generates fresh keypairs with eth-account."""

    def create_wallet(self) -> WalletRecord:
        """Generate a new random wallet.

        Returns:
            WalletRecord with checksummed address and 0x-prefixed private key.
        """
        account = Account.create()
        private_key = account.key.hex()
        if not private_key.startswith("0x"):
            private_key = f"0x{private_key}"

        logger.info(f"Generated wallet {account.address}")
        return WalletRecord(address=account.address, private_key=private_key)
