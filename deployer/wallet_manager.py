"""
Wallet Manager
Holds the single deployer account derived from the signing credential
"""

from typing import Dict

from eth_account import Account
from loguru import logger

from .exceptions import ConfigurationError


class WalletManager:
    """
    Deployer wallet
    
    The private key stays inside the eth_account object; only the address
    is ever exposed or logged.
    """
    
    def __init__(self, private_key: str):
        """
        Initialize wallet manager
        
        Args:
            private_key: Hex private key of the deploying account
        """
        try:
            self._account = Account.from_key(private_key)
        except Exception:
            # The exception text may contain the key itself
            raise ConfigurationError("Signing credential is not a valid private key") from None
        
        self.address = self._account.address
        logger.info(f"Deployer wallet: {self.address}")
    
    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer account
        
        Args:
            transaction: Transaction dict
            
        Returns:
            Signed transaction
        """
        return self._account.sign_transaction(transaction)
