"""
Transaction Builder
Constructs the unsigned contract-creation transaction
"""

from typing import Dict, Optional

from web3 import Web3
from loguru import logger

from deployer.exceptions import DeploymentError

GAS_BUFFER = 1.2  # 20% over the estimate


class TransactionBuilder:
    """
    Builds legacy (gasPrice) creation transactions for the deployer wallet
    """

    def __init__(self, w3: Web3, sender: str, chain_id: Optional[int] = None):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            sender: Deployer address
            chain_id: Expected chain id; None to accept whatever the endpoint reports
        """
        self.w3 = w3
        self.sender = sender
        self.chain_id = chain_id

    def build_creation_tx(self, data: str, gas_limit: Optional[int] = None) -> Dict:
        """
        Build contract creation transaction

        Args:
            data: Bytecode plus encoded constructor arguments
            gas_limit: Fixed gas limit; estimated when None

        Returns:
            Transaction dict (no 'to' field)
        """
        chain_id = self._check_chain_id()

        nonce = self.w3.eth.get_transaction_count(self.sender, 'pending')
        gas_price = self.w3.eth.gas_price

        if gas_limit is None:
            gas_estimate = self.w3.eth.estimate_gas({
                'from': self.sender,
                'data': data
            })
            gas_limit = int(gas_estimate * GAS_BUFFER)

        logger.info(f"Nonce: {nonce}")
        logger.info(f"Gas limit: {gas_limit}")
        logger.info(f"Gas price: {Web3.from_wei(gas_price, 'gwei')} gwei")
        logger.info(f"Maximum deployment cost: {Web3.from_wei(gas_limit * gas_price, 'ether')} ETH")

        return {
            'from': self.sender,
            'nonce': nonce,
            'gas': gas_limit,
            'gasPrice': gas_price,
            'chainId': chain_id,
            'value': 0,
            'data': data
        }

    def _check_chain_id(self) -> int:
        """Endpoint chain id, verified against the configured one"""
        endpoint_chain_id = self.w3.eth.chain_id
        if self.chain_id is not None and endpoint_chain_id != self.chain_id:
            raise DeploymentError(
                f"Endpoint is on chain {endpoint_chain_id}, configuration expects {self.chain_id}"
            )
        return endpoint_chain_id
