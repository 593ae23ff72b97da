"""
Deployment Driver
Submits the contract-creation transaction and waits for its confirmation
"""

import asyncio
from typing import Callable, Optional

from web3 import Web3
from web3.exceptions import TransactionNotFound
from loguru import logger

from deployer.exceptions import DeploymentError, TransactionRevertedError
from deployer.types import (
    DeploymentConfiguration,
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentResult,
    DeploymentState,
)
from deployer.wallet_manager import WalletManager
from utils.rpc_manager import connect

from .contract_factory import ContractFactory
from .deployment_record import save_deployment_record
from .transaction_builder import TransactionBuilder


class DeploymentDriver:
    """
    Single-shot deployment of one contract

    NOT_STARTED -> SUBMITTED -> CONFIRMED, or -> FAILED from either state.
    A submitted transaction is never resent: resubmission risks a double
    deploy, so every failure is reported instead of retried.
    """

    def __init__(
        self,
        web3_factory: Callable[[DeploymentConfiguration], Web3] = connect,
        save_record: bool = True
    ):
        """
        Initialize Deployment Driver

        Args:
            web3_factory: Opens the endpoint connection for a configuration
            save_record: Write deployments/<network>/<Contract>.json on success
        """
        self.web3_factory = web3_factory
        self.save_record = save_record

        self.state = DeploymentState.NOT_STARTED
        self.tx_hash: Optional[str] = None

    async def deploy(
        self,
        config: DeploymentConfiguration,
        wallet: Optional[WalletManager] = None
    ) -> DeploymentOutcome:
        """
        Deploy the configured contract

        Args:
            config: Resolved deployment configuration
            wallet: Deployer wallet; derived from config.credential when None

        Returns:
            DeploymentResult on confirmation, DeploymentFailure otherwise
        """
        if self.state != DeploymentState.NOT_STARTED:
            return DeploymentFailure(
                error=DeploymentError(f"Deployment already attempted (state: {self.state.value})"),
                last_state=self.state,
                transaction_hash=self.tx_hash
            )

        reached = self.state
        try:
            # Everything local is checked before the endpoint is contacted
            wallet = wallet or WalletManager(config.credential)
            factory = ContractFactory.from_artifacts(
                config.artifacts_dir,
                config.contract_name,
                config.compiler_version
            )
            data = factory.creation_data(config.constructor_args)

            w3 = self.web3_factory(config)

            self.tx_hash = self._submit(w3, wallet, config, data)
            self.state = reached = DeploymentState.SUBMITTED

            receipt = await self._wait_for_confirmation(w3, self.tx_hash, config)

            if receipt['status'] != 1:
                raise TransactionRevertedError(self.tx_hash)

            result = DeploymentResult(
                address=receipt['contractAddress'],
                transaction_hash=self.tx_hash,
                block_number=receipt['blockNumber']
            )

        except Exception as e:
            self.state = DeploymentState.FAILED
            error = e if isinstance(e, DeploymentError) else DeploymentError(str(e), cause=e)
            logger.error(f"Deployment of {config.contract_name} failed: {error}")
            if reached == DeploymentState.SUBMITTED and not isinstance(error, TransactionRevertedError):
                logger.warning(
                    f"Transaction {self.tx_hash} was submitted and may still be mined; check it before redeploying"
                )
            return DeploymentFailure(error=error, last_state=reached, transaction_hash=self.tx_hash)

        self.state = DeploymentState.CONFIRMED
        logger.success(f"{config.contract_name} deployed at {result.address} (block {result.block_number})")

        if self.save_record:
            try:
                save_deployment_record(config, result, factory.abi, factory.solc_version)
            except Exception as e:
                # Confirmed on-chain: record errors are logged, never returned
                logger.error(f"Could not record deployment of {result.address}: {e}")

        return result

    def _submit(self, w3: Web3, wallet: WalletManager, config: DeploymentConfiguration, data: str) -> str:
        """Build, sign and send the creation transaction; returns its hash"""
        builder = TransactionBuilder(w3, wallet.address, config.chain_id)
        transaction = builder.build_creation_tx(data, config.gas_limit)

        logger.info("Signing transaction...")
        signed_tx = wallet.sign_transaction(transaction)

        logger.info("Sending deployment transaction...")
        tx_hash = Web3.to_hex(w3.eth.send_raw_transaction(signed_tx.raw_transaction))

        logger.info(f"Transaction sent: {tx_hash}")
        return tx_hash

    async def _wait_for_confirmation(self, w3: Web3, tx_hash: str, config: DeploymentConfiguration):
        """
        Poll until the receipt exists and has enough confirmations

        There is no timeout: an endpoint that never answers blocks forever.
        """
        logger.info(f"Waiting for {config.confirmations} confirmation(s), polling every {config.poll_interval}s...")

        while True:
            try:
                receipt = w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                receipt = None

            if receipt is not None:
                depth = w3.eth.block_number - receipt['blockNumber'] + 1
                if depth >= config.confirmations:
                    return receipt
                logger.debug(f"Mined in block {receipt['blockNumber']}, {depth}/{config.confirmations} confirmations")

            await asyncio.sleep(config.poll_interval)
