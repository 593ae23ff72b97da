"""
System Check Script
Verifies configuration, endpoint and artifact before deploying

Run: python -m scripts.check_system
"""

import sys
from typing import Optional

from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

from blockchain.contract_factory import ContractFactory
from deployer.config_resolver import ConfigurationResolver
from deployer.exceptions import DeployerError
from deployer.types import DeploymentConfiguration
from deployer.wallet_manager import WalletManager
from utils.logging_setup import configure_logging
from utils.rpc_manager import connect


def check_configuration(resolver: ConfigurationResolver) -> Optional[DeploymentConfiguration]:
    """Check config files and environment variables resolve"""
    logger.info("Checking configuration...")

    try:
        config = resolver.resolve()
    except DeployerError as e:
        logger.error(f"  ✗ {e}")
        return None

    logger.success(f"  ✓ {config.contract_name} -> {config.network}")
    return config


def check_artifact(config: DeploymentConfiguration) -> bool:
    """Check the contract artifact loads and accepts the constructor args"""
    logger.info("Checking contract artifact...")

    try:
        factory = ContractFactory.from_artifacts(
            config.artifacts_dir,
            config.contract_name,
            config.compiler_version
        )
        factory.creation_data(config.constructor_args)
    except DeployerError as e:
        logger.error(f"  ✗ {e}")
        logger.info("  Run 'npx hardhat compile' first")
        return False

    logger.success(f"  ✓ {config.contract_name} artifact ready (solc {factory.solc_version or 'unknown'})")
    return True


def check_rpc_connection(config: DeploymentConfiguration) -> Optional[Web3]:
    """Check the endpoint answers and is on the expected chain"""
    logger.info("Checking RPC connection...")

    try:
        w3 = connect(config)
        chain_id = w3.eth.chain_id
        block = w3.eth.block_number
    except Exception as e:
        logger.error(f"  ✗ {config.redacted_endpoint}: {e}")
        return None

    if config.chain_id is not None and chain_id != config.chain_id:
        logger.error(f"  ✗ Endpoint is on chain {chain_id}, expected {config.chain_id}")
        return None

    logger.success(f"  ✓ Connected to chain {chain_id} (Block: {block})")
    return w3


def check_wallet_balance(w3: Web3, config: DeploymentConfiguration) -> bool:
    """Check the deployer account can pay for gas"""
    logger.info("Checking deployer balance...")

    try:
        wallet = WalletManager(config.credential)
        balance = w3.eth.get_balance(wallet.address)
    except Exception as e:
        logger.error(f"  Error checking balance: {e}")
        return False

    logger.info(f"  Balance: {Web3.from_wei(balance, 'ether')} ETH")

    if balance == 0:
        logger.error("  ✗ Deployer account has no funds")
        return False

    logger.success("  ✓ Deployer balance available")
    return True


def main(resolver: Optional[ConfigurationResolver] = None) -> int:
    """Run all system checks"""
    load_dotenv()
    redactor = configure_logging()

    logger.info("=" * 70)
    logger.info("Deployment System Check")
    logger.info("=" * 70)

    config = check_configuration(resolver or ConfigurationResolver())
    if config is None:
        logger.error("❌ Configuration incomplete - fix issues above")
        return 1

    for secret in config.secrets:
        redactor.add(secret)

    results = [("Configuration", True), ("Contract Artifact", check_artifact(config))]

    w3 = check_rpc_connection(config)
    results.append(("RPC Connection", w3 is not None))
    results.append(("Deployer Balance", w3 is not None and check_wallet_balance(w3, config)))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("✅ Ready to deploy: python deploy.py")
        return 0

    logger.error("❌ Not ready to deploy - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
