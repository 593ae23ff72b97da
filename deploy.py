"""
Contract Deployment
Deploys the configured contract and prints its address
"""

import asyncio
import os
import sys
from typing import Optional

from loguru import logger
from dotenv import load_dotenv

from blockchain.deployment_driver import DeploymentDriver
from deployer.config_resolver import ConfigurationResolver
from deployer.exceptions import ConfigurationError
from deployer.wallet_manager import WalletManager
from utils.logging_setup import configure_logging

DEFAULT_LOG_FILE = "data/logs/deploy.log"


def main(
    resolver: Optional[ConfigurationResolver] = None,
    driver: Optional[DeploymentDriver] = None
) -> int:
    """
    Resolve configuration, deploy once, map the outcome to an exit code

    Args:
        resolver: Configuration resolver (defaults to config/*.json + environment)
        driver: Deployment driver (defaults to a live endpoint connection)

    Returns:
        0 on confirmed deployment, 1 on any failure
    """
    load_dotenv()
    redactor = configure_logging(
        level=os.getenv('LOG_LEVEL', 'INFO'),
        log_file=os.getenv('DEPLOY_LOG_FILE', DEFAULT_LOG_FILE)
    )

    logger.info("=" * 70)
    logger.info("Contract Deployment")
    logger.info("=" * 70)

    resolver = resolver or ConfigurationResolver()
    try:
        config = resolver.resolve()
        wallet = WalletManager(config.credential)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    for secret in config.secrets:
        redactor.add(secret)

    driver = driver or DeploymentDriver()
    outcome = asyncio.run(driver.deploy(config, wallet))

    if not outcome.ok:
        logger.error(f"{type(outcome.cause).__name__}: {outcome.cause}")
        return 1

    print(f"contract deployed to {outcome.address}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
