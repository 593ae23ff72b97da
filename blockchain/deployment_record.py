"""
Deployment Record
Writes the result of a confirmed deployment for later auditing
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from deployer.types import DeploymentConfiguration, DeploymentResult


def save_deployment_record(
    config: DeploymentConfiguration,
    result: DeploymentResult,
    abi: list,
    solc_version: Optional[str] = None
) -> Optional[Path]:
    """
    Save ``<deployments_dir>/<network>/<Contract>.json`` (hardhat-deploy layout)

    An existing record for the same contract is overwritten; the previous
    address is logged so it is not lost silently.

    Args:
        config: Resolved configuration
        result: Confirmed deployment result
        abi: Contract ABI
        solc_version: Compiler version of the artifact

    Returns:
        Path of the record, or None if it could not be written
    """
    path = Path(config.deployments_dir) / config.network / f"{config.contract_name}.json"
    record = {
        'address': result.address,
        'abi': abi,
        'transactionHash': result.transaction_hash,
        'receipt': {'blockNumber': result.block_number},
        'args': list(config.constructor_args),
        'solcVersion': solc_version,
        'deployedAt': datetime.now(timezone.utc).isoformat()
    }

    if path.exists():
        previous = read_previous_address(path)
        if previous:
            logger.warning(f"Replacing record of previous {config.contract_name} deployment at {previous}")
        else:
            logger.warning(f"Replacing unreadable deployment record {path}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(record, f, indent=2)

        logger.success(f"Deployment record written to {path}")
        return path

    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error writing deployment record {path}: {e}")
        return None


def read_previous_address(path: Path) -> Optional[str]:
    """Address stored in an existing record, or None if it cannot be read"""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None

    if not isinstance(data, dict):
        return None
    return data.get('address')
