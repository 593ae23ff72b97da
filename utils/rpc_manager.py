"""
RPC Manager
Opens the single endpoint connection used for a deployment
"""

from web3 import Web3
from loguru import logger

from deployer.exceptions import DeploymentError
from deployer.types import DeploymentConfiguration


def connect(config: DeploymentConfiguration) -> Web3:
    """
    Connect to the configured endpoint
    
    No fallback endpoints and no pooling: one caller, one connection.
    
    Args:
        config: Resolved deployment configuration
        
    Returns:
        Connected Web3 instance
        
    Raises:
        DeploymentError: If the endpoint does not answer
    """
    w3 = Web3(Web3.HTTPProvider(config.endpoint_url))
    
    if not w3.is_connected():
        raise DeploymentError(f"Failed to connect to {config.redacted_endpoint}")
    
    logger.info(f"Connected to {config.network} via {config.redacted_endpoint}")
    return w3
