"""
Deployer Package
Configuration resolution, data model and signing for contract deployment
"""

from .config_resolver import ConfigurationResolver
from .exceptions import (
    ArtifactError,
    ConfigurationError,
    DeployerError,
    DeploymentError,
    TransactionRevertedError,
)
from .types import (
    DeploymentConfiguration,
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentResult,
    DeploymentState,
)
from .wallet_manager import WalletManager

__all__ = [
    'ConfigurationResolver',
    'WalletManager',
    'DeploymentConfiguration',
    'DeploymentResult',
    'DeploymentFailure',
    'DeploymentOutcome',
    'DeploymentState',
    'DeployerError',
    'ConfigurationError',
    'DeploymentError',
    'ArtifactError',
    'TransactionRevertedError',
]
