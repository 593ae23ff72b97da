"""
Blockchain Interaction Package
Handles artifact loading, transaction building and the deployment itself
"""

from .contract_factory import ContractFactory
from .deployment_driver import DeploymentDriver
from .deployment_record import save_deployment_record
from .transaction_builder import TransactionBuilder

__all__ = ['ContractFactory', 'DeploymentDriver', 'TransactionBuilder', 'save_deployment_record']
