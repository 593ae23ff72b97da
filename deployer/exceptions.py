"""
Deployer Exceptions
Two error kinds: configuration problems and deployment failures
"""

from typing import Optional


class DeployerError(Exception):
    """Base exception for the deployer"""
    pass


class ConfigurationError(DeployerError, ValueError):
    """Raised when a required setting is missing or malformed (before any network call)"""
    pass


class DeploymentError(DeployerError):
    """
    Raised when submission or confirmation of the creation transaction fails
    
    The original exception is kept unmodified on ``cause``.
    """
    
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ArtifactError(DeploymentError):
    """Raised when the compiled contract artifact is missing or invalid"""
    pass


class TransactionRevertedError(DeploymentError):
    """Raised when the creation transaction was mined with status 0"""
    
    def __init__(self, tx_hash: str):
        super().__init__(f"Creation transaction {tx_hash} reverted")
        self.tx_hash = tx_hash
