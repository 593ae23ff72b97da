"""
Deployment Data Types
Configuration, result and failure records passed between components
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlsplit

from .exceptions import DeploymentError


class DeploymentState(Enum):
    """Lifecycle of a single deployment attempt"""
    
    NOT_STARTED = "not_started"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class DeploymentConfiguration:
    """Everything the driver needs, resolved once at startup"""
    
    # Core fields (must be non-empty)
    endpoint_url: str = field(repr=False)  # May embed an API key
    credential: str = field(repr=False)  # Signing private key
    contract_name: str
    constructor_args: Tuple[Any, ...]
    
    # Network / build settings
    network: str
    chain_id: Optional[int] = None
    compiler_version: Optional[str] = None
    
    # Paths and confirmation policy
    artifacts_dir: str = "artifacts"
    deployments_dir: str = "deployments"
    confirmations: int = 1
    poll_interval: float = 2.0
    gas_limit: Optional[int] = None
    
    # Raw environment values substituted into url/accounts (API keys etc.)
    substituted: Tuple[str, ...] = field(default=(), repr=False, compare=False)
    
    @property
    def redacted_endpoint(self) -> str:
        """Endpoint with only scheme and host, safe to log"""
        parts = urlsplit(self.endpoint_url)
        if not parts.scheme or not parts.hostname:
            return "***"
        host = parts.hostname if parts.port is None else f"{parts.hostname}:{parts.port}"
        return f"{parts.scheme}://{host}/***"
    
    @property
    def secrets(self) -> Tuple[str, ...]:
        """Values that must never reach the logs"""
        return (self.credential,) + self.substituted


@dataclass(frozen=True)
class DeploymentResult:
    """Successful, confirmed deployment"""
    
    address: str
    transaction_hash: str
    block_number: int
    
    ok = True


@dataclass(frozen=True)
class DeploymentFailure:
    """Terminal failure of a deployment attempt"""
    
    error: DeploymentError
    last_state: DeploymentState = DeploymentState.NOT_STARTED  # Furthest state reached
    transaction_hash: Optional[str] = None  # Set when the tx was already submitted
    
    ok = False
    
    @property
    def cause(self) -> BaseException:
        """Underlying exception, unmodified"""
        return self.error.cause if self.error.cause is not None else self.error


DeploymentOutcome = Union[DeploymentResult, DeploymentFailure]
