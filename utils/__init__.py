"""
Utilities Package
Endpoint connection and logging
"""

from .logging_setup import SecretRedactor, configure_logging
from .rpc_manager import connect

__all__ = [
    'SecretRedactor',
    'configure_logging',
    'connect'
]
