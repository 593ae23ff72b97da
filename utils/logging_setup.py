"""
Logging Setup
Configures loguru sinks and scrubs secrets from every log record
"""

import sys
from typing import Iterable, Optional

from loguru import logger

REDACTED = "***"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


class SecretRedactor:
    """
    Loguru patcher that replaces known secret values in log messages
    """
    
    def __init__(self, secrets: Iterable[str] = ()):
        self.secrets = set()
        for secret in secrets:
            self.add(secret)
    
    def add(self, secret: Optional[str]):
        """Register a secret (empty values are ignored)"""
        if secret:
            self.secrets.add(secret)
    
    def redact(self, text: str) -> str:
        """Replace every registered secret in text"""
        # Longest first so an API key inside a URL does not leave the URL half-masked
        for secret in sorted(self.secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        return text
    
    def __call__(self, record):
        record["message"] = self.redact(record["message"])


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> SecretRedactor:
    """
    Configure loguru for the deployer
    
    Args:
        level: Console log level
        log_file: Optional audit log path (rotated daily, kept 7 days)
        
    Returns:
        The installed SecretRedactor; register secrets on it once known
    """
    redactor = SecretRedactor()
    
    logger.remove()
    logger.configure(patcher=redactor)
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)
    
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
    
    return redactor
