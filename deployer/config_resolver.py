"""
Configuration Resolver
Builds the immutable DeploymentConfiguration from config files and environment
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from loguru import logger

from .exceptions import ConfigurationError
from .types import DeploymentConfiguration

DEFAULT_NETWORK_CONFIG = "config/network_config.json"
DEFAULT_DEPLOY_CONFIG = "config/deploy_config.json"

NETWORK_ENV = "DEPLOY_NETWORK"

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ConfigurationResolver:
    """
    Resolves deployment parameters

    Network endpoints and signing accounts are declared in the network config
    as ``${VAR}`` templates and filled from the environment. Contract name and
    constructor arguments come from the deploy config. Only presence is
    validated; nothing is sent anywhere.
    """

    def __init__(
        self,
        network_config_path: Union[str, Path] = DEFAULT_NETWORK_CONFIG,
        deploy_config_path: Union[str, Path] = DEFAULT_DEPLOY_CONFIG,
        environ: Optional[Mapping[str, str]] = None,
        network: Optional[str] = None
    ):
        """
        Initialize Configuration Resolver

        Args:
            network_config_path: JSON file declaring networks and compiler version
            deploy_config_path: JSON file declaring contract and constructor args
            environ: Secret source (defaults to os.environ)
            network: Network name overriding DEPLOY_NETWORK / defaultNetwork
        """
        self.network_config_path = Path(network_config_path)
        self.deploy_config_path = Path(deploy_config_path)
        self.environ = os.environ if environ is None else environ
        self.network = network

    def resolve(self) -> DeploymentConfiguration:
        """
        Resolve and validate the deployment configuration

        Returns:
            DeploymentConfiguration

        Raises:
            ConfigurationError: If any required value is absent or empty
        """
        network_config = self._load_json(self.network_config_path)
        deploy_config = self._load_json(self.deploy_config_path)

        network_name = self._select_network(network_config)
        networks = network_config.get('networks', {})
        if not isinstance(networks, dict):
            raise ConfigurationError(f"'networks' must be an object in {self.network_config_path}")
        network = networks.get(network_name)
        if not isinstance(network, dict):
            raise ConfigurationError(f"Network '{network_name}' is not declared in {self.network_config_path}")

        substituted = []
        endpoint_url = self._substitute(self._require(network, 'url', f"networks.{network_name}"), substituted)

        accounts = network.get('accounts') or []
        if not isinstance(accounts, list) or not accounts:
            raise ConfigurationError(f"networks.{network_name}.accounts must list a signing account")
        credential = self._substitute(accounts[0], substituted)

        contract_name = self._require(deploy_config, 'contract', str(self.deploy_config_path))

        constructor_args = deploy_config.get('constructor_args')
        if not isinstance(constructor_args, list) or not constructor_args:
            raise ConfigurationError(f"constructor_args missing or empty in {self.deploy_config_path}")
        for index, value in enumerate(constructor_args):
            if value is None or value == "":
                raise ConfigurationError(f"constructor_args[{index}] is empty")

        try:
            confirmations = int(deploy_config.get('confirmations', 1))
            poll_interval = float(deploy_config.get('poll_interval_seconds', 2.0))
            gas_limit = deploy_config.get('gas_limit')
            gas_limit = int(gas_limit) if gas_limit else None
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid numeric setting in {self.deploy_config_path}: {e}") from e
        if confirmations < 1:
            raise ConfigurationError("confirmations must be at least 1")

        config = DeploymentConfiguration(
            endpoint_url=endpoint_url,
            credential=credential,
            contract_name=contract_name,
            constructor_args=tuple(constructor_args),
            network=network_name,
            chain_id=network.get('chainId'),
            compiler_version=network_config.get('solidity'),
            artifacts_dir=deploy_config.get('artifacts_dir', 'artifacts'),
            deployments_dir=deploy_config.get('deployments_dir', 'deployments'),
            confirmations=confirmations,
            poll_interval=poll_interval,
            gas_limit=gas_limit,
            substituted=tuple(substituted)
        )

        logger.info(f"Resolved deployment of {contract_name} to '{network_name}' ({config.redacted_endpoint})")
        return config

    def _select_network(self, network_config: Dict) -> str:
        """Pick the target network: argument, environment, then defaultNetwork"""
        name = self.network or self.environ.get(NETWORK_ENV) or network_config.get('defaultNetwork')
        if not name:
            raise ConfigurationError(
                f"No target network: set {NETWORK_ENV} or defaultNetwork in {self.network_config_path}"
            )
        return name

    def _substitute(self, template: str, substituted: List[str]) -> str:
        """
        Fill ``${VAR}`` placeholders from the secret source

        Args:
            template: String possibly containing placeholders
            substituted: Collects the values filled in, for log redaction

        Returns:
            Substituted string

        Raises:
            ConfigurationError: Naming (never echoing) the missing variable
        """
        if not isinstance(template, str):
            raise ConfigurationError("Network url and accounts must be strings")

        def replace(match):
            name = match.group(1)
            value = self.environ.get(name)
            if not value:
                raise ConfigurationError(f"Environment variable {name} must be set")
            substituted.append(value)
            return value

        value = _PLACEHOLDER.sub(replace, template)
        if not value.strip():
            raise ConfigurationError("Resolved network setting is empty")
        return value

    @staticmethod
    def _require(section: Dict, key: str, where: str) -> Any:
        """Return a non-empty value or raise ConfigurationError"""
        value = section.get(key)
        if value is None or value == "":
            raise ConfigurationError(f"'{key}' missing or empty in {where}")
        return value

    @staticmethod
    def _load_json(path: Path) -> Dict:
        """Load a JSON config file"""
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Config file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a JSON object")
        return data
