"""
Contract Factory
Loads compiled Hardhat artifacts and produces contract-creation payloads
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from web3 import Web3
from loguru import logger

from deployer.exceptions import ArtifactError, DeploymentError

ARTIFACT_FORMAT = "hh-sol-artifact-1"


class ContractFactory:
    """
    Creation interface of one compiled contract

    Holds the ABI and bytecode of a Hardhat artifact
    (``artifacts/contracts/<Source>.sol/<Name>.json``).
    """

    def __init__(
        self,
        name: str,
        abi: List[Dict],
        bytecode: str,
        solc_version: Optional[str] = None,
        w3: Optional[Web3] = None
    ):
        """
        Initialize Contract Factory

        Args:
            name: Contract name
            abi: Contract ABI
            bytecode: Creation bytecode (0x-prefixed hex)
            solc_version: Compiler version the artifact was built with, if known
            w3: Web3 instance used for encoding (an unconnected one by default)
        """
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.solc_version = solc_version
        self.contract = (w3 or Web3()).eth.contract(abi=abi, bytecode=bytecode)

    @classmethod
    def from_artifacts(
        cls,
        artifacts_dir: Union[str, Path],
        name: str,
        compiler_version: Optional[str] = None
    ) -> "ContractFactory":
        """
        Locate and load the artifact for a named contract

        Args:
            artifacts_dir: Hardhat artifacts directory
            name: Contract name (e.g. "CrowdFund")
            compiler_version: Expected solc version; checked against build info when present

        Returns:
            ContractFactory

        Raises:
            ArtifactError: Missing, ambiguous or invalid artifact
        """
        artifact_path = find_artifact(artifacts_dir, name)

        try:
            with open(artifact_path, 'r') as f:
                artifact = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ArtifactError(f"Cannot read artifact {artifact_path}: {e}", cause=e) from e

        if artifact.get('_format', ARTIFACT_FORMAT) != ARTIFACT_FORMAT:
            raise ArtifactError(f"Unsupported artifact format: {artifact.get('_format')}")

        abi = artifact.get('abi')
        bytecode = artifact.get('bytecode') or ''
        if not isinstance(abi, list):
            raise ArtifactError(f"Artifact {artifact_path} has no ABI")
        if bytecode in ('', '0x'):
            raise ArtifactError(f"{name} has no bytecode (abstract contract or interface?)")
        if artifact.get('linkReferences'):
            libraries = ', '.join(sorted(
                lib for source in artifact['linkReferences'].values() for lib in source
            ))
            raise ArtifactError(f"{name} needs library linking ({libraries}), which is not supported")

        solc_version = read_solc_version(artifact_path)
        if compiler_version and solc_version and solc_version != compiler_version:
            raise ArtifactError(
                f"{name} was compiled with solc {solc_version}, configuration expects {compiler_version}"
            )
        if solc_version is None:
            logger.warning(f"No build info for {name}, compiler version not verified")

        logger.info(f"Loaded artifact {artifact_path}")
        return cls(name, abi, bytecode if bytecode.startswith('0x') else '0x' + bytecode, solc_version)

    def creation_data(self, args: Sequence[Any]) -> str:
        """
        Build the creation payload: bytecode followed by ABI-encoded constructor args

        Args:
            args: Constructor arguments, in declaration order

        Returns:
            0x-prefixed hex string

        Raises:
            DeploymentError: If args do not fit the constructor signature
        """
        if args and not self._constructor_inputs():
            raise DeploymentError(f"{self.name} has no constructor arguments, got {len(args)}")

        try:
            constructor = self.contract.constructor(*self._checksum_addresses(args))
        except Exception as e:
            raise DeploymentError(f"Constructor arguments do not match {self.name}: {e}", cause=e) from e

        return constructor.data_in_transaction

    def _checksum_addresses(self, args: Sequence[Any]) -> List[Any]:
        """Checksum address-typed arguments (web3 rejects lowercase addresses; encoding is unchanged)"""
        inputs = self._constructor_inputs()
        return [
            Web3.to_checksum_address(value)
            if index < len(inputs) and inputs[index].get('type') == 'address' and Web3.is_address(value)
            else value
            for index, value in enumerate(args)
        ]

    def _constructor_inputs(self) -> List[Dict]:
        return next((entry.get('inputs', []) for entry in self.abi if entry.get('type') == 'constructor'), [])


def find_artifact(artifacts_dir: Union[str, Path], name: str) -> Path:
    """
    Find ``<Name>.json`` under ``artifacts_dir``, skipping build-info and debug files

    Raises:
        ArtifactError: If no artifact, or more than one, matches
    """
    root = Path(artifacts_dir)
    if not root.is_dir():
        raise ArtifactError(f"Artifacts directory not found: {root} (run 'npx hardhat compile' first)")

    matches = [
        path for path in root.rglob(f"{name}.json")
        if path.parent.name.endswith('.sol') and 'build-info' not in path.parts
    ]

    if not matches:
        raise ArtifactError(f"Contract artifact not found for {name} in {root}")
    if len(matches) > 1:
        sources = ', '.join(str(path.parent.relative_to(root)) for path in sorted(matches))
        raise ArtifactError(f"Multiple artifacts named {name}: {sources}")

    return matches[0]


def read_solc_version(artifact_path: Path) -> Optional[str]:
    """Compiler version from the artifact's build info, or None if unavailable"""
    dbg_path = artifact_path.with_name(artifact_path.stem + '.dbg.json')
    try:
        with open(dbg_path, 'r') as f:
            build_info_ref = json.load(f).get('buildInfo')
        if not build_info_ref:
            return None
        with open(dbg_path.parent / build_info_ref, 'r') as f:
            return json.load(f).get('solcVersion')
    except (OSError, json.JSONDecodeError):
        return None

