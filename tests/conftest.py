"""
Shared test fixtures
"""

import json
import sys
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from loguru import logger

from deployer.types import DeploymentConfiguration


# Hardhat's first well-known development account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_API_KEY = "alchemy-test-key-5f3c9a"

BENEFICIARY = "0x8bed756f4411e94758601be18a94ba76f945daa9"
DURATION = 1705563489

DEPLOYED_ADDRESS = "0xABCDEF0123456789abcdef0123456789ABCDEF01"
TX_HASH = HexBytes(b'\xab' * 32)

BYTECODE = "0x6080604052348015600f57600080fd5b50"

CROWDFUND_ABI = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"internalType": "address", "name": "_beneficiary", "type": "address"},
            {"internalType": "uint256", "name": "_duration", "type": "uint256"}
        ]
    },
    {
        "type": "function",
        "name": "contribute",
        "stateMutability": "payable",
        "inputs": [],
        "outputs": []
    }
]


def write_artifact(artifacts_dir, name="CrowdFund", abi=None, bytecode=BYTECODE,
                   solc_version="0.8.9", link_references=None):
    """Write a Hardhat-style artifact (plus debug and build info)"""
    contract_dir = artifacts_dir / "contracts" / f"{name}.sol"
    contract_dir.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": name,
        "sourceName": f"contracts/{name}.sol",
        "abi": CROWDFUND_ABI if abi is None else abi,
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
        "linkReferences": link_references or {},
        "deployedLinkReferences": {}
    }
    (contract_dir / f"{name}.json").write_text(json.dumps(artifact))

    if solc_version:
        build_info_dir = artifacts_dir / "build-info"
        build_info_dir.mkdir(exist_ok=True)
        (build_info_dir / "abc123.json").write_text(json.dumps({
            "_format": "hh-sol-build-info-1",
            "solcVersion": solc_version
        }))
        (contract_dir / f"{name}.dbg.json").write_text(json.dumps({
            "_format": "hh-sol-dbg-1",
            "buildInfo": "../../build-info/abc123.json"
        }))

    return contract_dir / f"{name}.json"


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore loguru defaults after each test"""
    yield
    logger.remove()
    logger.configure(patcher=lambda record: None)
    logger.add(sys.stderr)


@pytest.fixture
def log_messages():
    """Capture formatted log messages"""
    messages = []
    logger.add(messages.append, format="{message}", level="DEBUG")
    return messages


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts directory containing a compiled CrowdFund"""
    path = tmp_path / "artifacts"
    write_artifact(path)
    return path


@pytest.fixture
def config(tmp_path, artifacts_dir):
    """Resolved deployment configuration pointing at the test artifacts"""
    return DeploymentConfiguration(
        endpoint_url=f"https://eth-goerli.alchemyapi.io/v2/{TEST_API_KEY}",
        credential=TEST_PRIVATE_KEY,
        contract_name="CrowdFund",
        constructor_args=(BENEFICIARY, DURATION),
        network="goerli",
        chain_id=5,
        compiler_version="0.8.9",
        artifacts_dir=str(artifacts_dir),
        deployments_dir=str(tmp_path / "deployments"),
        confirmations=1,
        poll_interval=0,
        substituted=(TEST_API_KEY, TEST_PRIVATE_KEY)
    )


@pytest.fixture
def receipt():
    """Successful creation receipt"""
    return {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS,
        'blockNumber': 100,
        'transactionHash': TX_HASH,
        'gasUsed': 412000
    }


@pytest.fixture
def mock_w3(receipt):
    """Endpoint that accepts and confirms everything"""
    w3 = MagicMock()
    w3.eth.chain_id = 5
    w3.eth.gas_price = 2_000_000_000
    w3.eth.block_number = 100
    w3.eth.get_transaction_count.return_value = 0
    w3.eth.estimate_gas.return_value = 500_000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.get_transaction_receipt.return_value = receipt
    return w3
