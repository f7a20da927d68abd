"""Shared pytest fixtures for token-deploy tests."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from token_deploy.accounts import NamedAccounts
from token_deploy.config import DeployConfig, NetworkSettings
from token_deploy.credentials import StaticCredentials
from token_deploy.types import DeploymentDescriptor, DeploymentResult

DEPLOYER = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
TOKEN_ADDRESS = "0xd9145CCE52D386f254917e481eB44e9943F39138"
TX_HASH = "0x" + "ab" * 32

TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "uint256", "name": "initialSupply", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
TOKEN_BYTECODE = "0x608060405234801561001057600080fd5b50"
SOLC_LONG_VERSION = "0.8.20+commit.a1b79de6"


class RecordingLog:
    """LogWriter double that keeps every line."""

    def __init__(self):
        self.lines: List[str] = []

    def write(self, message: str) -> None:
        self.lines.append(message)


class FakeDeployer:
    """Deployer double returning a fixed address and recording requests."""

    def __init__(self, address: str = TOKEN_ADDRESS, error: Exception = None, events: list = None):
        self.address = address
        self.error = error
        self.calls: List[DeploymentDescriptor] = []
        self.events = events if events is not None else []

    def deploy(self, descriptor: DeploymentDescriptor) -> DeploymentResult:
        self.calls.append(descriptor)
        self.events.append("deploy")
        if self.error is not None:
            raise self.error
        return DeploymentResult(address=self.address, transaction_hash=TX_HASH, block_number=1)


class FakeVerifier:
    """Verifier double recording calls."""

    def __init__(self, error: Exception = None, events: list = None):
        self.error = error
        self.calls: List[tuple] = []
        self.events = events if events is not None else []

    def verify(self, address, args) -> None:
        self.calls.append((address, args))
        self.events.append("verify")
        if self.error is not None:
            raise self.error


@pytest.fixture
def deploy_config() -> DeployConfig:
    """Small network table: two development networks and two live ones."""
    return DeployConfig(
        networks={
            "hardhat": NetworkSettings(chain_id=31337),
            "localhost": NetworkSettings(chain_id=31337),
            "sepolia": NetworkSettings(chain_id=11155111),
            "mainnet": NetworkSettings(chain_id=1, block_confirmations=6),
        },
        development_networks=frozenset({"hardhat", "localhost"}),
    )


@pytest.fixture
def named_accounts() -> NamedAccounts:
    return NamedAccounts({"deployer": DEPLOYER})


@pytest.fixture
def with_api_key() -> StaticCredentials:
    return StaticCredentials({"ETHERSCAN_API_KEY": "TESTKEY"})


@pytest.fixture
def without_api_key() -> StaticCredentials:
    return StaticCredentials()


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create a hardhat artifacts tree for MyToken with matching build info."""
    root = tmp_path / "artifacts"
    contract_dir = root / "contracts" / "MyToken.sol"

    write_json(
        contract_dir / "MyToken.json",
        {
            "_format": "hh-sol-artifact-1",
            "contractName": "MyToken",
            "sourceName": "contracts/MyToken.sol",
            "abi": TOKEN_ABI,
            "bytecode": TOKEN_BYTECODE,
            "deployedBytecode": "0x6080604052348015600f57600080fd",
            "linkReferences": {},
            "deployedLinkReferences": {},
        },
    )
    write_json(
        contract_dir / "MyToken.dbg.json",
        {"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc123.json"},
    )
    write_json(
        root / "build-info" / "abc123.json",
        {
            "_format": "hh-sol-build-info-1",
            "id": "abc123",
            "solcVersion": "0.8.20",
            "solcLongVersion": SOLC_LONG_VERSION,
            "input": {
                "language": "Solidity",
                "sources": {"contracts/MyToken.sol": {"content": "contract MyToken {}"}},
                "settings": {"optimizer": {"enabled": False, "runs": 200}},
            },
            "output": {"contracts": {"contracts/MyToken.sol": {"MyToken": {"abi": TOKEN_ABI}}}},
        },
    )
    return root


@pytest.fixture
def deployments_dir(tmp_path: Path) -> Path:
    root = tmp_path / "deployments"
    root.mkdir()
    return root
