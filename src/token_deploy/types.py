"""Data types and dataclasses for token-deploy."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DeploymentDescriptor:
    """Everything the deployment submitter needs, fixed before submission."""

    contract_name: str  # Artifact name, e.g. "MyToken"
    args: Tuple[Any, ...]  # Constructor arguments, in ABI order
    sender: str  # Deployer address
    log: bool = False  # Emit a deployment log event from the submitter
    confirmations: int = 1


@dataclass(frozen=True)
class DeploymentResult:
    """Outcome of a deployment request."""

    address: str
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None
    receipt: Dict[str, Any] = field(default_factory=dict)
    # False when an identical stored deployment was reused
    newly_deployed: bool = True


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract as written by hardhat under artifacts/."""

    contract_name: str
    source_name: str  # e.g. "contracts/MyToken.sol"
    abi: List[Dict[str, Any]]
    bytecode: str
    deployed_bytecode: Optional[str] = None


@dataclass(frozen=True)
class BuildInfo:
    """Compiler input for a contract, taken from artifacts/build-info."""

    solc_long_version: str  # e.g. "0.8.20+commit.a1b79de6"
    input: Dict[str, Any]  # Standard JSON input
