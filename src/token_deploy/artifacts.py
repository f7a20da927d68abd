"""Compiled artifact loading for token-deploy (hardhat layout)."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ArtifactNotFoundError
from .types import BuildInfo, ContractArtifact


def find_artifact_file(artifacts_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact JSON for a contract.

    Hardhat writes artifacts/{sourceName}/{ContractName}.json next to a
    {ContractName}.dbg.json debug file; build-info/ holds compiler runs.

    Args:
        artifacts_dir: Root artifacts directory
        contract_name: Contract name (e.g. "MyToken")

    Returns:
        Path to the artifact file

    Raises:
        ArtifactNotFoundError: If no artifact, or more than one, matches
    """
    matches = [
        p
        for p in Path(artifacts_dir).rglob(f"{contract_name}.json")
        if "build-info" not in p.parts
    ]

    if not matches:
        raise ArtifactNotFoundError(
            f"Artifact for '{contract_name}' not found under {artifacts_dir}. "
            "Compile the contracts first."
        )
    if len(matches) > 1:
        found = ", ".join(str(m) for m in sorted(matches))
        raise ArtifactNotFoundError(
            f"Artifact name '{contract_name}' is ambiguous: {found}"
        )

    return matches[0]


def load_artifact(artifacts_dir: Path, contract_name: str) -> ContractArtifact:
    """
    Load a compiled contract artifact.

    Raises:
        ArtifactNotFoundError: If the artifact is missing or has no bytecode
    """
    artifact_file = find_artifact_file(artifacts_dir, contract_name)
    with open(artifact_file) as f:
        data = json.load(f)

    bytecode = data.get("bytecode")
    if not bytecode or bytecode == "0x":
        # Abstract contracts and interfaces compile to empty bytecode
        raise ArtifactNotFoundError(
            f"Artifact {artifact_file} has no creation bytecode"
        )

    return ContractArtifact(
        contract_name=data.get("contractName", contract_name),
        source_name=data["sourceName"],
        abi=data["abi"],
        bytecode=bytecode,
        deployed_bytecode=data.get("deployedBytecode"),
    )


def _build_info_from_dbg(artifact_file: Path) -> Optional[Path]:
    dbg_file = artifact_file.with_name(f"{artifact_file.stem}.dbg.json")
    if not dbg_file.exists():
        return None

    with open(dbg_file) as f:
        relative = json.load(f).get("buildInfo")
    if not relative:
        return None

    candidate = (dbg_file.parent / relative).resolve()
    return candidate if candidate.exists() else None


def _contains_contract(data: Dict[str, Any], source_name: str, contract_name: str) -> bool:
    contracts = data.get("output", {}).get("contracts", {})
    return contract_name in contracts.get(source_name, {})


def load_build_info(artifacts_dir: Path, contract_name: str) -> BuildInfo:
    """
    Load the compiler input that produced a contract.

    The debug file's buildInfo pointer is preferred; otherwise build-info/ is
    scanned for a run whose output contains the contract.

    Args:
        artifacts_dir: Root artifacts directory
        contract_name: Contract name (e.g. "MyToken")

    Returns:
        BuildInfo with the solc long version and standard JSON input

    Raises:
        ArtifactNotFoundError: If no build info contains the contract
    """
    artifacts_dir = Path(artifacts_dir)
    artifact_file = find_artifact_file(artifacts_dir, contract_name)
    artifact = load_artifact(artifacts_dir, contract_name)

    candidates = []
    dbg_target = _build_info_from_dbg(artifact_file)
    if dbg_target is not None:
        candidates.append(dbg_target)
    candidates.extend(sorted((artifacts_dir / "build-info").glob("*.json")))

    for build_file in candidates:
        with open(build_file) as f:
            data = json.load(f)
        if _contains_contract(data, artifact.source_name, artifact.contract_name):
            return BuildInfo(
                solc_long_version=data["solcLongVersion"],
                input=data["input"],
            )

    raise ArtifactNotFoundError(
        f"No build info found for {artifact.source_name}:{artifact.contract_name}"
    )
