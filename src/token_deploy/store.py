"""Deployment record storage in hardhat-deploy format."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import DefectiveDeploymentError
from .paths import get_deployment_path


def _to_int(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("0x"):
        return int(value, 16)
    return value


# record key -> key in the parsed deployment, copied when present
_OPTIONAL_FIELDS = {
    "transactionHash": "transaction_hash",
    "bytecode": "bytecode",
    "deployedBytecode": "deployed_bytecode",
    "args": "constructor_args",
    "numDeployments": "num_deployments",
    "receipt": "receipt",
}


def parse_hardhat_deployment(file_path: Path) -> Dict[str, Any]:
    """
    Read a stored deployment so the deployer can decide whether to reuse it
    and the verify command can recover its address and constructor args.

    Raises:
        DefectiveDeploymentError: If the record does not say which block the
            contract was created in
    """
    with open(file_path) as f:
        data = json.load(f)

    block = data.get("receipt", {}).get("blockNumber", data.get("blockNumber"))
    if block is None:
        raise DefectiveDeploymentError(f"Missing block number in deployment record: {file_path}")

    record: Dict[str, Any] = {
        "address": data["address"],
        "block": _to_int(block),
        "abi": data["abi"],
    }
    for key, name in _OPTIONAL_FIELDS.items():
        if key in data:
            record[name] = data[key]
    return record


class DeploymentStore:
    """Reads and writes deployments/{network}/{Contract}.json records."""

    def __init__(self, network: str, root: Optional[Union[Path, str]] = None):
        self.network = network
        self.root = root

    def path(self, contract_name: str) -> Path:
        return get_deployment_path(self.network, contract_name, self.root)

    def load(self, contract_name: str) -> Optional[Dict[str, Any]]:
        """
        Load the stored deployment of a contract.

        Returns:
            Parsed record (see parse_hardhat_deployment), or None if never deployed

        Raises:
            DefectiveDeploymentError: If the stored record has no block number
        """
        record_path = self.path(contract_name)
        if not record_path.exists():
            return None
        return parse_hardhat_deployment(record_path)

    def save(
        self,
        contract_name: str,
        *,
        address: str,
        abi: list,
        transaction_hash: str,
        receipt: Dict[str, Any],
        args: list,
        bytecode: str,
        deployed_bytecode: Optional[str] = None,
    ) -> Path:
        """
        Write a deployment record, bumping numDeployments.

        Receipt quantities arrive hex-encoded from the node and are stored as
        integers, as hardhat-deploy does.

        Returns:
            Path of the written record
        """
        previous = None
        record_path = self.path(contract_name)
        if record_path.exists():
            with open(record_path) as f:
                previous = json.load(f)

        stored_receipt = dict(receipt)
        for key in ("blockNumber", "gasUsed", "cumulativeGasUsed", "status", "transactionIndex"):
            if key in stored_receipt:
                stored_receipt[key] = _to_int(stored_receipt[key])

        data: Dict[str, Any] = {
            "address": address,
            "abi": abi,
            "transactionHash": transaction_hash,
            "receipt": stored_receipt,
            "args": args,
            "numDeployments": (previous or {}).get("numDeployments", 0) + 1,
            "bytecode": bytecode,
        }
        if deployed_bytecode is not None:
            data["deployedBytecode"] = deployed_bytecode

        record_path.parent.mkdir(parents=True, exist_ok=True)
        with open(record_path, "w") as f:
            json.dump(data, f, indent=2)

        return record_path
