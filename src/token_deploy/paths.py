"""Path management utilities for token-deploy."""

from pathlib import Path
from typing import Optional, Union


def get_default_artifacts_dir() -> Path:
    """
    Get default compiled artifacts directory (hardhat layout).

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_default_deployments_dir() -> Path:
    """
    Get default deployment records directory (hardhat-deploy layout).

    Returns:
        Path to ./deployments
    """
    return Path.cwd() / "deployments"


def get_deployment_path(
    network: str,
    contract_name: str,
    deployments_root: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Get the deployment record path for a contract on a network.

    Args:
        network: Network name (e.g. "sepolia")
        contract_name: Contract name (e.g. "MyToken")
        deployments_root: Custom deployments directory (defaults to ./deployments)

    Returns:
        Path to deployments/{network}/{contract_name}.json
    """
    if deployments_root is None:
        deployments_root = get_default_deployments_dir()
    else:
        deployments_root = Path(deployments_root).absolute()

    return deployments_root / network / f"{contract_name}.json"
