"""
token-deploy: deploy the token contract and verify it on a block explorer
"""

from importlib.metadata import PackageNotFoundError, version

from .accounts import NamedAccounts
from .config import DeployConfig, NetworkContext, NetworkSettings
from .exceptions import (
    AlreadyVerifiedError,
    ArtifactNotFoundError,
    ConfigurationError,
    DefectiveDeploymentError,
    DeploymentError,
    DeploymentTimeoutError,
    RpcError,
    TransactionFailedError,
    VerificationError,
)
from .task import TaskContext, TaskRegistry, deploy_token, registry, run_tasks, should_verify
from .types import DeploymentDescriptor, DeploymentResult

try:
    __version__ = version("token-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy_token",
    "run_tasks",
    "should_verify",
    "registry",
    "TaskContext",
    "TaskRegistry",
    "NamedAccounts",
    "DeployConfig",
    "NetworkContext",
    "NetworkSettings",
    "DeploymentDescriptor",
    "DeploymentResult",
    "DeploymentError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "DefectiveDeploymentError",
    "RpcError",
    "TransactionFailedError",
    "DeploymentTimeoutError",
    "VerificationError",
    "AlreadyVerifiedError",
]
