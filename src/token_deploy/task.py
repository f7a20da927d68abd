"""Deployment tasks and the tag-based registry that selects them."""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from .accounts import NamedAccounts
from .config import DeployConfig, NetworkContext
from .constants import ETHERSCAN_API_KEY_ENV, TASK_TAGS
from .credentials import CredentialProvider
from .deployer import Deployer
from .exceptions import ConfigurationError
from .log import LogWriter
from .types import DeploymentDescriptor, DeploymentResult
from .verify import Verifier

logger = structlog.get_logger()


@dataclass
class TaskContext:
    """Capabilities and configuration handed to every task."""

    accounts: NamedAccounts
    deployments: Deployer
    network: NetworkContext
    config: DeployConfig
    credentials: CredentialProvider
    log: LogWriter
    # Only called when verification is due; may be None on development networks
    verifier: Optional[Verifier] = None


TaskFunction = Callable[[TaskContext], object]


@dataclass(frozen=True)
class RegisteredTask:
    name: str
    tags: Tuple[str, ...]
    func: TaskFunction


class TaskRegistry:
    """
    Catalog of deployment tasks, selectable by tag.

    Usage:
        @registry.register(tags=("all", "token"))
        def deploy_token(ctx): ...
    """

    def __init__(self):
        self._tasks: Dict[str, RegisteredTask] = {}

    def register(self, tags: Iterable[str], name: Optional[str] = None):
        """Decorator to register a task function under a set of tags."""

        def decorator(func: TaskFunction) -> TaskFunction:
            task_name = name or func.__name__
            if task_name in self._tasks:
                logger.warning("task_overwritten", name=task_name)
            self._tasks[task_name] = RegisteredTask(task_name, tuple(tags), func)
            return func

        return decorator

    def select(self, tags: Iterable[str]) -> List[RegisteredTask]:
        """Tasks carrying any of the given tags, in registration order."""
        wanted = set(tags)
        return [t for t in self._tasks.values() if wanted.intersection(t.tags)]

    def names(self) -> List[str]:
        return list(self._tasks)

    def clear(self) -> None:
        """Clear all registered tasks (for testing)."""
        self._tasks.clear()


registry = TaskRegistry()


def should_verify(network: NetworkContext, credentials: CredentialProvider) -> bool:
    """Verification runs only off development networks and with an explorer API key."""
    return not network.is_development and credentials.get(ETHERSCAN_API_KEY_ENV) is not None


@registry.register(tags=TASK_TAGS)
def deploy_token(ctx: TaskContext) -> DeploymentResult:
    """
    Deploy the token with its fixed initial supply, then verify it when due.

    Raises:
        ConfigurationError: If no deployer account is configured, or
            verification is due but no verifier was supplied
        Whatever the deployer or verifier raises, unchanged
    """
    deployer = ctx.accounts.resolve("deployer")

    descriptor = DeploymentDescriptor(
        contract_name=ctx.config.contract_name,
        args=(ctx.config.initial_supply,),
        sender=deployer,
        log=True,
        confirmations=ctx.network.confirmations,
    )
    my_token = ctx.deployments.deploy(descriptor)
    ctx.log.write(f"myToken deployed at {my_token.address}")

    if should_verify(ctx.network, ctx.credentials):
        if ctx.verifier is None:
            raise ConfigurationError(
                f"Verification is due on network '{ctx.network.name}' but no verifier is configured"
            )
        ctx.verifier.verify(my_token.address, descriptor.args)

    return my_token


def run_tasks(
    tags: Iterable[str], ctx: TaskContext, tasks: Optional[TaskRegistry] = None
) -> List[str]:
    """
    Run every task matching the tags, in order, stopping at the first failure.

    Returns:
        Names of the tasks that ran
    """
    selected = (tasks or registry).select(tags)
    ran = []
    for task in selected:
        logger.info("task_started", task=task.name, network=ctx.network.name)
        task.func(ctx)
        ran.append(task.name)
    return ran
