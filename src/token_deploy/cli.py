"""CLI for token-deploy."""

from typing import List, Optional

import structlog
import typer

from .accounts import NamedAccounts
from .config import DeployConfig, NetworkContext, Settings, get_settings
from .constants import ETHERSCAN_API_KEY_ENV, ETHERSCAN_V2_API_URL
from .credentials import StaticCredentials
from .deployer import RpcDeployer
from .exceptions import ConfigurationError, DeploymentError
from .log import StructlogWriter, configure_logging
from .rpc import JsonRpcClient
from .store import DeploymentStore
from .task import TaskContext, registry, run_tasks, should_verify
from .verify import EtherscanVerifier

app = typer.Typer(
    name="token-deploy",
    help="Deploy and verify the token contract",
    no_args_is_help=True,
)

logger = structlog.get_logger()


def build_verifier(
    settings: Settings, config: DeployConfig, network: NetworkContext, rpc: JsonRpcClient
) -> EtherscanVerifier:
    """Create an explorer client for the network, asking the node for its chain id if unknown."""
    if not settings.etherscan_api_key:
        raise ConfigurationError(f"{ETHERSCAN_API_KEY_ENV} is not set")

    chain_id = network.settings.chain_id
    if chain_id is None:
        chain_id = rpc.chain_id()

    return EtherscanVerifier(
        api_url=network.settings.api_url or ETHERSCAN_V2_API_URL,
        api_key=settings.etherscan_api_key,
        chain_id=chain_id,
        artifacts_dir=settings.artifacts_dir,
        contract_name=config.contract_name,
    )


def build_context(settings: Settings, config: DeployConfig, network_name: str) -> TaskContext:
    """Wire real adapters (node, explorer, record store) into a task context."""
    network = config.network(network_name)
    rpc = JsonRpcClient(settings.rpc_url, timeout=settings.rpc_timeout)

    if settings.deployer_address:
        accounts = NamedAccounts({"deployer": settings.deployer_address})
    else:
        accounts = NamedAccounts.from_node(rpc)

    credentials = StaticCredentials({ETHERSCAN_API_KEY_ENV: settings.etherscan_api_key})

    verifier = None
    if should_verify(network, credentials):
        verifier = build_verifier(settings, config, network, rpc)

    return TaskContext(
        accounts=accounts,
        deployments=RpcDeployer(
            rpc,
            DeploymentStore(network.name, settings.deployments_dir),
            settings.artifacts_dir,
            poll_interval=settings.poll_interval,
            timeout=settings.confirmation_timeout,
        ),
        network=network,
        config=config,
        credentials=credentials,
        log=StructlogWriter(),
        verifier=verifier,
    )


@app.command("deploy")
def deploy(
    network: Optional[str] = typer.Option(None, help="Target network (defaults to $NETWORK)"),
    tags: List[str] = typer.Option(["all"], "--tags", "-t", help="Run tasks carrying these tags"),
):
    """Run the deployment tasks selected by tag."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    network_name = network or settings.network

    try:
        ctx = build_context(settings, DeployConfig.default(), network_name)
        ran = run_tasks(tags, ctx)
    except DeploymentError as e:
        logger.error("deployment_failed", network=network_name, error=str(e))
        raise typer.Exit(1)

    if not ran:
        typer.echo(f"No tasks match tags {tags}. Available: {registry.names()}")
        raise typer.Exit(1)


@app.command("verify")
def verify(
    address: Optional[str] = typer.Argument(
        None, help="Contract address (defaults to the stored deployment)"
    ),
    network: Optional[str] = typer.Option(None, help="Target network (defaults to $NETWORK)"),
):
    """Verify an already deployed token on the block explorer."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    config = DeployConfig.default()
    net = config.network(network or settings.network)

    try:
        if net.is_development:
            raise ConfigurationError(f"Network '{net.name}' is a development network")

        args = [config.initial_supply]
        stored = DeploymentStore(net.name, settings.deployments_dir).load(config.contract_name)
        if stored is not None:
            args = stored.get("constructor_args", args)
            address = address or stored["address"]
        if address is None:
            raise ConfigurationError(
                f"No address given and no stored {config.contract_name} deployment on '{net.name}'"
            )

        rpc = JsonRpcClient(settings.rpc_url, timeout=settings.rpc_timeout)
        build_verifier(settings, config, net, rpc).verify(address, args)
    except DeploymentError as e:
        logger.error("verification_failed", network=net.name, error=str(e))
        raise typer.Exit(1)


@app.command("networks")
def networks():
    """List configured networks."""
    config = DeployConfig.default()
    for name in sorted(config.networks):
        net = config.network(name)
        kind = "development" if net.is_development else "live"
        typer.echo(
            f"{name:<12} chain={net.settings.chain_id} "
            f"confirmations={net.confirmations} {kind}"
        )


if __name__ == "__main__":
    app()
