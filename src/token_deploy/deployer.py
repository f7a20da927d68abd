"""Contract deployment over JSON-RPC."""

import time
from pathlib import Path
from typing import Any, Callable, Dict, Protocol

import structlog
from eth_utils import to_checksum_address

from .abi import encode_constructor_args, normalize_constructor_args
from .artifacts import load_artifact
from .exceptions import DeploymentTimeoutError, TransactionFailedError
from .rpc import JsonRpcClient
from .store import DeploymentStore
from .types import ContractArtifact, DeploymentDescriptor, DeploymentResult

logger = structlog.get_logger()


class Deployer(Protocol):
    """Deployment-submission capability used by tasks."""

    def deploy(self, descriptor: DeploymentDescriptor) -> DeploymentResult: ...


class RpcDeployer:
    """
    Deploys compiled hardhat artifacts through a node's unlocked accounts.

    Deployments are recorded in hardhat-deploy format. A stored deployment with
    the same creation bytecode and constructor arguments is reused instead of
    sending a new transaction, provided the node still has code at its address.
    """

    def __init__(
        self,
        rpc: JsonRpcClient,
        store: DeploymentStore,
        artifacts_dir: Path,
        poll_interval: float = 2.0,
        timeout: float = 600,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.rpc = rpc
        self.store = store
        self.artifacts_dir = Path(artifacts_dir)
        self.poll_interval = poll_interval
        self.timeout = timeout
        self._sleep = sleep
        self._clock = clock

    def deploy(self, descriptor: DeploymentDescriptor) -> DeploymentResult:
        """
        Deploy a contract, or reuse an identical stored deployment.

        Args:
            descriptor: Contract name, constructor args, sender, log flag, confirmations

        Returns:
            DeploymentResult for the new or reused contract

        Raises:
            ArtifactNotFoundError: If the contract has not been compiled
            ConfigurationError: If the constructor arguments do not match the ABI
            RpcError: If the node rejects a call
            TransactionFailedError: If the creation transaction reverts
            DeploymentTimeoutError: If confirmations are not reached in time
        """
        artifact = load_artifact(self.artifacts_dir, descriptor.contract_name)
        args = list(descriptor.args)

        existing = self.store.load(descriptor.contract_name)
        if existing is not None and self._is_live_match(existing, artifact, args):
            if descriptor.log:
                logger.info(
                    "deployment_reused",
                    contract=descriptor.contract_name,
                    network=self.store.network,
                    address=existing["address"],
                )
            return DeploymentResult(
                address=existing["address"],
                transaction_hash=existing.get("transaction_hash"),
                block_number=existing["block"],
                receipt=existing.get("receipt", {}),
                newly_deployed=False,
            )

        data = artifact.bytecode + encode_constructor_args(artifact.abi, args).hex()
        tx_hash = self.rpc.send_transaction({"from": descriptor.sender, "data": data})

        if descriptor.log:
            logger.info(
                "deploying",
                contract=descriptor.contract_name,
                network=self.store.network,
                tx=tx_hash,
            )

        receipt = self.wait_for_confirmations(tx_hash, descriptor.confirmations)

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise TransactionFailedError(
                f"Transaction {tx_hash} did not create a contract"
            )
        address = to_checksum_address(contract_address)

        self.store.save(
            descriptor.contract_name,
            address=address,
            abi=artifact.abi,
            transaction_hash=tx_hash,
            receipt=receipt,
            args=args,
            bytecode=artifact.bytecode,
            deployed_bytecode=artifact.deployed_bytecode,
        )

        if descriptor.log:
            logger.info(
                "deployed",
                contract=descriptor.contract_name,
                address=address,
                gas_used=int(receipt.get("gasUsed", "0x0"), 16),
            )

        return DeploymentResult(
            address=address,
            transaction_hash=tx_hash,
            block_number=int(receipt["blockNumber"], 16),
            receipt=receipt,
            newly_deployed=True,
        )

    def _is_live_match(self, existing: Dict[str, Any], artifact: ContractArtifact, args) -> bool:
        """Whether a stored record is the same deployment and still live on chain."""
        if existing.get("bytecode") != artifact.bytecode:
            return False
        if normalize_constructor_args(artifact.abi, existing.get("constructor_args", [])) != args:
            return False

        # Records outlive local chains that were reset
        code = self.rpc.get_code(existing["address"])
        if code in ("0x", ""):
            logger.info(
                "stale_deployment",
                contract=artifact.contract_name,
                network=self.store.network,
                address=existing["address"],
            )
            return False
        return True

    def wait_for_confirmations(self, tx_hash: str, confirmations: int) -> Dict[str, Any]:
        """
        Poll until a transaction is mined and buried under enough blocks.

        The block containing the transaction counts as the first confirmation.

        Returns:
            The transaction receipt

        Raises:
            TransactionFailedError: If the receipt status is 0
            DeploymentTimeoutError: If the timeout elapses first
        """
        started = self._clock()
        while True:
            receipt = self.rpc.get_transaction_receipt(tx_hash)
            if receipt is not None:
                if receipt.get("status") == "0x0":
                    raise TransactionFailedError(f"Transaction {tx_hash} reverted")

                mined_in = int(receipt["blockNumber"], 16)
                if self.rpc.block_number() - mined_in + 1 >= confirmations:
                    return receipt

            if self._clock() - started >= self.timeout:
                raise DeploymentTimeoutError(
                    f"Transaction {tx_hash} not confirmed {confirmations} time(s) "
                    f"within {self.timeout}s"
                )

            self._sleep(self.poll_interval)
