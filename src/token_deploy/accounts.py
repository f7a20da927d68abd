"""Named account registry for token-deploy."""

from typing import Dict, Mapping

from eth_utils import is_address, to_checksum_address

from .exceptions import ConfigurationError
from .rpc import JsonRpcClient

# hardhat-deploy convention: role name -> index into the node's account list
DEFAULT_NAMED_ACCOUNTS = {"deployer": 0}


class NamedAccounts:
    """Maps logical role names (e.g. "deployer") to addresses."""

    def __init__(self, accounts: Mapping[str, str]):
        """
        Args:
            accounts: Role name -> address

        Raises:
            ConfigurationError: If any address is malformed
        """
        self._accounts: Dict[str, str] = {}
        for role, address in accounts.items():
            if not is_address(address):
                raise ConfigurationError(f"Invalid address for account '{role}': {address!r}")
            self._accounts[role] = to_checksum_address(address)

    @classmethod
    def from_node(
        cls, rpc: JsonRpcClient, indices: Mapping[str, int] = DEFAULT_NAMED_ACCOUNTS
    ) -> "NamedAccounts":
        """
        Build the registry from the node's unlocked accounts.

        Args:
            rpc: JSON-RPC client for the target node
            indices: Role name -> index into eth_accounts

        Raises:
            ConfigurationError: If an index is outside the node's account list
        """
        available = rpc.accounts()
        accounts = {}
        for role, index in indices.items():
            if not 0 <= index < len(available):
                raise ConfigurationError(
                    f"Account '{role}' maps to index {index}, "
                    f"but the node exposes {len(available)} account(s)"
                )
            accounts[role] = available[index]
        return cls(accounts)

    def roles(self):
        return list(self._accounts)

    def resolve(self, role: str) -> str:
        """
        Get the address for a role.

        Raises:
            ConfigurationError: If the role is not configured
        """
        if role not in self._accounts:
            raise ConfigurationError(
                f"Named account '{role}' not configured. Available: {self.roles()}"
            )
        return self._accounts[role]
