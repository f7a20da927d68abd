"""Configuration for token-deploy.

Two layers:

- ``Settings``: runtime values read from the environment (and ``.env``), such as
  the RPC endpoint, the active network name and the explorer API key.
- ``DeployConfig``: the static deployment configuration (per-network
  confirmations, development networks, initial supply). Tasks receive it
  explicitly instead of reading module globals.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Literal, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CONTRACT_NAME,
    DEFAULT_CONFIRMATIONS,
    DEVELOPMENT_NETWORKS,
    INITIAL_SUPPLY,
    NETWORK_CONFIG,
)
from .paths import get_default_artifacts_dir, get_default_deployments_dir


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Network
    network: str = "hardhat"
    rpc_url: str = "http://127.0.0.1:8545"
    rpc_timeout: float = 30

    # Accounts; when unset the node's first account is the deployer
    deployer_address: Optional[str] = None

    # Block explorer
    etherscan_api_key: Optional[str] = None

    # Project layout
    artifacts_dir: Path = Field(default_factory=get_default_artifacts_dir)
    deployments_dir: Path = Field(default_factory=get_default_deployments_dir)

    # Confirmation waiting
    poll_interval: float = 2.0
    confirmation_timeout: float = 600

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None


@dataclass(frozen=True)
class NetworkSettings:
    """Static settings for one named network."""

    chain_id: Optional[int] = None
    block_confirmations: Optional[int] = None
    api_url: Optional[str] = None
    browser_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetworkSettings":
        return cls(
            chain_id=data.get("chain_id"),
            block_confirmations=data.get("block_confirmations"),
            api_url=data.get("api_url"),
            browser_url=data.get("browser_url"),
        )


@dataclass(frozen=True)
class DeployConfig:
    """Static deployment configuration passed to tasks."""

    networks: Dict[str, NetworkSettings] = field(default_factory=dict)
    development_networks: FrozenSet[str] = DEVELOPMENT_NETWORKS
    initial_supply: int = INITIAL_SUPPLY
    contract_name: str = CONTRACT_NAME

    @classmethod
    def default(cls) -> "DeployConfig":
        """Build the configuration from the constants module."""
        return cls(
            networks={
                name: NetworkSettings.from_dict(data) for name, data in NETWORK_CONFIG.items()
            },
        )

    def network(self, name: str) -> "NetworkContext":
        """
        Get the context for a network name.

        Unknown names are allowed and get no overrides, matching how an
        ad-hoc RPC endpoint would be treated.
        """
        return NetworkContext(
            name=name,
            settings=self.networks.get(name, NetworkSettings()),
            is_development=name in self.development_networks,
        )


@dataclass(frozen=True)
class NetworkContext:
    """The active target network."""

    name: str
    settings: NetworkSettings = field(default_factory=NetworkSettings)
    is_development: bool = False

    @property
    def confirmations(self) -> int:
        # Override when set, else the default of one block
        if self.settings.block_confirmations:
            return self.settings.block_confirmations
        return DEFAULT_CONFIRMATIONS
