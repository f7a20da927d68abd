"""Configuration constants for token-deploy."""

# 1,000,000 tokens with 18 decimals
INITIAL_SUPPLY = 1_000_000 * 10**18

CONTRACT_NAME = "MyToken"

# Local/ephemeral networks, explorer verification is skipped on these
DEVELOPMENT_NETWORKS = frozenset({"hardhat", "localhost"})

DEFAULT_CONFIRMATIONS = 1

TASK_TAGS = ("all", "token")

# Environment variable holding the block explorer API key
ETHERSCAN_API_KEY_ENV = "ETHERSCAN_API_KEY"

# Etherscan v2 multichain endpoint, selected per chain with ?chainid=
ETHERSCAN_V2_API_URL = "https://api.etherscan.io/v2/api"

# Per-network settings; block_confirmations is omitted where the default applies
NETWORK_CONFIG = {
    "hardhat": {
        "chain_id": 31337,
    },
    "localhost": {
        "chain_id": 31337,
    },
    "sepolia": {
        "chain_id": 11155111,
        "block_confirmations": 6,
        "api_url": ETHERSCAN_V2_API_URL,
        "browser_url": "https://sepolia.etherscan.io",
    },
    "mainnet": {
        "chain_id": 1,
        "block_confirmations": 6,
        "api_url": ETHERSCAN_V2_API_URL,
        "browser_url": "https://etherscan.io",
    },
}
