"""Custom exception classes for token-deploy."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a named account, network or argument list is misconfigured."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact or its build info is missing."""

    pass


class DefectiveDeploymentError(DeploymentError, ValueError):
    """Raised when a stored deployment record is missing required block number."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Raised when the JSON-RPC node fails or returns an error object."""

    pass


class TransactionFailedError(DeploymentError, RuntimeError):
    """Raised when a deployment transaction is mined but reverted."""

    pass


class DeploymentTimeoutError(DeploymentError, TimeoutError):
    """Raised when required confirmations are not reached in time."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when the block explorer rejects or fails a verification request."""

    pass


class AlreadyVerifiedError(VerificationError):
    """Raised when the block explorer reports the contract as already verified."""

    pass
