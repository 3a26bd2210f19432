"""Custom exception classes for airdrop-deployments library."""

from typing import Iterable, Optional


class DeployerError(Exception):
    """Base exception for deployment-related errors."""

    # Name of the deployment step that was running when the error surfaced
    step: Optional[str] = None


class ConfigCorruptionError(DeployerError, ValueError):
    """Raised when the persisted configuration file cannot be read as a record."""

    pass


class MissingRequiredValueError(DeployerError, ValueError):
    """Raised when required configuration keys are still empty after resolution."""

    def __init__(self, keys: Iterable[str]):
        self.keys = list(keys)
        super().__init__(f"Missing required configuration: {', '.join(self.keys)}")


class InvalidConfigurationError(DeployerError, ValueError):
    """Raised when configuration values are present but malformed."""

    def __init__(self, keys: Iterable[str], message: Optional[str] = None):
        self.keys = list(keys)
        if message is None:
            message = f"Invalid configuration: {', '.join(self.keys)}"
        super().__init__(message)


class StepOrderError(DeployerError, ValueError):
    """Raised when a step depends on a step that does not come before it."""

    pass


class ArtifactNotFoundError(DeployerError, FileNotFoundError):
    """Raised when no build artifact exists for a contract name."""

    pass


class ArgumentError(DeployerError, ValueError):
    """Raised when a constructor argument cannot be converted to its ABI type."""

    pass


class LinkError(DeployerError, ValueError):
    """Raised when bytecode still contains library placeholders after linking."""

    def __init__(self, placeholders: Iterable[str], message: Optional[str] = None):
        self.placeholders = sorted(set(placeholders))
        if message is None:
            message = f"Unresolved library placeholders: {', '.join(self.placeholders)}"
        super().__init__(message)


class RpcError(DeployerError, RuntimeError):
    """Raised when a JSON-RPC request fails or returns an error object."""

    pass


class SubmissionError(DeployerError, RuntimeError):
    """Raised when a transaction is rejected or never confirmed."""

    pass


class BuildError(DeployerError, RuntimeError):
    """Raised when the build tool exits unsuccessfully."""

    pass
