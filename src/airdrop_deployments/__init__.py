"""
airdrop-deployments: resolve configuration and deploy the WorldID airdrop contracts
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactRepository
from .exceptions import (
    ArgumentError,
    ArtifactNotFoundError,
    BuildError,
    ConfigCorruptionError,
    DeployerError,
    InvalidConfigurationError,
    LinkError,
    MissingRequiredValueError,
    RpcError,
    StepOrderError,
    SubmissionError,
)
from .linker import library_placeholder, link, link_libraries
from .resolver import ValueSource, resolve, validate_connection
from .sequencer import DeploymentSequencer
from .store import ConfigStore
from .submitter import TransactionSubmitter
from .types import ArgSpec, DeploymentResult, DeploymentStep

try:
    __version__ = version("airdrop-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ConfigStore",
    "ValueSource",
    "resolve",
    "validate_connection",
    "library_placeholder",
    "link",
    "link_libraries",
    "DeploymentSequencer",
    "TransactionSubmitter",
    "ArtifactRepository",
    "ArgSpec",
    "DeploymentStep",
    "DeploymentResult",
    "DeployerError",
    "ConfigCorruptionError",
    "InvalidConfigurationError",
    "MissingRequiredValueError",
    "StepOrderError",
    "ArtifactNotFoundError",
    "ArgumentError",
    "LinkError",
    "RpcError",
    "SubmissionError",
    "BuildError",
]
