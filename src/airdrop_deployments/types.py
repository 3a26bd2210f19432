"""Data types and dataclasses for airdrop-deployments library."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ArgKind(Enum):
    """Where a constructor argument value comes from."""

    LITERAL = "literal"
    CONFIG = "config"  # value of a configuration record key
    STEP = "step"  # address produced by an earlier deployment step


@dataclass(frozen=True)
class ArgSpec:
    """Specification of a single constructor argument."""

    kind: ArgKind
    value: str

    @classmethod
    def literal(cls, value: Any) -> "ArgSpec":
        return cls(ArgKind.LITERAL, str(value))

    @classmethod
    def config(cls, key: str) -> "ArgSpec":
        return cls(ArgKind.CONFIG, key)

    @classmethod
    def step(cls, step_name: str) -> "ArgSpec":
        return cls(ArgKind.STEP, step_name)


@dataclass(frozen=True)
class DeploymentStep:
    """One contract deployment in a sequence."""

    name: str  # e.g., "worldIDAirdrop"; also prefixes the record keys
    artifact: str  # Contract name, e.g., "WorldIDAirdrop"
    libraries: Tuple[str, ...] = ()  # Earlier steps linked into this bytecode
    args: Tuple[ArgSpec, ...] = ()  # Constructor arguments, in ABI order


@dataclass
class ContractArtifact:
    """Compiled contract as read from the build output."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed hex, may contain link placeholders
    # Library contract name -> fully qualified name ("src/Lib.sol:Lib")
    link_references: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[str] = None


@dataclass(frozen=True)
class DeploymentPayload:
    """Fully linked creation code ready to be signed and sent."""

    bytecode: str
    encoded_args: bytes = b""

    @property
    def data(self) -> str:
        return self.bytecode + self.encoded_args.hex()


@dataclass(frozen=True)
class SubmissionReceipt:
    """Outcome of a confirmed deployment transaction."""

    tx_hash: str
    address: str  # Checksummed


class StepState(Enum):
    """Lifecycle of a deployment step within one run."""

    PENDING = "pending"
    LINKING = "linking"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class DeploymentResult:
    """Address produced by a deployment step."""

    step: str
    address: str
    tx_hash: Optional[str] = None
    reused: bool = False  # True when taken from a prior run's record


@dataclass(frozen=True)
class ConnectionSettings:
    """Validated connection parameters needed before any transaction is sent."""

    rpc_url: str
    private_key: str
    etherscan_api_key: Optional[str] = None
