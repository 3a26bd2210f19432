"""Shared pytest fixtures for airdrop-deployments tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from airdrop_deployments.linker import library_placeholder
from airdrop_deployments.types import DeploymentPayload, SubmissionReceipt

PRIVATE_KEY = "0x" + "11" * 32
ROUTER_ADDRESS = "0x" + "ab" * 20
ERC20_ADDRESS = "0x" + "aa" * 20
HOLDER_ADDRESS = "0x" + "bb" * 20

CREATION_CODE = "0x6080604052"
MATH_LIB_FQN = "src/libraries/MathLib.sol:MathLib"

AIRDROP_CONSTRUCTOR = {
    "type": "constructor",
    "stateMutability": "nonpayable",
    "inputs": [
        {"name": "_worldIdRouter", "type": "address", "internalType": "contract IWorldID"},
        {"name": "_groupId", "type": "uint256", "internalType": "uint256"},
        {"name": "_actionId", "type": "string", "internalType": "string"},
        {"name": "_token", "type": "address", "internalType": "contract ERC20"},
        {"name": "_holder", "type": "address", "internalType": "address"},
        {"name": "_airdropAmount", "type": "uint256", "internalType": "uint256"},
    ],
}

MULTI_AIRDROP_CONSTRUCTOR = {
    "type": "constructor",
    "stateMutability": "nonpayable",
    "inputs": [{"name": "_worldIdRouter", "type": "address", "internalType": "contract IWorldID"}],
}


def _write_forge_artifact(
    out_dir: Path,
    name: str,
    abi: List[Dict[str, Any]],
    bytecode: str,
    link_references: Optional[Dict[str, Any]] = None,
    source_path: Optional[str] = None,
) -> Path:
    artifact_dir = out_dir / f"{name}.sol"
    artifact_dir.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = {
        "abi": abi,
        "bytecode": {"object": bytecode, "linkReferences": link_references or {}},
        "deployedBytecode": {"object": bytecode, "linkReferences": {}},
    }
    if source_path:
        data["metadata"] = {"settings": {"compilationTarget": {source_path: name}}}
    path = artifact_dir / f"{name}.json"
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create a forge-style out/ directory with the airdrop contracts and a linked library."""
    out_dir = tmp_path / "out"

    _write_forge_artifact(
        out_dir, "WorldIDAirdrop", [AIRDROP_CONSTRUCTOR], CREATION_CODE, source_path="src/WorldIDAirdrop.sol"
    )
    _write_forge_artifact(out_dir, "WorldIDMultiAirdrop", [MULTI_AIRDROP_CONSTRUCTOR], CREATION_CODE)
    _write_forge_artifact(out_dir, "WorldIDIdentityManagerRouterMock", [], CREATION_CODE)
    _write_forge_artifact(out_dir, "MathLib", [], CREATION_CODE)

    placeholder = library_placeholder(MATH_LIB_FQN)
    _write_forge_artifact(
        out_dir,
        "LinkedAirdrop",
        [MULTI_AIRDROP_CONSTRUCTOR],
        f"{CREATION_CODE}73{placeholder}6000{placeholder}60",
        link_references={
            "src/libraries/MathLib.sol": {
                "MathLib": [{"start": 6, "length": 20}, {"start": 28, "length": 20}]
            }
        },
    )
    return out_dir


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of the persisted configuration inside a temp project."""
    return tmp_path / "script" / ".deploy-config.json"


@pytest.fixture
def airdrop_env(monkeypatch) -> Dict[str, str]:
    """Set every environment variable the deploy commands read."""
    env = {
        "PRIVATE_KEY": PRIVATE_KEY,
        "RPC_URL": "http://test-rpc.example.com",
        "ETHERSCAN_API_KEY": "TESTKEY",
        "WORLD_ID_ROUTER_ADDRESS": ROUTER_ADDRESS,
        "GROUP_ID": "1",
        "ACTION_ID": "wid_airdrop",
        "ERC20_ADDRESS": ERC20_ADDRESS,
        "HOLDER_ADDRESS": HOLDER_ADDRESS,
        "AIRDROP_AMOUNT": "100",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("ETH_RPC_URL", raising=False)
    monkeypatch.delenv("AIRDROP_ADDRESS", raising=False)
    return env


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove every environment variable the resolver reads."""
    for key in [
        "PRIVATE_KEY",
        "RPC_URL",
        "ETH_RPC_URL",
        "ETHERSCAN_API_KEY",
        "WORLD_ID_ROUTER_ADDRESS",
        "GROUP_ID",
        "ACTION_ID",
        "ERC20_ADDRESS",
        "HOLDER_ADDRESS",
        "AIRDROP_AMOUNT",
        "AIRDROP_ADDRESS",
    ]:
        monkeypatch.delenv(key, raising=False)


def no_prompt(text: str) -> str:
    raise AssertionError(f"Unexpected prompt: {text!r}")


class FakeSubmitter:
    """Submitter double that hands out deterministic addresses."""

    def __init__(self, fail_at: Optional[int] = None, error: Optional[Exception] = None):
        self.payloads: List[DeploymentPayload] = []
        self.fail_at = fail_at
        self.error = error

    def submit(self, payload: DeploymentPayload) -> SubmissionReceipt:
        index = len(self.payloads)
        self.payloads.append(payload)
        if self.fail_at is not None and index == self.fail_at:
            raise self.error
        number = index + 1
        return SubmissionReceipt(
            tx_hash="0x" + f"{number:064x}",
            address="0x" + f"{number:040x}",
        )


@pytest.fixture
def fake_submitter() -> FakeSubmitter:
    return FakeSubmitter()


@pytest.fixture
def failing_submitter():
    """Build a FakeSubmitter that raises error on the submission with the given index."""

    def _make(fail_at: int, error: Exception) -> FakeSubmitter:
        return FakeSubmitter(fail_at=fail_at, error=error)

    return _make


@pytest.fixture
def forbid_prompt():
    """Prompt callable that fails the test if it is ever invoked."""
    return no_prompt
