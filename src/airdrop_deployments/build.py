"""Build tool invocation for airdrop-deployments library."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

FORGE = "forge"


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one build tool run."""

    success: bool
    output: str


def run_forge(args: List[str], cwd: Optional[Union[Path, str]] = None) -> BuildResult:
    """
    Run forge with the given arguments and capture its output.

    Args:
        args: Arguments after "forge"
        cwd: Project directory (defaults to the current directory)

    Returns:
        BuildResult; success is False when forge exits non-zero or is not installed
    """
    logger.debug("Running %s %s", FORGE, " ".join(args))
    try:
        result = subprocess.run(
            [FORGE, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        return BuildResult(success=False, output=f"{FORGE} not found: {e}")

    return BuildResult(success=result.returncode == 0, output=result.stdout + result.stderr)


def build_contracts(cwd: Optional[Union[Path, str]] = None) -> BuildResult:
    """Compile the project so artifacts are available under out/."""
    return run_forge(["build"], cwd)


def verify_contract(
    address: str,
    contract: str,
    etherscan_api_key: str,
    rpc_url: str,
    constructor_args: bytes = b"",
    cwd: Optional[Union[Path, str]] = None,
) -> BuildResult:
    """
    Submit a deployed contract's source for Etherscan verification.

    Args:
        address: Deployed contract address
        contract: Contract identifier ("Name" or "src/Name.sol:Name")
        etherscan_api_key: Etherscan API key
        rpc_url: RPC URL used to detect the chain
        constructor_args: ABI-encoded constructor arguments
    """
    args = [
        "verify-contract",
        address,
        contract,
        "--etherscan-api-key",
        etherscan_api_key,
        "--rpc-url",
        rpc_url,
        "--watch",
    ]
    if constructor_args:
        args += ["--constructor-args", "0x" + constructor_args.hex()]
    return run_forge(args, cwd)
