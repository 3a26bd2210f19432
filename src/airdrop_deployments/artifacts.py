"""Build artifact parsing for airdrop-deployments library."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ArtifactNotFoundError
from .paths import get_artifacts_dir
from .types import ContractArtifact


class ArtifactFormat(Enum):
    """
    Artifact file layouts.

    - FORGE: {"abi": [...], "bytecode": {"object": "0x..", "linkReferences": {...}}}
    - HARDHAT: {"contractName": .., "abi": [...], "bytecode": "0x..", "linkReferences": {...}}
    """

    FORGE = "forge"
    HARDHAT = "hardhat"


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which layout a parsed artifact uses.

    Returns:
        ArtifactFormat, or None if the data has no usable bytecode field
    """
    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict) and "object" in bytecode:
        return ArtifactFormat.FORGE
    if isinstance(bytecode, str):
        return ArtifactFormat.HARDHAT
    return None


def _flatten_link_references(link_references: Dict[str, Any]) -> Dict[str, str]:
    # {"src/Lib.sol": {"Lib": [{"start": .., "length": 20}]}} -> {"Lib": "src/Lib.sol:Lib"}
    flattened: Dict[str, str] = {}
    for source_path, libraries in link_references.items():
        for library_name in libraries:
            flattened[library_name] = f"{source_path}:{library_name}"
    return flattened


def parse_artifact(file_path: Path, name: Optional[str] = None) -> ContractArtifact:
    """
    Parse a forge or hardhat artifact JSON file.

    Args:
        file_path: Path to the artifact
        name: Contract name (defaults to contractName field or file stem)

    Returns:
        ContractArtifact with 0x-prefixed bytecode

    Raises:
        ArtifactNotFoundError: If the file has no bytecode or ABI
    """
    with open(file_path) as f:
        data = json.load(f)

    artifact_format = detect_artifact_format(data)
    if artifact_format is None or "abi" not in data:
        raise ArtifactNotFoundError(f"No bytecode/abi in artifact {file_path}")

    match artifact_format:
        case ArtifactFormat.FORGE:
            bytecode = data["bytecode"]["object"]
            link_references = data["bytecode"].get("linkReferences", {})
            source_path = None
            target = data.get("metadata", {}).get("settings", {}).get("compilationTarget", {})
            if target:
                source_path = next(iter(target))
        case ArtifactFormat.HARDHAT:
            bytecode = data["bytecode"]
            link_references = data.get("linkReferences", {})
            source_path = data.get("sourceName")

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        name=name or data.get("contractName") or file_path.stem,
        abi=data["abi"],
        bytecode=bytecode,
        link_references=_flatten_link_references(link_references),
        source_path=source_path,
    )


class ArtifactRepository:
    """Looks up compiled contracts by name in a build output directory."""

    def __init__(self, artifacts_dir: Optional[Union[Path, str]] = None):
        """
        Args:
            artifacts_dir: Build output directory (defaults to ./out)
        """
        self.artifacts_dir = get_artifacts_dir(artifacts_dir)
        self._cache: Dict[str, ContractArtifact] = {}

    def find(self, name: str) -> Path:
        """
        Locate the artifact file for a contract.

        Checks <dir>/<Name>.sol/<Name>.json (forge), then <dir>/<Name>.json,
        then any <Name>.json below the directory.

        Raises:
            ArtifactNotFoundError: If no file matches
        """
        for candidate in (
            self.artifacts_dir / f"{name}.sol" / f"{name}.json",
            self.artifacts_dir / f"{name}.json",
        ):
            if candidate.exists():
                return candidate

        matches = []
        if self.artifacts_dir.is_dir():
            matches = sorted(self.artifacts_dir.rglob(f"{name}.json"))
        if not matches:
            raise ArtifactNotFoundError(
                f"Artifact for '{name}' not found in {self.artifacts_dir}. "
                "Run the build first (forge build)."
            )
        return matches[0]

    def get(self, name: str) -> ContractArtifact:
        """Load (and memoize) the artifact for a contract name."""
        if name not in self._cache:
            self._cache[name] = parse_artifact(self.find(name), name)
        return self._cache[name]
