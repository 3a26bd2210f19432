"""Ordered execution of dependent contract deployments."""

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from .abi import encode_constructor_args
from .artifacts import ArtifactRepository
from .constants import ADDRESS_KEY_SUFFIX, TX_HASH_KEY_SUFFIX
from .exceptions import DeployerError, MissingRequiredValueError, StepOrderError
from .linker import ensure_linked, library_placeholder, link
from .store import ConfigStore
from .types import (
    ArgKind,
    ContractArtifact,
    DeploymentPayload,
    DeploymentResult,
    DeploymentStep,
    StepState,
    SubmissionReceipt,
)

logger = logging.getLogger(__name__)


class Submitter(Protocol):
    def submit(self, payload: DeploymentPayload) -> SubmissionReceipt: ...


def address_key(step_name: str) -> str:
    """Record key holding the address produced by a step."""
    return f"{step_name}{ADDRESS_KEY_SUFFIX}"


def tx_hash_key(step_name: str) -> str:
    return f"{step_name}{TX_HASH_KEY_SUFFIX}"


def validate_steps(steps: Sequence[DeploymentStep]) -> None:
    """
    Check that every dependency points at an earlier step.

    Raises:
        StepOrderError: On duplicate names, forward or self references,
                        or references to unknown steps
    """
    seen: List[str] = []
    for step in steps:
        if step.name in seen:
            raise StepOrderError(f"Duplicate step name '{step.name}'")

        dependencies = list(step.libraries)
        dependencies += [arg.value for arg in step.args if arg.kind == ArgKind.STEP]
        for dependency in dependencies:
            if dependency not in seen:
                raise StepOrderError(
                    f"Step '{step.name}' depends on '{dependency}', "
                    "which is not an earlier step"
                )
        seen.append(step.name)


class DeploymentSequencer:
    """Deploys a chain of contracts, skipping steps recorded by a prior run."""

    def __init__(
        self,
        steps: Sequence[DeploymentStep],
        artifacts: ArtifactRepository,
        submitter: Submitter,
        store: Optional[ConfigStore] = None,
    ):
        """
        Args:
            steps: Deployment steps in execution order
            artifacts: Source of compiled contracts
            submitter: Sends deployment transactions
            store: If given, each confirmed step is persisted immediately

        Raises:
            StepOrderError: If the steps are not a valid dependency order
        """
        validate_steps(steps)
        self.steps = list(steps)
        self.artifacts = artifacts
        self.submitter = submitter
        self.store = store
        self.states: Dict[str, StepState] = {step.name: StepState.PENDING for step in self.steps}
        # Encoded constructor arguments of steps deployed during this run
        self.constructor_args: Dict[str, bytes] = {}

    def _link(self, step: DeploymentStep, artifact: ContractArtifact, addresses: Dict[str, str]) -> str:
        bytecode = artifact.bytecode
        placeholders = []
        for library_step in step.libraries:
            library_name = self._step(library_step).artifact
            fully_qualified_name = artifact.link_references.get(library_name)
            if fully_qualified_name is None:
                # Bytecode never references this library; nothing to substitute
                logger.debug("%s has no link reference to %s", artifact.name, library_name)
                continue
            placeholder = library_placeholder(fully_qualified_name)
            bytecode = link(bytecode, placeholder, addresses[library_step])
            placeholders.append(placeholder)
            logger.info("  linked %s at %s", fully_qualified_name, addresses[library_step])

        ensure_linked(bytecode, placeholders)
        return bytecode

    def _step(self, name: str) -> DeploymentStep:
        return next(step for step in self.steps if step.name == name)

    def _argument_values(
        self, step: DeploymentStep, record: Dict[str, str], addresses: Dict[str, str]
    ) -> List[str]:
        values = []
        for arg in step.args:
            match arg.kind:
                case ArgKind.LITERAL:
                    values.append(arg.value)
                case ArgKind.CONFIG:
                    if not record.get(arg.value):
                        raise MissingRequiredValueError([arg.value])
                    values.append(record[arg.value])
                case ArgKind.STEP:
                    values.append(addresses[arg.value])
        return values

    def _deploy(
        self, step: DeploymentStep, record: Dict[str, str], addresses: Dict[str, str]
    ) -> DeploymentResult:
        artifact = self.artifacts.get(step.artifact)

        self.states[step.name] = StepState.LINKING
        bytecode = self._link(step, artifact, addresses)
        encoded_args = encode_constructor_args(
            artifact.abi, self._argument_values(step, record, addresses)
        )
        self.constructor_args[step.name] = encoded_args

        self.states[step.name] = StepState.SUBMITTING
        logger.info("Deploying %s contract...", artifact.name)
        receipt = self.submitter.submit(DeploymentPayload(bytecode, encoded_args))
        return DeploymentResult(step.name, receipt.address, receipt.tx_hash)

    def _record_result(self, result: DeploymentResult, record: Dict[str, str]) -> None:
        updates = {address_key(result.step): result.address}
        if result.tx_hash:
            updates[tx_hash_key(result.step)] = result.tx_hash
        record.update(updates)
        if self.store is not None:
            self.store.save(updates)

    def run(self, record: Dict[str, str]) -> Dict[str, DeploymentResult]:
        """
        Execute all steps in order.

        Args:
            record: Configuration record; updated with each step's address

        Returns:
            Mapping of step name to its DeploymentResult

        Raises:
            DeployerError: The error of the first failing step, with .step set.
                           Later steps are not attempted.
        """
        results: Dict[str, DeploymentResult] = {}
        addresses: Dict[str, str] = {}

        for step in self.steps:
            recorded = record.get(address_key(step.name))
            if recorded:
                result = DeploymentResult(
                    step.name, recorded, record.get(tx_hash_key(step.name)), reused=True
                )
                logger.info("Skipping %s: already deployed at %s", step.name, recorded)
            else:
                try:
                    result = self._deploy(step, record, addresses)
                except DeployerError as e:
                    self.states[step.name] = StepState.FAILED
                    e.step = step.name
                    raise
                self._record_result(result, record)
                logger.info("Deployed %s at %s", step.name, result.address)

            self.states[step.name] = StepState.CONFIRMED
            addresses[step.name] = result.address
            results[step.name] = result

        return results
