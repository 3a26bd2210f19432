"""Command flows: resolve parameters, persist them, run a deployment plan."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Union

from .abi import encode_function_call
from .artifacts import ArtifactRepository
from .build import build_contracts, verify_contract
from .constants import ERC20_APPROVE_SIGNATURE
from .exceptions import BuildError
from .plans import AIRDROP_STEPS, DeploymentPlan
from .resolver import (
    Prompt,
    ValueSource,
    require,
    require_addresses,
    resolve,
    resolve_airdrop_parameters,
    resolve_allowance_parameters,
    resolve_connection_parameters,
    resolve_router_address,
    validate_connection,
)
from .sequencer import DeploymentSequencer, Submitter, address_key
from .store import ConfigStore, Record
from .submitter import TransactionSubmitter
from .types import ConnectionSettings, DeploymentResult

logger = logging.getLogger(__name__)

_APPROVE_INPUTS = [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}]


@dataclass
class CommandOptions:
    """Settings shared by every command."""

    prompt: Prompt = input
    artifacts_dir: Optional[Union[Path, str]] = None
    project_dir: Optional[Union[Path, str]] = None
    build: bool = False
    verify: bool = False
    receipt_timeout: Optional[float] = None


def load_configuration(store: ConfigStore, use_config: Optional[bool], prompt: Prompt = input) -> Record:
    """
    Load the cached configuration if the operator wants it.

    Args:
        store: Configuration store
        use_config: True/False to load or skip; None to ask the operator
        prompt: Line reader; None answers the question with the default (yes)

    Returns:
        The cached record, or an empty one
    """
    if use_config is None:
        answer = ""
        if prompt is not None:
            answer = prompt("Do you want to load configuration from prior runs? [Y/n]: ")
        use_config = answer.strip().lower() in ("", "y", "yes")

    if not use_config:
        logger.info("Configuration not loaded")
        return {}

    if not store.path.exists():
        logger.warning("Configuration load requested but no configuration available: continuing")
        return {}

    record = store.load()
    if record:
        logger.info("Configuration loaded")
    return record


def _make_submitter(settings: ConnectionSettings, options: CommandOptions) -> TransactionSubmitter:
    kwargs = {}
    if options.receipt_timeout is not None:
        kwargs["receipt_timeout"] = options.receipt_timeout
    return TransactionSubmitter.from_settings(settings, **kwargs)


def build(options: CommandOptions) -> str:
    """
    Compile the contracts.

    Returns:
        Build tool output

    Raises:
        BuildError: If the build fails
    """
    logger.info("Building contracts...")
    result = build_contracts(options.project_dir)
    if not result.success:
        raise BuildError(f"Build failed:\n{result.output}")
    logger.info("Build finished")
    return result.output


def _verify(
    sequencer: DeploymentSequencer,
    results: Dict[str, DeploymentResult],
    settings: ConnectionSettings,
    options: CommandOptions,
) -> None:
    if not settings.etherscan_api_key:
        logger.warning("No Etherscan API key configured: skipping verification")
        return

    for step in sequencer.steps:
        result = results[step.name]
        if result.reused:
            continue
        artifact = sequencer.artifacts.get(step.artifact)
        contract = f"{artifact.source_path}:{artifact.name}" if artifact.source_path else artifact.name
        outcome = verify_contract(
            result.address,
            contract,
            settings.etherscan_api_key,
            settings.rpc_url,
            sequencer.constructor_args.get(step.name, b""),
            options.project_dir,
        )
        if outcome.success:
            logger.info("Verified %s at %s", artifact.name, result.address)
        else:
            logger.warning("Verification of %s failed:\n%s", artifact.name, outcome.output)


def deploy(
    plan: DeploymentPlan,
    record: Record,
    store: ConfigStore,
    options: CommandOptions,
    submitter: Optional[Submitter] = None,
) -> Dict[str, DeploymentResult]:
    """
    Resolve the parameters a plan needs and run it.

    Args:
        plan: Deployment plan to execute
        record: Configuration record (updated in place)
        store: Where resolved values and step results are persisted
        options: Command settings
        submitter: Transaction submitter; built from the record when None

    Returns:
        Mapping of step name to DeploymentResult

    Raises:
        MissingRequiredValueError: If required configuration is missing
        DeployerError: If a step fails (with .step set)
    """
    prompt = options.prompt

    resolve_connection_parameters(record, prompt)
    if not plan.uses_router_mock:
        resolve_router_address(record, prompt)
    store.save(record)

    resolve_airdrop_parameters(record, prompt)
    store.save(record)

    settings = validate_connection(record)
    require(record, plan.config_keys)

    if options.build:
        build(options)

    sequencer = DeploymentSequencer(
        plan.steps,
        ArtifactRepository(options.artifacts_dir),
        submitter or _make_submitter(settings, options),
        store,
    )
    results = sequencer.run(record)
    store.save(record)

    if options.verify:
        _verify(sequencer, results, settings, options)
    return results


def _default_spender(record: Record) -> Optional[str]:
    for step_name in AIRDROP_STEPS:
        if record.get(address_key(step_name)):
            return record[address_key(step_name)]
    return None


def set_allowance(
    record: Record,
    store: ConfigStore,
    options: CommandOptions,
    submitter: Optional[TransactionSubmitter] = None,
) -> str:
    """
    Approve the airdrop contract to spend the holder's tokens.

    Sends ERC20 approve(airdropAddress, airdropAmount) to erc20Address,
    signed with the configured private key.

    Returns:
        Transaction hash
    """
    prompt = options.prompt

    resolve_connection_parameters(record, prompt)
    resolve_allowance_parameters(record, prompt)
    spender_source = replace(ValueSource.for_key("airdropAddress"), default=_default_spender(record))
    resolve(record, "airdropAddress", spender_source, prompt)
    store.save(record)

    settings = validate_connection(record)
    require(record, ["erc20Address", "holderAddress", "airdropAmount", "airdropAddress"])
    require_addresses(record, ["erc20Address", "holderAddress", "airdropAddress"])

    submitter = submitter or _make_submitter(settings, options)
    if submitter.address.lower() != record["holderAddress"].lower():
        logger.warning(
            "Signer %s is not the holder %s: the allowance will be set for the signer",
            submitter.address,
            record["holderAddress"],
        )

    logger.info("Setting allowance...")
    data = encode_function_call(
        ERC20_APPROVE_SIGNATURE,
        _APPROVE_INPUTS,
        [record["airdropAddress"], record["airdropAmount"]],
    )
    tx_hash = submitter.transact(record["erc20Address"], data)
    logger.info("Allowance set for %s!", record["holderAddress"])
    return tx_hash
