"""Configuration value resolution for airdrop-deployments library."""

import os
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from eth_utils import is_address, is_hex, remove_0x_prefix

from .constants import CONFIG_SOURCES, PRIVATE_KEY_HEX_LENGTH
from .exceptions import InvalidConfigurationError, MissingRequiredValueError
from .types import ConnectionSettings

# Reads one line from the operator; None means no one is there to answer
Prompt = Optional[Callable[[str], str]]


@dataclass(frozen=True)
class ValueSource:
    """Candidate sources for one configuration key, lowest precedence last."""

    env_vars: Tuple[str, ...] = ()
    prompt_text: Optional[str] = None
    default: Optional[str] = None

    @classmethod
    def for_key(cls, key: str) -> "ValueSource":
        """Build the source declared for a key in CONFIG_SOURCES."""
        spec = CONFIG_SOURCES[key]
        return cls(
            env_vars=tuple(spec.get("env", ())),
            prompt_text=spec.get("prompt"),
            default=spec.get("default"),
        )


def resolve(
    record: Dict[str, str],
    key: str,
    source: Optional[ValueSource] = None,
    prompt: Prompt = input,
) -> str:
    """
    Resolve a configuration value and store it in the record.

    Precedence (first non-empty wins):
    1. record[key]
    2. Environment variables in source.env_vars, in order
    3. Interactive prompt (skipped when prompt is None)
    4. source.default, when the prompt was left blank or skipped

    Args:
        record: Configuration record (updated in place, not persisted)
        key: Configuration key
        source: Where to look; defaults to the CONFIG_SOURCES entry for key
        prompt: Line reader used for interactive input

    Returns:
        The resolved value, possibly empty
    """
    existing = record.get(key)
    if existing:
        return existing

    if source is None:
        source = ValueSource.for_key(key)

    value = ""
    for env_var in source.env_vars:
        value = os.environ.get(env_var, "")
        if value:
            break

    if not value and prompt is not None and source.prompt_text is not None:
        text = source.prompt_text
        if source.default:
            text = f"{text}({source.default}) "
        value = prompt(text).strip()

    if not value and source.default:
        value = source.default

    record[key] = value
    return value


def resolve_all(
    record: Dict[str, str], keys: Iterable[str], prompt: Prompt = input
) -> Dict[str, str]:
    """Resolve several keys in order; returns key -> value."""
    return {key: resolve(record, key, prompt=prompt) for key in keys}


def require(record: Dict[str, str], keys: Iterable[str]) -> None:
    """
    Check that keys hold non-empty values.

    Raises:
        MissingRequiredValueError: Listing every key that is still empty
    """
    missing = [key for key in keys if not record.get(key)]
    if missing:
        raise MissingRequiredValueError(missing)


def resolve_connection_parameters(record: Dict[str, str], prompt: Prompt = input) -> None:
    """Private key, RPC URL and Etherscan key."""
    resolve_all(record, ["privateKey", "ethereumRpcUrl", "ethereumEtherscanApiKey"], prompt)


def resolve_router_address(record: Dict[str, str], prompt: Prompt = input) -> None:
    resolve(record, "worldIDRouterAddress", prompt=prompt)


def resolve_airdrop_parameters(record: Dict[str, str], prompt: Prompt = input) -> None:
    """Parameters of a single-token airdrop deployment."""
    resolve_all(
        record,
        ["groupId", "actionId", "erc20Address", "holderAddress", "airdropAmount"],
        prompt,
    )


def resolve_allowance_parameters(record: Dict[str, str], prompt: Prompt = input) -> None:
    resolve_all(record, ["erc20Address", "holderAddress", "airdropAmount"], prompt)


def validate_connection(record: Dict[str, str]) -> ConnectionSettings:
    """
    Check the connection parameters needed to send transactions.

    Args:
        record: Resolved configuration record

    Returns:
        ConnectionSettings built from the record

    Raises:
        MissingRequiredValueError: If the private key or RPC URL is empty
        InvalidConfigurationError: If the private key is not 32 hex-encoded bytes
    """
    require(record, ["privateKey", "ethereumRpcUrl"])
    private_key = record["privateKey"]
    if not is_hex(private_key) or len(remove_0x_prefix(private_key)) != PRIVATE_KEY_HEX_LENGTH:
        # Never echo the key itself
        raise InvalidConfigurationError(
            ["privateKey"], "Invalid configuration: privateKey must be 32 hex-encoded bytes"
        )
    return ConnectionSettings(
        rpc_url=record["ethereumRpcUrl"],
        private_key=record["privateKey"],
        etherscan_api_key=record.get("ethereumEtherscanApiKey") or None,
    )


def require_addresses(record: Dict[str, str], keys: Iterable[str]) -> None:
    """
    Check that keys hold valid 20-byte hex addresses.

    Raises:
        InvalidConfigurationError: Listing every key with a malformed address
    """
    invalid = [key for key in keys if not is_address(record.get(key, ""))]
    if invalid:
        raise InvalidConfigurationError(invalid, f"Not a valid address: {', '.join(invalid)}")
