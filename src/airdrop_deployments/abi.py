"""ABI helpers for constructor and call data encoding."""

from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from eth_utils import function_signature_to_4byte_selector, is_address, to_checksum_address

from .exceptions import ArgumentError


def constructor_inputs(abi: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Get the declared constructor inputs.

    Args:
        abi: Contract ABI

    Returns:
        Ordered list of input definitions; empty if there is no constructor
    """
    for item in abi:
        if item.get("type") == "constructor":
            return item.get("inputs", [])
    return []


def coerce_argument(abi_type: str, value: str) -> Any:
    """
    Convert a configuration string to the Python value eth_abi expects.

    Args:
        abi_type: Solidity type, e.g. "uint256", "address", "string"
        value: String value from the configuration record or a literal

    Returns:
        Value suitable for eth_abi.encode

    Raises:
        ArgumentError: If the value doesn't fit the type or the type is unsupported
    """
    if abi_type.endswith("]"):
        raise ArgumentError(f"Unsupported constructor argument type: {abi_type}")

    try:
        if abi_type == "address":
            if not is_address(value):
                raise ArgumentError(f"Not a valid address: {value!r}")
            return to_checksum_address(value)
        if abi_type.startswith(("uint", "int")):
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        if abi_type == "bool":
            return value.strip().lower() in ("1", "true", "yes")
        if abi_type == "string":
            return value
        if abi_type.startswith("bytes"):
            return bytes.fromhex(value[2:] if value.lower().startswith("0x") else value)
    except ValueError as e:
        raise ArgumentError(f"Cannot convert {value!r} to {abi_type}: {e}") from e

    raise ArgumentError(f"Unsupported constructor argument type: {abi_type}")


def encode_arguments(inputs: List[Dict[str, Any]], values: Sequence[str]) -> bytes:
    """
    ABI-encode string values against declared inputs.

    Raises:
        ArgumentError: If the number of values doesn't match the inputs, or a
                       value is out of range for its type
    """
    if len(inputs) != len(values):
        raise ArgumentError(f"Expected {len(inputs)} arguments, got {len(values)}")

    types = [item["type"] for item in inputs]
    if not types:
        return b""
    coerced = [coerce_argument(t, v) for t, v in zip(types, values)]
    try:
        return encode(types, coerced)
    except EncodingError as e:
        # e.g. negative or oversized integers
        raise ArgumentError(f"Cannot encode arguments {list(values)!r} as {types}: {e}") from e


def encode_constructor_args(abi: List[Dict[str, Any]], values: Sequence[str]) -> bytes:
    """Encode constructor arguments in the order the ABI declares them."""
    return encode_arguments(constructor_inputs(abi), values)


def encode_function_call(signature: str, inputs: List[Dict[str, Any]], values: Sequence[str]) -> str:
    """
    Build call data for a function.

    Args:
        signature: Canonical signature, e.g. "approve(address,uint256)"
        inputs: Input definitions matching the signature
        values: String values for the inputs

    Returns:
        0x-prefixed call data (selector + encoded arguments)
    """
    selector = function_signature_to_4byte_selector(signature)
    return "0x" + (selector + encode_arguments(inputs, values)).hex()
