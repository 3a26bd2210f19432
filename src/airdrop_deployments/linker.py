"""Library linking for compiled bytecode."""

import re
from typing import Iterable, Mapping, Set

from eth_utils import is_hex_address, keccak, remove_0x_prefix

from .constants import PLACEHOLDER_HASH_LENGTH, PLACEHOLDER_REGEX
from .exceptions import LinkError

_PLACEHOLDER_PATTERN = re.compile(PLACEHOLDER_REGEX)


def library_placeholder(fully_qualified_name: str) -> str:
    """
    Compute the placeholder solc emits for a library.

    Args:
        fully_qualified_name: "<source path>:<library name>", e.g. "src/Lib.sol:Lib"

    Returns:
        40-character token "__$<34 hex digits>$__"
    """
    digest = keccak(text=fully_qualified_name).hex()
    return f"__${remove_0x_prefix(digest)[:PLACEHOLDER_HASH_LENGTH]}$__"


def find_placeholders(bytecode: str) -> Set[str]:
    """Return the distinct solc placeholders present in bytecode."""
    return set(_PLACEHOLDER_PATTERN.findall(bytecode))


def _render_address(address: str, width: int) -> str:
    # Zero-padded on the left when wider, low-order digits kept when narrower
    digits = remove_0x_prefix(address).lower()
    return digits.rjust(width, "0")[-width:]


def link(bytecode: str, placeholder: str, address: str) -> str:
    """
    Replace every occurrence of a placeholder with a library address.

    Args:
        bytecode: Hex bytecode, with or without 0x prefix
        placeholder: Literal placeholder token
        address: Deployed library address (0x-prefixed hex)

    Returns:
        Bytecode with the placeholder substituted; everything else unchanged.
        Other placeholders are left in place so libraries can be linked one
        at a time; use link_libraries or ensure_linked to check the result.

    Raises:
        LinkError: If address is not a 20-byte hex address or placeholder is empty
    """
    if not placeholder:
        raise LinkError([], "Placeholder must not be empty")
    if not is_hex_address(address):
        raise LinkError([placeholder], f"Not a valid address for {placeholder}: {address!r}")

    return bytecode.replace(placeholder, _render_address(address, len(placeholder)))


def ensure_linked(bytecode: str, expected: Iterable[str] = ()) -> None:
    """
    Check that no placeholder is left in bytecode.

    Args:
        bytecode: Bytecode about to be deployed
        expected: Additional literal placeholders that must not remain

    Raises:
        LinkError: If any solc placeholder or expected placeholder remains
    """
    remaining = find_placeholders(bytecode)
    remaining.update(p for p in expected if p and p in bytecode)
    if remaining:
        raise LinkError(remaining)


def link_libraries(bytecode: str, libraries: Mapping[str, str]) -> str:
    """
    Link several libraries and verify the result.

    Args:
        bytecode: Hex bytecode with placeholders
        libraries: placeholder -> address, applied in mapping order

    Returns:
        Fully linked bytecode

    Raises:
        LinkError: If a placeholder remains after all substitutions
    """
    for placeholder, address in libraries.items():
        bytecode = link(bytecode, placeholder, address)
    ensure_linked(bytecode, libraries.keys())
    return bytecode
