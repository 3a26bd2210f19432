"""Unit tests for ABI helpers."""

import pytest
from eth_abi import decode
from eth_utils import to_checksum_address

from airdrop_deployments.abi import (
    coerce_argument,
    constructor_inputs,
    encode_constructor_args,
    encode_function_call,
)
from airdrop_deployments.exceptions import ArgumentError

ADDRESS = "0x" + "ab" * 20


class TestConstructorInputs:
    """Test the constructor_inputs function."""

    def test_returns_declared_inputs(self):
        abi = [
            {"type": "function", "name": "claim", "inputs": [{"name": "x", "type": "uint256"}]},
            {"type": "constructor", "inputs": [{"name": "a", "type": "address"}]},
        ]
        assert constructor_inputs(abi) == [{"name": "a", "type": "address"}]

    def test_empty_without_constructor(self):
        assert constructor_inputs([{"type": "function", "name": "claim", "inputs": []}]) == []


class TestCoerceArgument:
    """Test conversion of configuration strings to ABI values."""

    def test_address_is_checksummed(self):
        assert coerce_argument("address", ADDRESS) == to_checksum_address(ADDRESS)

    def test_decimal_and_hex_integers(self):
        assert coerce_argument("uint256", "100") == 100
        assert coerce_argument("uint256", "0x64") == 100
        assert coerce_argument("int8", "-1") == -1

    def test_bool(self):
        assert coerce_argument("bool", "true") is True
        assert coerce_argument("bool", "0") is False

    def test_string_passes_through(self):
        assert coerce_argument("string", "wid_airdrop") == "wid_airdrop"

    def test_bytes(self):
        assert coerce_argument("bytes32", "0x" + "00" * 32) == b"\x00" * 32

    @pytest.mark.parametrize(
        "abi_type,value",
        [("address", "0x1234"), ("uint256", "lots"), ("bytes", "0xzz"), ("tuple", "x"), ("uint256[]", "1")],
    )
    def test_invalid_values_raise_argument_error(self, abi_type: str, value: str):
        with pytest.raises(ArgumentError):
            coerce_argument(abi_type, value)


class TestEncoding:
    """Test constructor and call data encoding."""

    def test_encodes_constructor_arguments_in_order(self):
        abi = [
            {
                "type": "constructor",
                "inputs": [
                    {"name": "router", "type": "address"},
                    {"name": "groupId", "type": "uint256"},
                    {"name": "actionId", "type": "string"},
                ],
            }
        ]

        encoded = encode_constructor_args(abi, [ADDRESS, "1", "wid"])

        router, group_id, action_id = decode(["address", "uint256", "string"], encoded)
        assert router.lower() == ADDRESS
        assert group_id == 1
        assert action_id == "wid"

    def test_no_constructor_encodes_to_nothing(self):
        assert encode_constructor_args([], []) == b""

    def test_wrong_argument_count(self):
        abi = [{"type": "constructor", "inputs": [{"name": "a", "type": "address"}]}]

        with pytest.raises(ArgumentError):
            encode_constructor_args(abi, [])

    @pytest.mark.parametrize("value", ["-1", str(2**256)])
    def test_out_of_range_integer_raises_argument_error(self, value: str):
        abi = [{"type": "constructor", "inputs": [{"name": "amount", "type": "uint256"}]}]

        with pytest.raises(ArgumentError):
            encode_constructor_args(abi, [value])

    def test_function_call_starts_with_selector(self):
        data = encode_function_call(
            "approve(address,uint256)",
            [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
            [ADDRESS, "100"],
        )

        # keccak256("approve(address,uint256)")[:4]
        assert data.startswith("0x095ea7b3")
        assert len(data) == 2 + 8 + 64 * 2
