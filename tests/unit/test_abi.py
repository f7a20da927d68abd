"""Unit tests for constructor argument encoding."""

import pytest

from token_deploy.abi import (
    constructor_inputs,
    encode_constructor_args,
    normalize_constructor_args,
)
from token_deploy.constants import INITIAL_SUPPLY
from token_deploy.exceptions import ConfigurationError

from conftest import TOKEN_ABI


class TestConstructorInputs:
    def test_finds_constructor(self):
        inputs = constructor_inputs(TOKEN_ABI)
        assert [i["name"] for i in inputs] == ["initialSupply"]

    def test_no_constructor_means_no_inputs(self):
        assert constructor_inputs([{"type": "function", "name": "f", "inputs": []}]) == []


class TestEncodeConstructorArgs:
    """Test the encode_constructor_args function."""

    def test_encodes_initial_supply_as_uint256_word(self):
        encoded = encode_constructor_args(TOKEN_ABI, [INITIAL_SUPPLY])

        assert encoded == INITIAL_SUPPLY.to_bytes(32, "big")

    def test_accepts_tuple_arguments(self):
        assert encode_constructor_args(TOKEN_ABI, (1,)) == (1).to_bytes(32, "big")

    def test_no_constructor_encodes_to_empty(self):
        assert encode_constructor_args([], []) == b""

    def test_wrong_arity_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="expects 1 argument"):
            encode_constructor_args(TOKEN_ABI, [])

    def test_tuple_types_are_expanded(self):
        """Test that tuple inputs encode as their component types."""
        abi = [
            {
                "type": "constructor",
                "inputs": [
                    {
                        "name": "cfg",
                        "type": "tuple",
                        "components": [
                            {"name": "a", "type": "uint256"},
                            {"name": "b", "type": "bool"},
                        ],
                    }
                ],
            }
        ]

        encoded = encode_constructor_args(abi, [(5, True)])

        assert encoded == (5).to_bytes(32, "big") + (1).to_bytes(32, "big")

    def test_decimal_string_supply_encodes_like_int(self):
        """Test that args read back from a deployment record still encode."""
        encoded = encode_constructor_args(TOKEN_ABI, [str(INITIAL_SUPPLY)])

        assert encoded == INITIAL_SUPPLY.to_bytes(32, "big")

    def test_hex_string_supply_encodes_like_int(self):
        assert encode_constructor_args(TOKEN_ABI, ["0x10"]) == (16).to_bytes(32, "big")

    def test_non_numeric_string_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="not an integer"):
            encode_constructor_args(TOKEN_ABI, ["lots"])

    def test_out_of_range_value_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Cannot encode"):
            encode_constructor_args(TOKEN_ABI, [-1])


class TestNormalizeConstructorArgs:
    def test_integer_strings_become_ints(self):
        assert normalize_constructor_args(TOKEN_ABI, ["1000"]) == [1000]

    def test_non_integer_inputs_pass_through(self):
        abi = [
            {
                "type": "constructor",
                "inputs": [
                    {"name": "name", "type": "string"},
                    {"name": "supply", "type": "uint256"},
                ],
            }
        ]

        assert normalize_constructor_args(abi, ["100", "100"]) == ["100", 100]
