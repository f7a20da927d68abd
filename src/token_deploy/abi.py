"""Constructor argument encoding for token-deploy."""

import re
from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError

from .exceptions import ConfigurationError

_INTEGER_TYPE = re.compile(r"^u?int\d*$")


def _abi_type(param: Dict[str, Any]) -> str:
    """Canonical type string for an ABI input, expanding tuples."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_abi_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def constructor_inputs(abi: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Return the constructor inputs from a contract ABI (empty if no constructor)."""
    for item in abi:
        if item.get("type") == "constructor":
            return item.get("inputs", [])
    return []


def normalize_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> List[Any]:
    """
    Convert stored constructor arguments back to encodable values.

    hardhat-deploy records big numbers as decimal (or hex) strings, so
    integer inputs given as strings are turned back into ints. Other
    values pass through unchanged.
    """
    inputs = constructor_inputs(abi)
    normalized = []
    for index, value in enumerate(args):
        abi_type = inputs[index]["type"] if index < len(inputs) else None
        if abi_type and _INTEGER_TYPE.match(abi_type) and isinstance(value, str):
            try:
                value = int(value, 0)
            except ValueError as e:
                raise ConfigurationError(
                    f"Constructor argument {index} is not an integer: {value!r}"
                ) from e
        normalized.append(value)
    return normalized


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> bytes:
    """
    ABI-encode constructor arguments.

    Args:
        abi: Full contract ABI
        args: Constructor arguments in declaration order; integers may be
              given as decimal or 0x-prefixed strings

    Returns:
        Encoded arguments, to be appended to the creation bytecode

    Raises:
        ConfigurationError: If the arguments do not fit the constructor
    """
    inputs = constructor_inputs(abi)
    if len(inputs) != len(args):
        raise ConfigurationError(
            f"Constructor expects {len(inputs)} argument(s), got {len(args)}"
        )

    if not inputs:
        return b""

    try:
        return encode([_abi_type(i) for i in inputs], normalize_constructor_args(abi, args))
    except EncodingError as e:
        raise ConfigurationError(f"Cannot encode constructor arguments: {e}") from e
