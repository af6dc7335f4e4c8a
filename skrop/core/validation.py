import math
from typing import Any, Sequence
from skrop.core.errors import InvalidParameterCountError, InvalidParameterTypeError


def check_arg_count(filter_name: str, args: Sequence[Any], *allowed: int) -> None:
    """Raises InvalidParameterCountError unless len(args) is one of `allowed`."""
    if len(args) not in allowed:
        expected = " or ".join(str(n) for n in allowed)
        raise InvalidParameterCountError(filter_name, len(args), expected)


def parse_int_arg(filter_name: str, args: Sequence[Any], position: int) -> int:
    """
    Coerces a positional argument to int.
    Accepts ints, integral floats and numeric strings; bools are rejected.
    """
    val = args[position]
    if isinstance(val, bool):
        raise InvalidParameterTypeError(filter_name, position, val, "an integer")
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            pass
    raise InvalidParameterTypeError(filter_name, position, val, "an integer")


def parse_float_arg(filter_name: str, args: Sequence[Any], position: int) -> float:
    val = args[position]
    if isinstance(val, bool):
        raise InvalidParameterTypeError(filter_name, position, val, "a number")
    try:
        res = float(val)
    except (TypeError, ValueError) as e:
        raise InvalidParameterTypeError(filter_name, position, val, "a number") from e
    if math.isnan(res):
        raise InvalidParameterTypeError(filter_name, position, val, "a number")
    return res


def parse_string_arg(filter_name: str, args: Sequence[Any], position: int) -> str:
    val = args[position]
    if not isinstance(val, str):
        raise InvalidParameterTypeError(filter_name, position, val, "a string")
    return val


def clamp(val: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, val))
