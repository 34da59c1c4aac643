"""Normalization of item identifiers.

JSON Feed says an item ``id`` is a string, but publishers routinely send
integers or floats. Readers are expected to treat whatever arrives as text.
"""

import math
from typing import Any


class IdentifierError(ValueError):
    """The value cannot be used as an item identifier."""


def coerce_identifier(value: Any) -> str:
    """Turn a JSON scalar into the canonical identifier string.

    Strings are used verbatim. Integers and integer-valued floats become
    plain decimal text (``42`` and ``42.0`` both give ``"42"``). Any other
    float uses Python's shortest round-trip repr (``4.5`` gives ``"4.5"``).

    Raises:
        IdentifierError: For booleans, null, objects, arrays and
            non-finite numbers
    """
    if isinstance(value, str):
        return value
    # bool is an int subclass but is not a valid identifier
    if isinstance(value, bool):
        raise IdentifierError("item id must be a string or a number, got a boolean")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise IdentifierError(f"item id must be a finite number, got {value!r}")
        if value.is_integer():
            return str(int(value))
        return repr(value)
    kind = "null" if value is None else type(value).__name__
    raise IdentifierError(f"item id must be a string or a number, got {kind}")
