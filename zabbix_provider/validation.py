"""
Field validators

A validator is called with (value, key) and returns a list of error
messages; an empty list means the value is valid.
"""

from typing import Any, Callable, List

ValidateFunc = Callable[[Any, str], List[str]]


def string_is_not_whitespace(value: Any, key: str) -> List[str]:
    """Reject values that are not strings, empty, or whitespace only"""
    if not isinstance(value, str):
        return [f'expected type of {key} to be string']
    if not value.strip():
        return [f'expected {key!r} to not be an empty string or whitespace']
    return []


def int_between(minimum: int, maximum: int) -> ValidateFunc:
    """
    Build a validator accepting integers in [minimum, maximum]

    Example:
        validate = int_between(0, 3)
        validate(5, 'gui_access')
        # ['expected gui_access to be in the range (0 - 3), got 5']
    """
    def validate(value: Any, key: str) -> List[str]:
        if isinstance(value, bool) or not isinstance(value, int):
            return [f'expected type of {key} to be integer']
        if value < minimum or value > maximum:
            return [f'expected {key} to be in the range ({minimum} - {maximum}), got {value}']
        return []

    return validate
