"""Identifier case conversion helpers."""

import re
from functools import lru_cache

# Every capital letter starts a new word
_SNAKE_CASE_RE_CAPITAL = re.compile(r"([A-Z])")

__all__ = ("snake_case",)


@lru_cache(maxsize=512)
def snake_case(string: str) -> str:
    """Convert a string to snake_case.

    An underscore is inserted before every capital letter, the result is
    lower-cased and a leading underscore is dropped, so ``SomeClassName``
    becomes ``some_class_name`` and ``thisIsASimpleField`` becomes
    ``this_is_a_simple_field``. Already snake-cased input is returned unchanged.

    Args:
        string: The string to convert.

    Returns:
        The snake_case version of the string.
    """
    return _SNAKE_CASE_RE_CAPITAL.sub(r"_\1", string).lower().lstrip("_")
