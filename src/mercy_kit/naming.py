"""Name transforms shared by the generator and the validator."""

from __future__ import annotations

import keyword
import re

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_NON_SLUG = re.compile(r"[^a-z0-9]")


def to_pascal_case(text: str) -> str:
    """``"cool bot-2"`` -> ``"CoolBot2"``; blank input gives ``""``."""
    words = _NON_ALNUM.sub(" ", text).split(" ")
    return "".join(word[0].upper() + word[1:].lower() for word in words if word)


def default_integration_id(name: str) -> str:
    """Lowercase *name* and replace every character outside ``[a-z0-9]`` with ``-``."""
    return _NON_SLUG.sub("-", name.lower())


def integration_class_name(name: str) -> str:
    """PascalCase class name for *name*, prefixed when not a valid identifier."""
    class_name = to_pascal_case(name)
    if not class_name.isidentifier() or keyword.iskeyword(class_name):
        class_name = f"Integration{class_name}"
    return class_name
