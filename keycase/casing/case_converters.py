"""
keycase/casing/case_converters.py

WHAT THIS FILE IS FOR
---------------------
This module holds the four **string casing converters** used by the
key transformer and exposed on their own:

- to_camel_case   "hello_world" -> "helloWorld"
- to_snake_case   "helloWorld"  -> "hello_world"
- to_kebab_case   "helloWorld"  -> "hello-world"
- to_pascal_case  "hello_world" -> "HelloWorld"

It also owns the `TargetCase` identifiers and the lookup table that maps
each identifier to its converter.

REWRITE RULES
-------------
Every converter is a short chain of regex rewrites over the raw
characters. There is no notion of "words":

- No acronym detection ("XMLParser" does not round-trip cleanly)
- Character classes are ASCII (\\w == [A-Za-z0-9_], capitals == [A-Z])

Non-string or empty input is returned unchanged. No converter raises.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Walk dicts or lists (see key_transformer.py)
- Log or perform I/O
- Validate identifiers coming from callers (see resolve_case_converter)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, Dict, Union

from keycase.casing.errors import InvalidTargetCaseError


_CAMEL_BOUNDARY_RE = re.compile(r"[-_ ]\w", re.ASCII)
_FIRST_CHAR_RE = re.compile(r"^.")
_UPPER_RE = re.compile(r"[A-Z]")
_SNAKE_SEPARATORS_RE = re.compile(r"[- ]+")
_KEBAB_SEPARATORS_RE = re.compile(r"[ _]+")


class TargetCase(str, Enum):
    CAMEL = "camel"
    SNAKE = "snake"
    KEBAB = "kebab"
    PASCAL = "pascal"


CaseConverter = Callable[[Any], Any]


def to_camel_case(s: Any) -> Any:
    """
    Convert a string to camelCase.

    - Each delimiter (-, _, space) followed by a word character is dropped
      and that character is upper-cased
    - The first character of the result is lower-cased
    - Capitals not preceded by a delimiter are left alone
    """
    if not isinstance(s, str) or not s:
        return s

    out = _CAMEL_BOUNDARY_RE.sub(lambda m: m.group(0)[1].upper(), s)
    return _FIRST_CHAR_RE.sub(lambda m: m.group(0).lower(), out, count=1)


def to_snake_case(s: Any) -> Any:
    """
    Convert a string to snake_case.

    - Each capital becomes "_" + its lower-case form
    - Runs of hyphens/spaces collapse into one underscore
    - A single leading underscore is stripped
    """
    if not isinstance(s, str) or not s:
        return s

    out = _UPPER_RE.sub(lambda m: "_" + m.group(0).lower(), s)
    out = _SNAKE_SEPARATORS_RE.sub("_", out)
    return out[1:] if out.startswith("_") else out


def to_kebab_case(s: Any) -> Any:
    """Convert a string to kebab-case (mirror of to_snake_case with '-')."""
    if not isinstance(s, str) or not s:
        return s

    out = _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), s)
    out = _KEBAB_SEPARATORS_RE.sub("-", out)
    return out[1:] if out.startswith("-") else out


def to_pascal_case(s: Any) -> Any:
    """Convert a string to PascalCase: camelCase with the first char upper-cased."""
    if not isinstance(s, str) or not s:
        return s

    camel = to_camel_case(s)
    return camel[:1].upper() + camel[1:]


CASE_CONVERTERS: Dict[TargetCase, CaseConverter] = {
    TargetCase.CAMEL: to_camel_case,
    TargetCase.SNAKE: to_snake_case,
    TargetCase.KEBAB: to_kebab_case,
    TargetCase.PASCAL: to_pascal_case,
}


def supported_cases() -> list[str]:
    return [c.value for c in TargetCase]


def resolve_target_case(target_case: Union[TargetCase, str]) -> TargetCase:
    """
    Resolve a caller-supplied identifier to a `TargetCase`.

    Accepts the enum itself or its string value ("camel", "snake", ...).

    Raises:
        InvalidTargetCaseError: for anything outside the fixed set.
    """
    if isinstance(target_case, TargetCase):
        return target_case
    try:
        return TargetCase(target_case)
    except ValueError:
        raise InvalidTargetCaseError(target_case, supported_cases()) from None


def resolve_case_converter(target_case: Union[TargetCase, str]) -> CaseConverter:
    return CASE_CONVERTERS[resolve_target_case(target_case)]
