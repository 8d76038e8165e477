"""
keycase/casing/key_transformer.py

WHAT THIS FILE IS FOR
---------------------
This module provides the **recursive key transformer**: it rebuilds an
arbitrary JSON-like value with every dict key rewritten into a target
case (camel / snake / kebab / pascal), leaving structure and leaf values
untouched.

CORE FUNCTIONALITY
------------------
- Resolve the target case ONCE, before any traversal
- Recursively traverse nested dicts, lists and plain tuples
- Return primitives and opaque objects (datetime, sets, ...) by reference
- Never mutate the input; every container in the output is new

KEY COLLISIONS
--------------
Two different keys can convert to the same key:

    {"a-b": 1, "a_b": 2}  --camel-->  {"aB": 2}

The later key (input iteration order) silently wins. This is kept on
purpose so that output is predictable; callers that need to know about it
can audit the input with `find_key_collisions()` first.

PRESERVE-CONTAINER MECHANISM
----------------------------
Some fields are *free-form containers* whose inner keys must stay exactly
as they are (e.g. section IDs, rubric names). For keys listed in
`preserve_container_keys`:

- The container key itself IS converted
- Its value is inserted unchanged (no recursion into it)

Keys may be listed in either their original or their converted form.

DEPTH GUARD
-----------
`max_depth` is opt-in. When set, a container nested deeper than
`max_depth` levels raises NestingDepthExceededError. The top-level value
is depth 0. Leaves never count towards depth.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Perform request validation beyond the target case
- Modify values or business semantics
- Perform I/O or logging
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set, Union

from keycase.casing.case_converters import CaseConverter, TargetCase, resolve_case_converter
from keycase.casing.errors import NestingDepthExceededError


def convert_keys(
    obj: Any,
    target_case: Union[TargetCase, str],
    *,
    preserve_container_keys: Optional[Iterable[str]] = None,
    max_depth: Optional[int] = None,
) -> Any:
    """
    Recursively convert dict keys to `target_case`.

    Args:
        obj:
            Any JSON-like object (dict / list / tuple / primitive)
        target_case:
            TargetCase or one of "camel", "snake", "kebab", "pascal"
        preserve_container_keys:
            Keys whose *values* are copied verbatim (the key itself is
            still converted)
        max_depth:
            Optional nesting limit; None means unlimited

    Returns:
        New object with converted keys (input is not mutated)

    Raises:
        InvalidTargetCaseError: target_case is not a supported identifier.
            Raised before any traversal.
        NestingDepthExceededError: only when max_depth is given.
    """
    converter = resolve_case_converter(target_case)
    preserve = set(preserve_container_keys or [])
    return _convert(obj, converter, preserve, max_depth, 0)


def _convert(
    obj: Any,
    converter: CaseConverter,
    preserve: Set[str],
    max_depth: Optional[int],
    depth: int,
) -> Any:
    # ---------- list / tuple ----------
    if isinstance(obj, list) or type(obj) is tuple:
        _check_depth(max_depth, depth)
        items = [_convert(x, converter, preserve, max_depth, depth + 1) for x in obj]
        return items if isinstance(obj, list) else tuple(items)

    # ---------- dict ----------
    if isinstance(obj, dict):
        _check_depth(max_depth, depth)
        out: Dict[Any, Any] = {}

        for key, value in obj.items():
            new_key = converter(key)

            if key in preserve or new_key in preserve:
                out[new_key] = value
            else:
                out[new_key] = _convert(value, converter, preserve, max_depth, depth + 1)

        return out

    # ---------- primitive / opaque ----------
    return obj


def _check_depth(max_depth: Optional[int], depth: int) -> None:
    if max_depth is not None and depth > max_depth:
        raise NestingDepthExceededError(max_depth)


def find_key_collisions(
    obj: Any,
    target_case: Union[TargetCase, str],
    *,
    preserve_container_keys: Optional[Iterable[str]] = None,
) -> Dict[str, List[Any]]:
    """
    Report keys that would collapse onto the same converted key.

    Returns a dict mapping the converted key's path (dotted, with list
    indices as "[i]") to the original keys that produce it, in input
    order. An empty dict means `convert_keys` loses nothing.

    Example:
        find_key_collisions({"meta": {"a-b": 1, "a_b": 2}}, "camel")
        -> {"meta.aB": ["a-b", "a_b"]}
    """
    converter = resolve_case_converter(target_case)
    preserve = set(preserve_container_keys or [])
    found: Dict[str, List[Any]] = {}
    _collect_collisions(obj, converter, preserve, "", found)
    return found


def _collect_collisions(
    obj: Any,
    converter: CaseConverter,
    preserve: Set[str],
    path: str,
    found: Dict[str, List[Any]],
) -> None:
    if isinstance(obj, list) or type(obj) is tuple:
        for i, item in enumerate(obj):
            _collect_collisions(item, converter, preserve, f"{path}[{i}]", found)
        return

    if not isinstance(obj, dict):
        return

    seen: Dict[Any, List[Any]] = {}
    survivors: Dict[Any, Any] = {}
    for key, value in obj.items():
        new_key = converter(key)
        seen.setdefault(new_key, []).append(key)
        if key in preserve or new_key in preserve:
            survivors.pop(new_key, None)
        else:
            survivors[new_key] = value

    # only the last value per converted key reaches convert_keys output
    for new_key, value in survivors.items():
        child_path = f"{path}.{new_key}" if path else str(new_key)
        _collect_collisions(value, converter, preserve, child_path, found)

    for new_key, originals in seen.items():
        if len(originals) > 1:
            found[f"{path}.{new_key}" if path else str(new_key)] = originals
