# tests/test_key_transformer.py
from __future__ import annotations

import copy
from collections import OrderedDict
from datetime import datetime, timezone

import pytest

from keycase.casing.case_converters import TargetCase
from keycase.casing.errors import InvalidTargetCaseError, NestingDepthExceededError
from keycase.casing.key_transformer import convert_keys, find_key_collisions


def test_convert_keys_converts_nested_dict_keys() -> None:
    inp = {"user_name": "a", "address": {"zip_code": "1"}}

    out = convert_keys(inp, "camel")

    assert out == {"userName": "a", "address": {"zipCode": "1"}}


def test_convert_keys_converts_each_list_element_and_keeps_order() -> None:
    out = convert_keys([{"a_b": 1}, {"c_d": 2}], "pascal")
    assert out == [{"AB": 1}, {"CD": 2}]


def test_convert_keys_handles_every_target_case() -> None:
    inp = {"firstName": 1, "last_name": 2}

    assert convert_keys(inp, TargetCase.CAMEL) == {"firstName": 1, "lastName": 2}
    assert convert_keys(inp, TargetCase.SNAKE) == {"first_name": 1, "last_name": 2}
    assert convert_keys(inp, TargetCase.KEBAB) == {"first-name": 1, "last-name": 2}
    assert convert_keys(inp, TargetCase.PASCAL) == {"FirstName": 1, "LastName": 2}


def test_convert_keys_converts_dicts_nested_in_lists_in_dicts() -> None:
    inp = {
        "section_detail": [
            {"total_score": 10, "score_detail": {"content_quality": 10}},
        ],
        "tags": ["keep_me", "and_me"],
    }

    out = convert_keys(inp, "camel")

    assert out["sectionDetail"][0]["totalScore"] == 10
    assert out["sectionDetail"][0]["scoreDetail"]["contentQuality"] == 10
    # string values are never converted
    assert out["tags"] == ["keep_me", "and_me"]


def test_convert_keys_does_not_mutate_input_or_alias_containers() -> None:
    inner = {"zip_code": "1"}
    items = [{"item_id": 1}]
    inp = {"address": inner, "items": items}
    before = copy.deepcopy(inp)

    out = convert_keys(inp, "camel")

    assert inp == before
    assert out["address"] is not inner
    assert out["items"] is not items
    assert out["items"][0] is not items[0]


def test_convert_keys_returns_leaves_by_reference() -> None:
    stamp = datetime(2024, 1, 2, tzinfo=timezone.utc)
    blob = b"raw_bytes"
    tags = {"a_b"}
    inp = {"created_at": stamp, "count": 3, "ratio": 0.5, "active": True, "note": None, "blob": blob, "tags": tags}

    out = convert_keys(inp, "camel")

    assert out["createdAt"] is stamp
    assert out["count"] == 3
    assert out["ratio"] == 0.5
    assert out["active"] is True
    assert out["note"] is None
    assert out["blob"] is blob
    assert out["tags"] is tags


def test_convert_keys_leaves_top_level_primitives_intact() -> None:
    stamp = datetime(2024, 1, 2)
    assert convert_keys("x_y", "camel") == "x_y"
    assert convert_keys(123, "snake") == 123
    assert convert_keys(None, "kebab") is None
    assert convert_keys(True, "pascal") is True
    assert convert_keys(stamp, "camel") is stamp


def test_convert_keys_rebuilds_plain_tuples_and_dict_subclasses() -> None:
    inp = OrderedDict([("first_key", ({"inner_key": 1},))])

    out = convert_keys(inp, "camel")

    assert type(out) is dict
    assert out == {"firstKey": ({"innerKey": 1},)}
    assert isinstance(out["firstKey"], tuple)


def test_convert_keys_passes_non_string_keys_through() -> None:
    out = convert_keys({1: {"a_b": 1}, None: "x"}, "camel")
    assert out == {1: {"aB": 1}, None: "x"}


def test_convert_keys_empty_containers() -> None:
    assert convert_keys({}, "camel") == {}
    assert convert_keys([], "camel") == []


def test_convert_keys_key_collision_last_key_wins() -> None:
    out = convert_keys({"a-b": 1, "a_b": 2}, "camel")
    assert out == {"aB": 2}


def test_convert_keys_is_idempotent_per_target_case() -> None:
    inp = {"user_name": {"zip-code": [{"Street Name": 1}]}}

    for case in TargetCase:
        once = convert_keys(inp, case)
        assert convert_keys(once, case) == once


def test_convert_keys_invalid_target_case_raises_before_any_work() -> None:
    class _Exploding(dict):
        def items(self):  # pragma: no cover - must never be reached
            raise AssertionError("traversal started")

    with pytest.raises(InvalidTargetCaseError) as exc_info:
        convert_keys(_Exploding(name="x"), "invalid")

    assert "invalid" in str(exc_info.value)
    assert exc_info.value.valid_cases == ["camel", "snake", "kebab", "pascal"]


def test_convert_keys_preserve_container_keys_preserves_child_keys() -> None:
    """
    If a key is listed in preserve_container_keys:
      - the container key itself is converted
      - its value is copied verbatim
    """
    inp = {
        "user_or_llm_comments": {
            "profile_summary": "keep_this_key",
            "experience_1": "keep_this_key_too",
        },
        "normal_block": {"inner_key_one": 1},
    }

    out = convert_keys(inp, "camel", preserve_container_keys=["user_or_llm_comments"])

    preserved = out["userOrLlmComments"]
    assert preserved == {"profile_summary": "keep_this_key", "experience_1": "keep_this_key_too"}
    assert out["normalBlock"]["innerKeyOne"] == 1


def test_convert_keys_preserve_container_keys_accepts_converted_name_and_lists() -> None:
    inp = {"section_scores": [{"Content_Quality": 1}]}

    out = convert_keys(inp, "camel", preserve_container_keys={"sectionScores"})

    assert out == {"sectionScores": [{"Content_Quality": 1}]}


def test_convert_keys_max_depth_allows_input_within_limit() -> None:
    inp = {"a_a": {"b_b": [{"c_c": 1}]}}  # deepest container at depth 3
    assert convert_keys(inp, "camel", max_depth=3) == {"aA": {"bB": [{"cC": 1}]}}


def test_convert_keys_max_depth_rejects_deeper_input() -> None:
    inp = {"a_a": {"b_b": [{"c_c": 1}]}}

    with pytest.raises(NestingDepthExceededError) as exc_info:
        convert_keys(inp, "camel", max_depth=2)

    assert exc_info.value.max_depth == 2


def test_convert_keys_max_depth_ignores_preserved_containers() -> None:
    inp = {"raw": {"x": {"y": {"z": 1}}}}
    out = convert_keys(inp, "snake", max_depth=0, preserve_container_keys=["raw"])
    assert out == inp


def test_find_key_collisions_reports_paths_and_original_keys() -> None:
    inp = {
        "meta": {"a-b": 1, "a_b": 2, "c": 3},
        "rows": [{"x_y": 1}, {"x y": 1, "x-y": 2}],
    }

    found = find_key_collisions(inp, "camel")

    assert found == {
        "meta.aB": ["a-b", "a_b"],
        "rows[1].xY": ["x y", "x-y"],
    }


def test_find_key_collisions_ignores_values_dropped_by_conversion() -> None:
    inp = {"a_b": {"x_y": 1, "x-y": 2}, "a-b": {}}

    found = find_key_collisions(inp, "camel")

    assert convert_keys(inp, "camel") == {"aB": {}}
    assert found == {"aB": ["a_b", "a-b"]}


def test_find_key_collisions_follows_surviving_value() -> None:
    inp = {"a-b": {}, "a_b": {"x_y": 1, "x-y": 2}}

    found = find_key_collisions(inp, "camel")

    assert found == {"aB": ["a-b", "a_b"], "aB.xY": ["x_y", "x-y"]}


def test_find_key_collisions_empty_when_conversion_is_lossless() -> None:
    assert find_key_collisions({"user_name": {"zip_code": 1}}, "kebab") == {}


def test_find_key_collisions_skips_preserved_containers() -> None:
    inp = {"raw": {"a-b": 1, "a_b": 2}}
    assert find_key_collisions(inp, "camel", preserve_container_keys=["raw"]) == {}


def test_find_key_collisions_validates_target_case() -> None:
    with pytest.raises(InvalidTargetCaseError):
        find_key_collisions({}, "upper")
