"""Unit tests for dot-notation expansion and code helpers."""

import pytest

from quickcreate.core.subaccount_code import (
    build_candidate_code,
    looks_like_parent_prefix,
    parent_code_candidates,
    split_dot_prefix,
    transform_subaccount_code,
)


@pytest.mark.parametrize(
    "code, length, expected",
    [
        ("570.1", 10, "5700000001"),
        ("570.123", 10, "5700000123"),
        ("43.1", 6, "430001"),
        ("43.1", 8, "43000001"),
        ("43.1", 12, "430000000001"),
        ("4.1", 10, "4000000001"),
        ("4300001.1", 10, "4300001001"),
        ("0.0", 10, "0000000000"),
        ("57.100", 10, "5700000100"),
    ],
)
def test_dot_notation_expands_to_fixed_length(code: str, length: int, expected: str) -> None:
    assert transform_subaccount_code(code, length) == expected


def test_code_without_dot_passes_through() -> None:
    assert transform_subaccount_code("570", 10) == "570"
    assert transform_subaccount_code("570-1", 10) == "570-1"
    assert transform_subaccount_code("ABC", 10) == "ABC"


def test_multiple_dots_pass_through() -> None:
    assert transform_subaccount_code("570.1.2", 10) == "570.1.2"
    assert transform_subaccount_code("570..1", 10) == "570..1"


def test_empty_and_whitespace_yield_empty() -> None:
    assert transform_subaccount_code("", 10) == ""
    assert transform_subaccount_code("   ", 10) == ""
    assert transform_subaccount_code(None, 10) == ""


def test_surrounding_whitespace_is_trimmed() -> None:
    assert transform_subaccount_code(" \t\n570 \t\n", 10) == "570"
    assert transform_subaccount_code("  570.1  ", 10) == "5700000001"


def test_lone_leading_and_trailing_dots() -> None:
    assert transform_subaccount_code(".", 10) == "0000000000"
    assert transform_subaccount_code(".123", 10) == "0000000123"
    assert transform_subaccount_code("570.", 10) == "5700000000"


def test_letters_use_the_same_padding() -> None:
    assert transform_subaccount_code("ABC.1", 10) == "ABC0000001"
    assert transform_subaccount_code("5A0.1", 10) == "5A00000001"


def test_long_prefix_is_never_truncated() -> None:
    assert transform_subaccount_code("1234567890.1", 10) == "12345678901"
    assert transform_subaccount_code("570.12345678", 10) == "57012345678"
    assert transform_subaccount_code("4.1", 2) == "41"


def test_length_defaults_to_ten() -> None:
    assert transform_subaccount_code("570.1") == "5700000001"


@pytest.mark.parametrize("code", ["570.1", "43.99", "4.1", ".", "570", "ABC.1"])
def test_transform_is_idempotent_on_its_output(code: str) -> None:
    once = transform_subaccount_code(code, 10)
    assert transform_subaccount_code(once, 10) == once


@pytest.mark.parametrize("prefix, suffix, length", [("570", "1", 10), ("43", "999", 8), ("4300001", "12", 10), ("12345678", "123", 10)])
def test_result_length_and_affixes(prefix: str, suffix: str, length: int) -> None:
    result = transform_subaccount_code(f"{prefix}.{suffix}", length)
    assert len(result) == max(length, len(prefix) + len(suffix))
    assert result.startswith(prefix)
    assert result.endswith(suffix)


def test_build_candidate_code() -> None:
    assert build_candidate_code("629", 1, 10) == "6290000001"
    assert build_candidate_code("629", 42, 10) == "6290000042"
    assert build_candidate_code("43", 999, 8) == "43000999"


def test_parent_code_candidates_longest_first() -> None:
    assert list(parent_code_candidates("4300000001")) == [
        "43000000",
        "4300000",
        "430000",
        "43000",
        "4300",
        "430",
        "43",
        "4",
    ]
    assert list(parent_code_candidates("12")) == []


def test_query_classification() -> None:
    assert looks_like_parent_prefix("430")
    assert looks_like_parent_prefix("43")
    assert not looks_like_parent_prefix("4")
    assert not looks_like_parent_prefix("43000")
    assert not looks_like_parent_prefix("caja")
    assert split_dot_prefix("570.") == "570"
    assert split_dot_prefix("570.12") == "570"
    assert split_dot_prefix("570") is None
    assert split_dot_prefix("570.1.2") is None


def test_explicit_zero_length_is_not_replaced_by_default() -> None:
    assert transform_subaccount_code(".", 0) == ""
    assert transform_subaccount_code("570.1", 0) == "5701"
    assert transform_subaccount_code(".", None) == "0000000000"
