"""Sanitizer and front-matter field extraction."""

import re

import pytest

from skillbuilder.utils.markdown import (
    extract_field,
    fallback_name,
    normalize_category,
    normalize_description,
    normalize_name,
)
from skillbuilder.utils.sanitize import sanitize_input

from tests.conftest import SKILL_MD


@pytest.mark.parametrize(
    "raw",
    [
        "<script>alert(1)</script>make a linter",
        "a <b>bold</b> request",
        "<<<>>>",
        "x > y and y < z",
        "<SCRIPT type='text/javascript'>evil()</SCRIPT>",
        "<script>unterminated",
    ],
)
def test_sanitize_never_returns_angle_brackets(raw):
    out = sanitize_input(raw)
    assert "<" not in out
    assert ">" not in out


def test_sanitize_removes_script_blocks():
    assert sanitize_input("before<script>alert('x')</script>after") == "beforeafter"
    assert sanitize_input("a<ScRiPt src=x>boom</sCrIpT>b") == "ab"


def test_sanitize_trims_and_truncates():
    assert sanitize_input("   padded   ") == "padded"
    assert sanitize_input("a" * 5000) == "a" * 2000
    assert sanitize_input("abcdef", max_length=3) == "abc"


def test_sanitize_non_string():
    assert sanitize_input(None) == ""
    assert sanitize_input(42) == ""
    assert sanitize_input(["<x>"]) == ""


def test_extract_field_from_front_matter():
    assert extract_field(SKILL_MD, "name") == "git-commit-writer"
    assert extract_field(SKILL_MD, "description") == "Writes conventional commit messages"
    assert extract_field(SKILL_MD, "category") == "Dev"


def test_extract_field_first_match_wins():
    text = "name: first\nname: second\n"
    assert extract_field(text, "name") == "first"


def test_extract_field_is_case_sensitive_and_prefix_only():
    text = "Name: upper\n  name: indented\nusername: nope\n"
    assert extract_field(text, "name") is None


def test_extract_field_absent():
    assert extract_field("# Just a heading\nno metadata here", "name") is None
    assert extract_field("", "description") is None


def test_extract_field_does_not_interpret_content():
    text = "name: !!python/object/apply:os.system ['rm -rf /']\n"
    assert extract_field(text, "name") == "!!python/object/apply:os.system ['rm -rf /']"


def test_normalize_name():
    assert normalize_name("Git Commit_Writer!") == "git-commit-writer-"
    assert normalize_name("x" * 80) == "x" * 50


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\u017fkill", "-kill"),  # long s
        ("\u0131d-tool", "-d-tool"),  # dotless i
        ("\u0130d-tool", "i-d-tool"),  # dotted capital I lowercases to i + U+0307
        ("\u212aube-lint", "kube-lint"),  # Kelvin sign lowercases to k
        ("caf\u00e9-helper", "caf--helper"),
    ],
)
def test_normalize_name_only_keeps_ascii(raw, expected):
    name = normalize_name(raw)
    assert name == expected
    assert re.fullmatch(r"[a-z0-9-]+", name)


def test_fallback_name_shape():
    name = fallback_name()
    assert name.startswith("skill-")
    assert len(name) == len("skill-") + 6
    assert normalize_name(name) == name


def test_normalize_description_truncates():
    assert normalize_description("d" * 300) == "d" * 200


def test_normalize_category():
    assert normalize_category("devops") == "DevOps"
    assert normalize_category(" Testing ") == "Testing"
    assert normalize_category("Marketing") is None
    assert normalize_category(None) is None
