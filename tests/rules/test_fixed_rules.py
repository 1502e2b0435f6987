"""Unit tests for fixed path rules."""

from pathlib import Path

import pytest

from depexclude.rules.base_rules import RuleAction, WalkCandidate
from depexclude.rules.fixed_rules import FixedPathRules, normalize_relative_path


@pytest.mark.parametrize(
    "entry, expected",
    [
        (".nvm", ".nvm"),
        ("  .nvm  ", ".nvm"),
        ("./.nvm/", ".nvm"),
        ("~/.nvm", ".nvm"),
        ("go//pkg/./mod", "go/pkg/mod"),
        ("go\\pkg", "go/pkg"),
        (".", ""),
        ("", ""),
    ],
)
def test_normalize_relative_path(entry, expected):
    assert normalize_relative_path(entry) == expected


def test_matches_exact_relative_path():
    rules = FixedPathRules([".nvm", "go/pkg"])

    assert rules.action == RuleAction.MATCH
    assert rules.applies(WalkCandidate(Path("/h/.nvm"), ".nvm", frozenset()))
    assert rules.applies(WalkCandidate(Path("/h/go/pkg"), "go/pkg", frozenset()))
    assert not rules.applies(WalkCandidate(Path("/h/go"), "go", frozenset()))
    assert not rules.applies(WalkCandidate(Path("/h/go/pkg/mod"), "go/pkg/mod", frozenset()))
    assert not rules.applies(WalkCandidate(Path("/h/x/.nvm"), "x/.nvm", frozenset()))


def test_add_rule_ignores_duplicates_and_root():
    rules = FixedPathRules()
    assert not rules.has_rules()

    rules.add_rule(".nvm")
    rules.add_rule("./.nvm/")
    rules.add_rule(".")

    assert rules.paths == [".nvm"]
    assert rules.has_rules()
