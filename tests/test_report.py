"""Unit tests for the match tree report."""

from pathlib import Path

from depexclude.report import MatchNode, build_match_tree, render_match_tree
from depexclude.rules.fixed_rules import FixedPathRules
from depexclude.rules.sentinel_rules import SentinelRule
from depexclude.walker.match_result import MatchResult

ROOT = Path("/home/u")
NODE = SentinelRule("node_modules", "package.json")
CARGO = SentinelRule("target", "Cargo.toml")
FIXED = FixedPathRules([".nvm"])


def match(relative_path, rule):
    return MatchResult(ROOT / relative_path, relative_path, rule)


def test_build_creates_intermediate_directories():
    matches = [match("Projects/web/node_modules", NODE), match("Projects/rust/target", CARGO)]

    tree = build_match_tree(ROOT, matches)

    assert tree.name == "u"
    assert [child.name for child in tree.children] == ["Projects"]
    projects = tree.children[0]
    assert not projects.is_match
    assert [child.name for child in projects.children] == ["web", "rust"]
    node_modules = projects.children[0].children[0]
    assert node_modules.is_match
    assert node_modules.match is matches[0]
    assert node_modules.size_bytes is None


def test_build_attaches_sizes_by_relative_path():
    tree = build_match_tree(ROOT, [match(".nvm", FIXED)], sizes={".nvm": 1024})

    assert tree.children[0].size_bytes == 1024


def test_build_without_matches():
    tree = build_match_tree(ROOT, [])

    assert isinstance(tree, MatchNode)
    assert tree.children == ()


def test_render_sorts_and_annotates():
    matches = [
        match("b/node_modules", NODE),
        match("A/target", CARGO),
        match(".nvm", FIXED),
    ]

    lines = list(render_match_tree(build_match_tree(ROOT, matches, sizes={"A/target": 2048})))

    assert lines == [
        "u/",
        "├── .nvm/  [fixed path]",
        "├── A/",
        "│   └── target/  [target beside Cargo.toml] (2 KiB)",
        "└── b/",
        "    └── node_modules/  [node_modules beside package.json]",
    ]
