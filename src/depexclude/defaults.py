"""Built-in defaults written to the configuration directory on first run."""

import os
from pathlib import Path
from typing import List, Tuple

CONFIG_DIR_NAME = "depexclude"

SKIP_PATHS_FILE = "skip-paths"
SENTINELS_FILE = "sentinels"
FIXED_PATHS_FILE = "fixed-paths"

# Relative to the traversal root (normally the home directory).
DEFAULT_SKIP_PATHS: List[str] = [
    ".Trash",
    "Library",
]

# (directory name, marker file expected next to it, ecosystem)
DEFAULT_SENTINELS: List[Tuple[str, str, str]] = [
    (".build", "Package.swift", "Swift"),
    (".dart_tool", "pubspec.yaml", "Flutter (Dart)"),
    (".packages", "pubspec.yaml", "Pub (Dart)"),
    (".gradle", "build.gradle", "Gradle"),
    (".gradle", "build.gradle.kts", "Gradle Kotlin Script"),
    ("build", "build.gradle", "Gradle"),
    ("build", "build.gradle.kts", "Gradle Kotlin Script"),
    (".nox", "noxfile.py", "Nox (Python)"),
    (".tox", "tox.ini", "Tox (Python)"),
    (".venv", "pyproject.toml", "virtualenv (Python)"),
    (".venv", "requirements.txt", "virtualenv (Python)"),
    ("venv", "requirements.txt", "virtualenv (Python)"),
    (".stack-work", "stack.yaml", "Stack (Haskell)"),
    (".vagrant", "Vagrantfile", "Vagrant"),
    ("_build", "mix.exs", "Mix (Elixir)"),
    ("deps", "mix.exs", "Mix (Elixir)"),
    ("Carthage", "Cartfile", "Carthage"),
    ("Pods", "Podfile", "CocoaPods"),
    ("bower_components", "bower.json", "Bower (JavaScript)"),
    ("node_modules", "package.json", "npm, Yarn (NodeJS)"),
    ("cdk.out", "cdk.json", "AWS CDK"),
    ("target", "Cargo.toml", "Cargo (Rust)"),
    ("target", "pom.xml", "Maven"),
    ("vendor", "composer.json", "Composer (PHP)"),
    ("vendor", "Gemfile", "Bundler (Ruby)"),
    ("vendor", "go.mod", "Go Modules (Golang)"),
]


def default_config_dir() -> Path:
    """Return the configuration directory used when none is given on the command line.

    Honors ``$XDG_CONFIG_HOME`` and falls back to ``~/.config``.

    Returns:
        Path to the depexclude configuration directory (it may not exist yet).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


def default_skip_paths_text() -> str:
    return "".join(f"{entry}\n" for entry in DEFAULT_SKIP_PATHS)


def default_sentinels_text() -> str:
    # Pad the first two columns so the generated file stays readable when hand-edited
    name_width = max(len(name) for name, _, _ in DEFAULT_SENTINELS)
    marker_width = max(len(marker) for _, marker, _ in DEFAULT_SENTINELS)
    lines = [
        f"{name:<{name_width}} {marker:<{marker_width}} # {ecosystem}" for name, marker, ecosystem in DEFAULT_SENTINELS
    ]
    return "\n".join(lines) + "\n"
