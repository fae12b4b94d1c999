"""Shared pytest configuration for the adocast test suite.

Registers the test markers and Hypothesis profiles, and provides fixtures
for temporary directories, config isolation and a sample document.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import cleanup_test_dir, create_test_temp_dir

# Select with HYPOTHESIS_PROFILE=ci|dev|debug
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Register the markers used across the suite."""
    for marker, description in (
        ("unit", "fast tests of a single component"),
        ("integration", "tests running several components together"),
        ("slow", "tests that start subprocesses or take seconds"),
        ("cli", "tests of the adocast command"),
        ("property", "Hypothesis property-based tests"),
    ):
        config.addinivalue_line("markers", f"{marker}: {description}")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Yield a fresh directory that is removed after the test."""
    path = create_test_temp_dir()
    try:
        yield path
    finally:
        cleanup_test_dir(path)


@pytest.fixture
def isolated_config(monkeypatch, temp_dir: Path) -> Path:
    """Run a test from an empty directory with no configuration in reach.

    The working directory and home directory both point at ``temp_dir`` and
    ``ADOCAST_CONFIG`` is unset, so config discovery finds nothing unless the
    test writes a file there.
    """
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: temp_dir))
    monkeypatch.delenv("ADOCAST_CONFIG", raising=False)
    return temp_dir


@pytest.fixture(autouse=True)
def reset_root_logging() -> Generator[None, None, None]:
    """Remove console and file handlers that CLI tests attach to the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)


@pytest.fixture
def sample_asciidoc() -> str:
    """Provide a small document touching the common block kinds.

    Returns
    -------
    str
        AsciiDoc source used across multiple tests.

    """
    return """= Sample Document
:toc: left

Intro paragraph with *bold* text.

== Lists

* first item
* second item
** nested item

== Code

[source,python]
----
// kept as code
print("hi")
----

== Table

|===
|Name |Value

|alpha |1
|beta |2
|===
"""
