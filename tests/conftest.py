"""Pytest configuration and shared fixtures for the org2gmi test suite."""

import pytest

# Configure Hypothesis for property-based testing
try:
    import os

    from hypothesis import Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=30)
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


SAMPLE_ORG = """#+TITLE: Field Notes
#+AUTHOR: A. Writer

Intro paragraph with a [[https://example.com/][link]].

* Getting started
Read the [[file:guide.org][guide]] first.
It explains everything.[fn:1]

[[gemini://capsule.example/]]

** Install
- download
- unpack

* Reference :docs:
#+BEGIN_SRC python
print("hi")
#+END_SRC

[fn:1] See the appendix.
"""


@pytest.fixture
def sample_org() -> str:
    """Org document exercising links, footnotes, lists and code."""
    return SAMPLE_ORG


@pytest.fixture
def sample_org_file(tmp_path):
    """Write the sample document to a temporary ``notes.org`` file."""
    path = tmp_path / "notes.org"
    path.write_text(SAMPLE_ORG, encoding="utf-8")
    return path
