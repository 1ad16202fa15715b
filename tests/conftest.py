"""Pytest configuration and shared fixtures for the rxmd test suite.

This module provides shared fixtures, test configuration, and Hypothesis
profiles used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from rxmd import MarkdownParser, TransformDefinition, TransformRegistry

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def md() -> MarkdownParser:
    """Provide a parser with the built-in transforms."""
    return MarkdownParser()


@pytest.fixture
def registry() -> TransformRegistry:
    """Provide an empty transform registry."""
    return TransformRegistry()


@pytest.fixture
def highlight() -> TransformDefinition:
    """Provide a ``==text==`` highlight transform.

    Returns
    -------
    TransformDefinition
        Definition rendering ``<mark>`` elements.

    """
    return TransformDefinition(
        name="highlight",
        description="Highlight text with ==double equals==",
        usage="==important text==",
        pattern=r"==(?<text>[^=]+)==",
        render=lambda captures: f"<mark>{captures['text']}</mark>",
    )


@pytest.fixture
def sample_markdown() -> str:
    """Provide a document exercising every built-in transform.

    Returns
    -------
    str
        Markdown sample used across multiple tests.

    """
    return """# Title

This is a [link](https://example.com) and an image:

![Logo](logo.png)

```javascript
const x = 42;
```

- List item 1
- List item 2

1. First
2. Second

> Quote here

Some **bold**, *italic*, ~~deleted~~ and `code` text.

---"""
