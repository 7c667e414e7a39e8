"""Pytest configuration and shared fixtures for the htmldown test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from htmldown.options import ConvertOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def fake_guesser():
    """Provide a language guesser that always answers ``python``."""

    def guess(text: str) -> str:
        return "python"

    return guess


@pytest.fixture
def trim_options() -> ConvertOptions:
    """Provide options that drop whitespace-only text nodes."""
    return ConvertOptions(trim_space=True)


@pytest.fixture
def sample_html() -> str:
    """Provide a small document touching most block and inline rules."""
    return """<html><head><title>Sample</title></head><body>
<h1>Sample Document</h1>
<p>This is a <strong>sample</strong> with <em>italic text</em> and <code>inline code</code>.</p>
<ul><li>Item 1</li><li>Item 2</li></ul>
<pre><code class="language-python">print("hi")
</code></pre>
<table><tr><th>Name</th><th>Value</th></tr><tr><td>a</td><td>1</td></tr></table>
</body></html>"""
