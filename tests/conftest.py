"""Pytest configuration and shared fixtures for the mdterm test suite."""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from mdterm.ast import Document, Paragraph, Text

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


SAMPLE_MARKDOWN = """# Getting started

Install the package and run it on a file.
Lines of a paragraph are joined.

## Options

- **width**: total columns
- *left pad*: fixed margin

> Quoted lines
> keep their breaks.

```python
print("hello")
```

| Option | Default |
|:-------|--------:|
| width | 80 |
| pad | 0 |

---

See [the docs](https://example.com/docs) for more.
"""


@pytest.fixture
def sample_markdown() -> str:
    """Return a markdown document exercising most block kinds."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_markdown_file(tmp_path: Path) -> Path:
    """Write the sample document to a temporary file and return its path."""
    path = tmp_path / "sample.md"
    path.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    return path


@pytest.fixture
def hello_document() -> Document:
    """Return a document holding a single ``Hello`` paragraph."""
    return Document(children=[Paragraph(content=[Text("Hello")])])
