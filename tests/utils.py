"""Test utilities for the dapper test suite.

This module provides sample documents, temporary directory helpers and
small assertions shared by the unit, integration and end-to-end tests.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Mapping

SAMPLE_MARKDOWN = """Sample Document
===============

This is a __sample document__ with *italic text* and some `inline code`.

Section 2
---------

Here is a list:

* Item 1
* Item 2
* Item 3

And a numbered list:

1) First item
2) Second item



~~~python
def hello_world():
    print("Hello, World!")
~~~

___

| Header 1 | Header 2 |
|:--|--:|
| Row 1 | Data 1 |
"""

SAMPLE_MARKDOWN_FORMATTED = """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

## Section 2

Here is a list:

- Item 1
- Item 2
- Item 3

And a numbered list:

1. First item
2. Second item

```python
def hello_world():
    print("Hello, World!")
```

---

| Header 1 | Header 2 |
|:-------- | --------:|
| Row 1    | Data 1   |
"""

SAMPLE_YAML = """

# Application settings
name:   myapp
version: 1.0.0



environment: {  stage: dev, debug: true }
tags: [ web, api ]
"""

SAMPLE_YAML_FORMATTED = """# Application settings
name: myapp
version: 1.0.0

environment:
  stage: dev
  debug: true
tags:
  - web
  - api
"""


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="dapper_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a temporary test directory and everything in it."""
    shutil.rmtree(path, ignore_errors=True)


def write_tree(root: Path, files: Mapping[str, str]) -> dict[str, Path]:
    """Write ``{relative path: content}`` under ``root`` and return the created paths."""
    created = {}
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        created[relative] = path
    return created


def assert_idempotent(format_func: Callable[[str], str], source: str) -> str:
    """Assert that formatting ``source`` twice gives the same result and return it."""
    once = format_func(source)
    twice = format_func(once)
    assert twice == once, f"Formatting is not idempotent:\n--- once ---\n{once}\n--- twice ---\n{twice}"
    return once
