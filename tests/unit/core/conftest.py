"""Shared fixtures for core unit tests"""

import pytest

from mdremark.core.ast import make_parser, parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text and [a link](https://example.com).

## Heading 2

- item one
- item two

```python
print("hello")
```

## Heading 2

Footer paragraph.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="parse")
def parse_fixture(parser):
    return lambda text: parse_markdown(text, parser)


@pytest.fixture(name="sample_ast")
def sample_ast_fixture(parse):
    return parse(SAMPLE_MD)
