"""Root test configuration: shared transformer fixtures and logging reset"""

import pytest

from mdremark.core.models import ContentNode
from mdremark.core.transformer import MarkdownTransformer
from mdremark.util.logging import reset_logging


@pytest.fixture(autouse=True)
def restore_library_logging():
    """Undo CLI logging configuration so later tests never write to a closed stream."""
    yield
    reset_logging()


@pytest.fixture(name="transformer")
def transformer_fixture():
    return MarkdownTransformer()


@pytest.fixture(name="make_node")
def make_node_fixture():
    """Factory for ContentNodes; each call is a distinct identity."""
    counter = iter(range(1_000_000))

    def _make(content: str, node_id: str = None) -> ContentNode:
        return ContentNode(id=node_id or f"node-{next(counter)}", raw_content=content)
    return _make
