"""Unit tests for core/cache.py"""

import gc
import threading
import time

import pytest

from mdremark.core.cache import NodeCache
from mdremark.core.models import ContentNode, DerivationKey
from mdremark.errors import DerivationCycleError


@pytest.fixture(name="cache")
def cache_fixture():
    return NodeCache()


@pytest.fixture(name="node")
def node_fixture():
    return ContentNode(id="doc", raw_content="# Doc\n")


def test_computes_once(cache, node):
    """A second request for the same (node, key) returns the stored value without recomputing."""
    calls = []
    compute = lambda: calls.append(1) or "value"
    assert cache.get_or_compute(node, DerivationKey.markup, compute) == "value"
    assert cache.get_or_compute(node, DerivationKey.markup, compute) == "value"
    assert len(calls) == 1


def test_keys_are_independent(cache, node):
    """Different keys of one node are cached separately."""
    cache.get_or_compute(node, DerivationKey.ast, lambda: "ast")
    assert cache.get_or_compute(node, DerivationKey.markup, lambda: "html") == "html"
    assert cache.has(node, DerivationKey.ast)
    assert not cache.has(node, DerivationKey.headings)


def test_nodes_with_equal_content_do_not_share(cache):
    """Cache slots are keyed by node identity, not content."""
    a = ContentNode(id="same", raw_content="x")
    b = ContentNode(id="same", raw_content="x")
    cache.get_or_compute(a, DerivationKey.markup, lambda: "a")
    assert cache.get_or_compute(b, DerivationKey.markup, lambda: "b") == "b"


def test_failure_is_not_cached(cache, node):
    """A failed computation propagates and the next call retries from scratch."""
    def boom():
        raise ValueError("bad input")

    with pytest.raises(ValueError, match="bad input"):
        cache.get_or_compute(node, DerivationKey.ast, boom)
    assert not cache.has(node, DerivationKey.ast)
    assert cache.get_or_compute(node, DerivationKey.ast, lambda: "ok") == "ok"


def test_concurrent_requests_single_flight(cache, node):
    """N threads asking for the same (node, key) trigger exactly one computation."""
    calls = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def compute():
        with lock:
            calls.append(1)
        time.sleep(0.05)
        return "html"

    results = []

    def worker():
        barrier.wait()
        results.append(cache.get_or_compute(node, DerivationKey.markup, compute))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert results == ["html"] * 8


def test_nested_keys_do_not_deadlock(cache, node):
    """A derivation may request a different key of the same node while computing."""
    value = cache.get_or_compute(
        node, DerivationKey.markup,
        lambda: cache.get_or_compute(node, DerivationKey.ast, lambda: "ast") + "->html",
    )
    assert value == "ast->html"


def test_self_request_raises_cycle_error(cache, node):
    """Requesting the key being computed on the same thread raises instead of deadlocking."""
    def recurse():
        return cache.get_or_compute(node, DerivationKey.ast, recurse)

    with pytest.raises(DerivationCycleError):
        cache.get_or_compute(node, DerivationKey.ast, recurse)
    assert not cache.has(node, DerivationKey.ast)


def test_discard_drops_all_keys(cache, node):
    """discard invalidates every representation of the node together."""
    cache.get_or_compute(node, DerivationKey.ast, lambda: 1)
    cache.get_or_compute(node, DerivationKey.markup, lambda: 2)
    cache.discard(node)
    assert not cache.has(node, DerivationKey.ast)
    assert not cache.has(node, DerivationKey.markup)


def test_entries_released_with_node(cache):
    """Entries live only as long as the node reference."""
    node = ContentNode(id="temp", raw_content="")
    cache.get_or_compute(node, DerivationKey.ast, lambda: "ast")
    assert len(cache) == 1
    del node
    gc.collect()
    assert len(cache) == 0
