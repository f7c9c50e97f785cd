"""Per-node derivation cache with single-flight computation"""

import threading
import weakref
from typing import Any, Callable, TypeVar

from mdremark.core.models import ContentNode, DerivationKey
from mdremark.errors import DerivationCycleError
from mdremark.util.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class _Slot:
    """Cached values and per-key compute locks for one node."""

    __slots__ = ("values", "locks")

    def __init__(self):
        self.values: dict[DerivationKey, Any] = {}
        self.locks: dict[DerivationKey, threading.Lock] = {}


class NodeCache:
    """Memoizes derived representations by (node identity, derivation key).

    The first caller for a (node, key) runs the compute function while holding
    that pair's lock; concurrent callers wait on the lock and then read the
    stored value. Failures propagate and leave the pair uncached, so the next
    call recomputes from scratch. Entries are held weakly by node and vanish
    when the host drops the node.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._slots: "weakref.WeakKeyDictionary[ContentNode, _Slot]" = weakref.WeakKeyDictionary()
        self._local = threading.local()

    def _slot(self, node: ContentNode) -> _Slot:
        with self._lock:
            slot = self._slots.get(node)
            if slot is None:
                slot = self._slots[node] = _Slot()
            return slot

    def _in_flight(self) -> set:
        pending = getattr(self._local, "pending", None)
        if pending is None:
            pending = self._local.pending = set()
        return pending

    def get_or_compute(self, node: ContentNode, key: DerivationKey, compute: Callable[[], T]) -> T:
        """Return the cached value for (node, key), computing it at most once."""
        slot = self._slot(node)
        if key in slot.values:
            return slot.values[key]

        marker = (id(node), key)
        pending = self._in_flight()
        if marker in pending:
            raise DerivationCycleError(f"'{key.value}' requested itself while computing node {node.id}")

        with self._lock:
            lock = slot.locks.setdefault(key, threading.Lock())

        with lock:
            if key in slot.values:
                return slot.values[key]
            pending.add(marker)
            try:
                value = compute()
            except Exception as e:
                logger.debug("derivation_failed", node=node.id, key=key.value, error=str(e))
                raise
            finally:
                pending.discard(marker)
            slot.values[key] = value
            logger.debug("derivation_computed", node=node.id, key=key.value)
            return value

    def has(self, node: ContentNode, key: DerivationKey) -> bool:
        with self._lock:
            slot = self._slots.get(node)
        return slot is not None and key in slot.values

    def discard(self, node: ContentNode) -> None:
        """Drop every cached representation of node at once."""
        with self._lock:
            self._slots.pop(node, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)
