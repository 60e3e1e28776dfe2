"""
Reactive Nodes
==============

Root containers and derived values sharing one read/subscribe contract.

INVARIANTS:
- A node's version advances only when its published value changes
- A derived value equals fn(*deps) over the deps' committed values
- A derived value recomputes whenever a dependency version moved, and
  never otherwise
"""

from __future__ import annotations
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, TYPE_CHECKING

from ..contracts.base import DerivationError, ErrorCode
from ..contracts.events import AuditEventType

if TYPE_CHECKING:
    from .graph import DerivationGraph


T = TypeVar('T')

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


UNSET = _Unset()


def values_equal(left: Any, right: Any) -> bool:
    """
    Structural equality used to deduplicate published values.

    Types must match so that e.g. True and 1 are treated as different.
    """
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    return left == right


class Node(Generic[T]):
    """Common read/subscribe contract."""

    def __init__(self, graph: 'DerivationGraph', key: str):
        self._graph = graph
        self._key = key
        self._value: Any = UNSET
        self._version = 0
        self._listeners: List[Listener] = []
        self._idle_callbacks: List[Callable[['Node'], None]] = []
        self._disposed = False

    @property
    def key(self) -> str:
        return self._key

    @property
    def version(self) -> int:
        self._refresh()
        return self._version

    @property
    def graph(self) -> 'DerivationGraph':
        return self._graph

    @property
    def is_observed(self) -> bool:
        return bool(self._listeners)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def get(self) -> T:
        """Current committed value."""
        self._ensure_live()
        self._refresh()
        return self._value

    def current_value(self) -> T:
        return self.get()

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Attach a listener.

        The listener receives the current value right away (unless disabled
        in the graph config) and every published change afterwards.
        """
        self._ensure_live()
        self._listeners.append(listener)

        if self._graph.config.notify_on_subscribe:
            listener(self.get())
        else:
            self._refresh()

        attached = True

        def unsubscribe():
            nonlocal attached
            if not attached:
                return
            attached = False
            if listener in self._listeners:
                self._listeners.remove(listener)
            if not self._listeners and not self._disposed:
                for callback in list(self._idle_callbacks):
                    callback(self)

        return unsubscribe

    def on_change(self, listener: Listener) -> Unsubscribe:
        return self.subscribe(listener)

    def when_unobserved(self, callback: Callable[['Node'], None]):
        """Call `callback(node)` whenever the last listener detaches."""
        self._idle_callbacks.append(callback)

    def dispose(self):
        self._graph.dispose(self)

    def _notify(self) -> List[Exception]:
        """Deliver the value to every listener; failures are collected, not raised."""
        value = self._value
        errors: List[Exception] = []
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception as exc:
                errors.append(exc)
        return errors

    def _refresh(self):
        pass

    def _ensure_live(self):
        if self._disposed:
            raise DerivationError(
                ErrorCode.NODE_DISPOSED,
                f"Node {self._key} has been disposed",
                node_key=self._key
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key!r}, version={self._version})"


class RootContainer(Node[T]):
    """
    Authoritative mutable value.

    Writes go through the graph: inside a batch they are staged and only
    become visible when the outermost batch commits.
    """

    def __init__(self, graph: 'DerivationGraph', key: str, initial: T):
        super().__init__(graph, key)
        self._value = initial

    def set(self, value: T):
        self._ensure_live()
        self._graph._stage(self, value)

    def update(self, fn: Callable[[T], T]):
        """Replace the value with fn(pending value)."""
        self._ensure_live()
        self._graph._stage(self, fn(self._graph._pending_value(self)))

    def _apply(self, value: T) -> bool:
        """Commit a staged value. Returns True if the value changed."""
        if values_equal(value, self._value):
            return False
        self._value = value
        self._version += 1
        return True


class DerivedValue(Node[T]):
    """
    Read-only value computed from other nodes.

    Recomputation is pulled: a read compares the dependencies' versions with
    the ones seen at the last computation. The graph pushes observed derived
    values through the same path at commit time.
    """

    def __init__(
        self,
        graph: 'DerivationGraph',
        key: str,
        deps: Sequence[Node],
        fn: Callable[..., T]
    ):
        super().__init__(graph, key)
        self._deps: Tuple[Node, ...] = tuple(deps)
        self._fn = fn
        self._dep_versions: Optional[Tuple[int, ...]] = None
        self._checked_epoch = -1

    @property
    def dependencies(self) -> Tuple[Node, ...]:
        return self._deps

    def _refresh(self):
        epoch = self._graph.epoch
        if self._checked_epoch == epoch:
            return

        for dep in self._deps:
            dep._refresh()

        versions = tuple(dep._version for dep in self._deps)
        if versions != self._dep_versions:
            self._recompute(versions)

        self._checked_epoch = epoch

    def _recompute(self, versions: Tuple[int, ...]):
        observability = self._graph.observability
        values = [dep._value for dep in self._deps]

        try:
            new_value = self._fn(*values)
        except Exception as exc:
            observability.log_audit(
                AuditEventType.DERIVATION_FAILED,
                "derive",
                node_key=self._key,
                error=repr(exc)
            )
            raise DerivationError(
                ErrorCode.DERIVATION_FAILED,
                f"Derivation {self._key} raised {type(exc).__name__}: {exc}",
                node_key=self._key
            ) from exc

        self._dep_versions = versions
        observability.count("recompute_count", self._key)
        observability.log_audit(AuditEventType.RECOMPUTED, "derive", node_key=self._key)

        if self._value is not UNSET and values_equal(new_value, self._value):
            observability.count("suppressed_count", self._key)
            observability.log_audit(AuditEventType.SUPPRESSED, "derive", node_key=self._key)
            return

        self._value = new_value
        self._version += 1
        observability.count("publish_count", self._key)
        observability.log_audit(
            AuditEventType.PUBLISHED,
            "derive",
            node_key=self._key,
            version=self._version
        )
