"""
Derivation Graph
================

Dependency DAG over root containers and derived values.

GUARANTEES:
- Writes inside a batch are staged and applied together when the
  outermost batch exits
- At commit, every observed derived value downstream of a changed root is
  refreshed in topological order BEFORE any listener runs
- Each derived value recomputes at most once per commit
- Listeners only ever see post-commit values (no glitches)

Writes made by listeners during notification are committed as follow-up
rounds once the current round has notified everyone. A listener that
raises does not stop delivery to the others; the first failure is re-raised
once the writes have settled.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set, TypeVar
import itertools

import networkx as nx

from ..contracts.base import DerivationError, PropagationError, ErrorCode
from ..contracts.events import AuditEventType
from ..observability import ObservabilityEngine
from .nodes import Node, RootContainer, DerivedValue


T = TypeVar('T')


@dataclass
class DerivationConfig:
    """Configuration for the derivation graph."""
    max_flush_rounds: int = 100
    notify_on_subscribe: bool = True


class DerivationGraph:
    """
    Owns every node and the edges between them.

    Edges point from dependency to dependent. Nodes can only depend on nodes
    that already exist, so the graph is acyclic by construction.
    """

    def __init__(
        self,
        config: Optional[DerivationConfig] = None,
        observability: Optional[ObservabilityEngine] = None
    ):
        self._config = config or DerivationConfig()
        self._observability = observability or ObservabilityEngine()
        self._graph = nx.DiGraph()
        self._keys: Set[str] = set()
        self._key_counter = itertools.count(1)

        self._staged: Dict[RootContainer, Any] = {}
        self._batch_depth = 0
        self._flushing = False
        self._epoch = 0

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def config(self) -> DerivationConfig:
        return self._config

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    @property
    def epoch(self) -> int:
        """Number of commits that changed at least one root."""
        return self._epoch

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def dependents(self, node: Node) -> List[Node]:
        return list(self._graph.successors(node))

    def dependencies(self, node: Node) -> List[Node]:
        return list(self._graph.predecessors(node))

    # =========================================================================
    # NODE CREATION
    # =========================================================================

    def root(self, initial: T, key: Optional[str] = None) -> RootContainer[T]:
        """Create a root container holding `initial`."""
        node = RootContainer(self, self._unique_key(key, "root"), initial)
        self._graph.add_node(node)
        return node

    def derive(
        self,
        deps: Sequence[Node],
        fn: Callable[..., T],
        key: Optional[str] = None
    ) -> DerivedValue[T]:
        """
        Create a derived value equal to fn(*values of deps).

        fn must be pure. It is evaluated lazily, on first read or subscribe.
        """
        deps = tuple(deps)
        for dep in deps:
            if dep.graph is not self:
                raise DerivationError(
                    ErrorCode.FOREIGN_DEPENDENCY,
                    f"Dependency {dep.key} belongs to another graph",
                    node_key=dep.key
                )
            if dep.is_disposed:
                raise DerivationError(
                    ErrorCode.NODE_DISPOSED,
                    f"Dependency {dep.key} has been disposed",
                    node_key=dep.key
                )

        node = DerivedValue(self, self._unique_key(key, "derived"), deps, fn)
        self._graph.add_node(node)
        for dep in deps:
            self._graph.add_edge(dep, node)
        return node

    def dispose(self, node: Node):
        """Remove a node. Nodes that still have dependents cannot be removed."""
        if node.is_disposed:
            return
        if self._graph.out_degree(node) > 0:
            raise DerivationError(
                ErrorCode.NODE_HAS_DEPENDENTS,
                f"Node {node.key} still has {self._graph.out_degree(node)} dependents",
                node_key=node.key
            )

        self._graph.remove_node(node)
        self._keys.discard(node.key)
        self._staged.pop(node, None)
        node._listeners.clear()
        node._idle_callbacks.clear()
        node._disposed = True
        self._observability.log_audit(AuditEventType.DISPOSED, "dispose", node_key=node.key)

    def _unique_key(self, key: Optional[str], prefix: str) -> str:
        candidate = key or f"{prefix}_{next(self._key_counter)}"
        while candidate in self._keys:
            candidate = f"{key or prefix}#{next(self._key_counter)}"
        self._keys.add(candidate)
        return candidate

    # =========================================================================
    # BATCHING
    # =========================================================================

    @contextmanager
    def batch(self) -> Iterator['DerivationGraph']:
        """
        Group root writes into one atomic commit.

        Batches nest; only the outermost one commits. If the body raises,
        everything staged in the batch is discarded.
        """
        self._batch_depth += 1
        try:
            yield self
        except BaseException:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self._discard()
            raise
        self._batch_depth -= 1
        if self._batch_depth == 0:
            self._flush()

    def _stage(self, node: RootContainer, value: Any):
        self._staged[node] = value
        if self._batch_depth == 0:
            self._flush()

    def _pending_value(self, node: RootContainer) -> Any:
        if node in self._staged:
            return self._staged[node]
        return node._value

    def _discard(self):
        discarded = [node.key for node in self._staged]
        self._staged = {}
        self._observability.log_audit(
            AuditEventType.BATCH_DISCARDED,
            "batch",
            roots=",".join(discarded)
        )

    # =========================================================================
    # PROPAGATION
    # =========================================================================

    def _flush(self):
        # Re-entrant writes (from listeners) are picked up by the loop below
        if self._flushing:
            return

        self._flushing = True
        listener_errors: List[Exception] = []
        try:
            rounds = 0
            while self._staged:
                rounds += 1
                if rounds > self._config.max_flush_rounds:
                    pending = ",".join(node.key for node in self._staged)
                    self._staged = {}
                    raise PropagationError(
                        ErrorCode.PROPAGATION_OVERFLOW,
                        f"Writes did not settle after {self._config.max_flush_rounds} rounds "
                        f"(pending: {pending})"
                    )
                listener_errors.extend(self._commit_round())
        finally:
            self._flushing = False

        # Every observer has been notified and follow-ups committed by now
        if listener_errors:
            raise listener_errors[0]

    def _commit_round(self) -> List[Exception]:
        """Apply staged writes, settle observed values, notify. Returns listener failures."""
        staged, self._staged = self._staged, {}

        changed = [node for node, value in staged.items() if node._apply(value)]
        self._observability.count("batch_count")
        self._observability.log_audit(
            AuditEventType.BATCH_COMMITTED,
            "batch",
            staged=len(staged),
            changed=",".join(node.key for node in changed)
        )
        if not changed:
            return []

        self._epoch += 1

        affected: Set[Node] = set(changed)
        for node in changed:
            affected |= nx.descendants(self._graph, node)

        ordered = list(nx.topological_sort(self._graph.subgraph(affected)))

        # Settle every observed value first, then notify
        to_notify: List[Node] = []
        for node in ordered:
            if not node.is_observed:
                continue
            if isinstance(node, RootContainer):
                to_notify.append(node)
                continue
            before = node._version
            node._refresh()
            if node._version != before:
                to_notify.append(node)

        errors: List[Exception] = []
        for node in to_notify:
            if node.is_disposed:
                continue
            self._observability.count("notify_count", node.key)
            self._observability.log_audit(
                AuditEventType.NOTIFIED,
                "notify",
                node_key=node.key,
                listeners=len(node._listeners)
            )
            for exc in node._notify():
                self._observability.log_audit(
                    AuditEventType.LISTENER_FAILED,
                    "notify",
                    node_key=node.key,
                    error=repr(exc)
                )
                errors.append(exc)
        return errors


def derive(deps: Sequence[Node], fn: Callable[..., T], key: Optional[str] = None) -> DerivedValue[T]:
    """Derive from nodes that share a graph."""
    if not deps:
        raise ValueError("derive() needs at least one dependency")
    return deps[0].graph.derive(deps, fn, key=key)
