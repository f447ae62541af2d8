"""Improved shortest augmenting path (ISAP) maximum flow.

ISAP keeps exact residual distances to the sink as labels and walks from the
source along admissible arcs (``dist[u] == dist[v] + 1``). The search is an
explicit three-state machine:

  ADVANCE  extend the walk by one admissible arc, starting from the cached
           current arc of the walk's tip.
  AUGMENT  the walk reached the sink; push its bottleneck along every arc
           and restart the walk at the source.
  RETREAT  the tip has no admissible arc; relabel it to one above its
           lowest residual neighbor and step back along the walk.

Labels only grow, so no full-graph BFS is repeated after initialization.
When a retreat empties the bucket of its old distance label, no vertex can
bridge that distance any more and the search stops (gap optimization).
"""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from netflow.algorithms.augmenting import augment_path, path_bottleneck
from netflow.algorithms.result import build_max_flow_result
from netflow.config import FLOW_CONFIG
from netflow.graph.network import FlowNetwork
from netflow.logging import get_logger
from netflow.types.base import Algorithm, VertexID
from netflow.types.dto import MaxFlowResult

logger = get_logger(__name__)


class IsapState(IntEnum):
    """States of the ISAP walk."""

    ADVANCE = 1
    AUGMENT = 2
    RETREAT = 3
    DONE = 4


class IsapEvent(IntEnum):
    """Outcomes reported by a state handler."""

    ADVANCED = 1
    REACHED_SINK = 2
    BLOCKED = 3
    SOURCE_EXHAUSTED = 4
    AUGMENTED = 5
    RELABELED = 6
    GAP_FOUND = 7


#: Allowed transitions. A pair missing here is a bug in a handler.
TRANSITIONS: Dict[Tuple[IsapState, IsapEvent], IsapState] = {
    (IsapState.ADVANCE, IsapEvent.ADVANCED): IsapState.ADVANCE,
    (IsapState.ADVANCE, IsapEvent.REACHED_SINK): IsapState.AUGMENT,
    (IsapState.ADVANCE, IsapEvent.BLOCKED): IsapState.RETREAT,
    (IsapState.ADVANCE, IsapEvent.SOURCE_EXHAUSTED): IsapState.DONE,
    (IsapState.AUGMENT, IsapEvent.AUGMENTED): IsapState.ADVANCE,
    (IsapState.RETREAT, IsapEvent.RELABELED): IsapState.ADVANCE,
    (IsapState.RETREAT, IsapEvent.GAP_FOUND): IsapState.DONE,
}


def sink_distance_labels(network: FlowNetwork, tolerance: float) -> List[int]:
    """Exact residual distance from every vertex to the sink.

    Computed by breadth-first search from the sink over reversed residual
    arcs. Vertices that cannot reach the sink get ``vertex_count``.
    """
    n = network.vertex_count
    dist = [n] * n
    dist[network.sink] = 0
    queue = deque([network.sink])
    while queue:
        v = queue.popleft()
        for u in network.residual_predecessors(v, tolerance):
            if dist[u] == n:
                dist[u] = dist[v] + 1
                queue.append(u)
    return dist


class IsapSearch:
    """Mutable state of one ISAP run over a ``FlowNetwork``.

    Attributes:
        dist: Distance label per vertex; ``vertex_count`` means cut off.
        gap: ``gap[d]`` is the number of vertices labelled ``d``.
        current: Current-arc index per vertex; arcs to lower indices are
            known to be inadmissible until the vertex is relabelled.
        walk: Vertices from the source to the walk's tip.
        state: State to execute on the next ``step()``.
    """

    def __init__(self, network: FlowNetwork, tolerance: Optional[float] = None):
        self.network = network
        self.tolerance = FLOW_CONFIG.resolve_tolerance(tolerance)
        self.n = network.vertex_count
        self.dist = sink_distance_labels(network, self.tolerance)
        self.gap = [0] * (self.n + 1)
        for d in self.dist:
            self.gap[d] += 1
        self.current = [0] * self.n
        self.walk: List[VertexID] = [network.source]
        self.state = IsapState.ADVANCE

        self.flow_value = 0.0
        self.steps = 0
        self.augmentations = 0
        self.relabels = 0
        self.gap_exit = False

        self._handlers: Dict[IsapState, Callable[[], IsapEvent]] = {
            IsapState.ADVANCE: self.advance,
            IsapState.AUGMENT: self.augment,
            IsapState.RETREAT: self.retreat,
        }

    @property
    def tip(self) -> VertexID:
        """Vertex at the end of the current walk."""
        return self.walk[-1]

    def advance(self) -> IsapEvent:
        source = self.network.source
        if self.dist[source] >= self.n:
            return IsapEvent.SOURCE_EXHAUSTED

        u = self.tip
        start = self.current[u]
        for v in self.network.residual_neighbors(u, self.tolerance):
            if v < start or self.dist[u] != self.dist[v] + 1:
                continue
            self.current[u] = v
            self.walk.append(v)
            if v == self.network.sink:
                return IsapEvent.REACHED_SINK
            return IsapEvent.ADVANCED
        return IsapEvent.BLOCKED

    def augment(self) -> IsapEvent:
        bottleneck = path_bottleneck(self.network, self.walk)
        augment_path(self.network, self.walk, bottleneck)
        logger.debug("Augmented %s along %s", bottleneck, self.walk)
        self.flow_value += bottleneck
        self.augmentations += 1
        self.walk = [self.network.source]
        return IsapEvent.AUGMENTED

    def retreat(self) -> IsapEvent:
        u = self.tip
        old = self.dist[u]
        self.gap[old] -= 1
        if self.gap[old] == 0 and old < self.n:
            logger.debug("Distance bucket %d emptied at vertex %d", old, u)
            self.gap_exit = True
            return IsapEvent.GAP_FOUND

        neighbors = self.network.residual_neighbors(u, self.tolerance)
        new = min((self.dist[v] + 1 for v in neighbors), default=self.n)
        self.dist[u] = min(new, self.n)
        self.gap[self.dist[u]] += 1
        self.current[u] = 0
        self.relabels += 1

        if u != self.network.source:
            self.walk.pop()
        return IsapEvent.RELABELED

    def step(self) -> IsapState:
        """Run the handler of the current state and apply its transition."""
        if self.state is IsapState.DONE:
            return self.state
        self.steps += 1
        event = self._handlers[self.state]()
        self.state = TRANSITIONS[(self.state, event)]
        return self.state

    def run(self) -> float:
        """Step until ``DONE`` and return the total flow pushed."""
        while self.step() is not IsapState.DONE:
            pass
        return self.flow_value


def isap(network: FlowNetwork, *, tolerance: Optional[float] = None) -> MaxFlowResult:
    """Compute max flow with ISAP.

    Args:
        network: The network to solve; its flow is reset and then holds the
            maximum flow afterwards.
        tolerance: Residual threshold; defaults to ``FLOW_CONFIG.tolerance``.

    Returns:
        MaxFlowResult: Flow value, min cut, per-edge flows and counters
        (``augmentations``, ``relabels``, ``gap_exit``). ``iterations`` is the
        number of state-machine steps.
    """
    network.reset_flow()
    logger.debug("Running %s on %r", Algorithm.ISAP.label, network)

    search = IsapSearch(network, tolerance)
    max_flow = search.run()

    return build_max_flow_result(
        network,
        max_flow,
        iterations=search.steps,
        algorithm=Algorithm.ISAP,
        stats={
            "augmentations": search.augmentations,
            "relabels": search.relabels,
            "gap_exit": int(search.gap_exit),
        },
        tolerance=search.tolerance,
    )
