"""Base enums and numeric aliases for flow algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple, Union

#: Represents a numeric capacity or flow amount.
Capacity = Union[int, float]

#: Represents numeric per-unit cost on an edge or path.
Cost = Union[int, float]

#: Vertex identifier: an integer index in ``[0, n)``.
VertexID = int

#: Input edge ``(from, to, capacity)`` for a ``FlowNetwork``.
EdgeSpec = Tuple[VertexID, VertexID, Capacity]

#: Input edge ``(from, to, capacity, cost)`` for the min-cost engine.
CostEdgeSpec = Tuple[VertexID, VertexID, Capacity, Cost]


class _NamedEnum(IntEnum):
    """IntEnum that can be parsed from a case-insensitive member name."""

    @classmethod
    def from_string(cls, value: str):
        """Parse a string into an enum member.

        Dashes and spaces are accepted in place of underscores, so
        ``"push-relabel"`` and ``"PUSH_RELABEL"`` are equivalent.

        Args:
            value: Case-insensitive member name.

        Returns:
            The corresponding enum member.

        Raises:
            ValueError: If the string doesn't match any enum member.
        """
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(e.name for e in cls)
            raise ValueError(
                f"Invalid {cls.__name__} '{value}'. Valid values are: {valid}"
            ) from None


class Algorithm(_NamedEnum):
    """Max-flow algorithms available on a ``FlowNetwork``."""

    #: Depth-first augmenting paths.
    FORD_FULKERSON = 1
    #: Breadth-first (shortest) augmenting paths.
    EDMONDS_KARP = 2
    #: Preflow with height labels and active-vertex processing.
    PUSH_RELABEL = 3
    #: Distance-labelled shortest augmenting paths with gap optimization.
    ISAP = 4

    @property
    def label(self) -> str:
        """Human-readable name used in logs and reports."""
        return _ALGORITHM_LABELS[self]


_ALGORITHM_LABELS = {
    Algorithm.FORD_FULKERSON: "Ford-Fulkerson (DFS)",
    Algorithm.EDMONDS_KARP: "Edmonds-Karp (BFS)",
    Algorithm.PUSH_RELABEL: "Push-Relabel",
    Algorithm.ISAP: "ISAP",
}


class ActiveVertexPolicy(_NamedEnum):
    """Order in which Push-Relabel selects the next active vertex.

    The policy changes iteration counts but never the resulting max flow.
    """

    #: Linear scan, lowest vertex index first.
    LOWEST_INDEX = 1
    #: First-in first-out in order of activation.
    FIFO = 2
    #: Largest height label first, lowest index on ties.
    HIGHEST_LABEL = 3
