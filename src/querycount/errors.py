"""Error taxonomy for plan loading, skeleton building and count aggregation."""
from __future__ import annotations

from typing import Optional


class QueryCountError(Exception):
    """Base class for every error raised by querycount."""


class MalformedPlan(QueryCountError):
    """The plan cannot be turned into skeletons.

    Raised for out-of-range node or edge indices, a child whose vertex count
    does not extend its parent's by zero or one vertex, a node reached twice
    as a destination, or an unparseable plan description.
    """

    def __init__(
        self,
        message: str,
        *,
        node_id: Optional[int] = None,
        edge_id: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.edge_id = edge_id


class InvalidVertex(QueryCountError):
    """A vertex index is not smaller than the skeleton's vertex count."""

    def __init__(
        self,
        vertex: int,
        num_vertices: int,
        *,
        edge_id: Optional[int] = None,
    ) -> None:
        where = f" (plan edge {edge_id})" if edge_id is not None else ""
        super().__init__(
            f"vertex {vertex} out of range for skeleton with "
            f"{num_vertices} vertices{where}"
        )
        self.vertex = vertex
        self.num_vertices = num_vertices
        self.edge_id = edge_id


class UnreachableNode(QueryCountError):
    """A count record references a node with no built skeleton."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"plan node {node_id} was not reached from the root")
        self.node_id = node_id


class SizeMismatch(QueryCountError):
    """A label assignment's length differs from the node's vertex count."""

    def __init__(self, node_id: Optional[int], expected: int, actual: int) -> None:
        where = f"node {node_id}: " if node_id is not None else ""
        super().__init__(
            f"{where}expected {expected} labels, got {actual}"
        )
        self.node_id = node_id
        self.expected = expected
        self.actual = actual


class CountFormatError(QueryCountError):
    """The raw count stream cannot be parsed."""

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
