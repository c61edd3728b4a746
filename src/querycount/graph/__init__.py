from .skeleton import Skeleton, Edge, UNLABELED, DEFAULT_EDGE_LABEL
from .isomorphism import are_isomorphic, find_isomorphism

__all__ = [
    "Skeleton",
    "Edge",
    "UNLABELED",
    "DEFAULT_EDGE_LABEL",
    "are_isomorphic",
    "find_isomorphism",
]
