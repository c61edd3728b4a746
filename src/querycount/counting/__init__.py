from .index import CanonicalIndex, IsoClass, structural_digest
from .aggregate import RawCountRecord, DroppedRecord, CountResult, count_labeled_queries

__all__ = [
    "CanonicalIndex",
    "IsoClass",
    "structural_digest",
    "RawCountRecord",
    "DroppedRecord",
    "CountResult",
    "count_labeled_queries",
]
