from .model import Plan, PlanNode, PlanEdge, Operation
from .builder import build_skeletons, labeled_instance, seed_skeleton

__all__ = [
    "Plan",
    "PlanNode",
    "PlanEdge",
    "Operation",
    "build_skeletons",
    "labeled_instance",
    "seed_skeleton",
]
