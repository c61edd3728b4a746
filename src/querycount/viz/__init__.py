from .draw import draw_pattern_classes

__all__ = ["draw_pattern_classes"]
