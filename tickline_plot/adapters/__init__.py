from .normalize import coerce_xy_pairs, normalize_xy

__all__ = ["coerce_xy_pairs", "normalize_xy"]
