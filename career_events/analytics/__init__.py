"""Newsletter engagement analytics for the career events platform."""

from . import engagement, frame_bridge, scope, stats

__all__ = [
    "engagement",
    "frame_bridge",
    "scope",
    "stats",
]
