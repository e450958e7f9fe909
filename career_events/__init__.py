"""Top‑level package for the career events platform core.

This package holds the pure computations behind the platform's newsletter
and events pages.  Individual subpackages handle specific concerns:
``analytics`` turns newsletter engagement logs into open and click rates,
and ``calendar_export`` builds "add to calendar" links for registrants.
Neither subpackage performs I/O; callers hand in already-fetched records.

The ``__all__`` variable enumerates the primary public modules for
convenience when using ``from career_events import ...``.
"""

from __future__ import annotations

__all__ = [
    "analytics",
    "calendar_export",
    "settings",
]

# SemVer version of the package
__version__: str = "0.1.0"
