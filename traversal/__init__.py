"""
Traversal Module

Directory walking for the candidate pipeline.

This module provides:
- Pre-order recursive walk below a root directory
- Type flags captured per entry at walk time
- Continue-on-error handling with per-entry diagnostics
- Failure classification for skipped entries
"""

__version__ = "0.1.0"

from .failure_taxonomy import DiagnosticsSummary, FailureKind, classify_error
from .walker import TraversalError, WalkDiagnostic, WalkResult, walk

__all__ = [
    "DiagnosticsSummary",
    "FailureKind",
    "TraversalError",
    "WalkDiagnostic",
    "WalkResult",
    "classify_error",
    "walk",
]
