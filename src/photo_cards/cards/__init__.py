"""
Module: cards

Purpose:
    Card collection editing: slot assignment, auto-fill and the
    workspace that holds the library and cards between edits.

Key Functions:
    - auto_fill(): Fill empty slots from unplaced library images

Key Classes:
    - Workspace: Thread-safe state holder
    - WorkspaceState: Immutable snapshot
    - AutoFillResult: Auto-fill outcome

Used By:
    - controller: Export pipeline
"""

from .autofill import AutoFillResult, auto_fill, unplaced_images, used_image_ids
from .workspace import Workspace, WorkspaceState

__all__ = [
    "AutoFillResult",
    "auto_fill",
    "unplaced_images",
    "used_image_ids",
    "Workspace",
    "WorkspaceState",
]
