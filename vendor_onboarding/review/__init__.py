"""
Review/edit modules.

Modules:
    session  - ReviewSession (edit, commit, discard, save/load)
"""

from .session import ReviewSession

__all__ = ['ReviewSession']
