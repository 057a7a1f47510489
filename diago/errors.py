"""
Failures that stop a profile from being turned into a tree.
"""

from typing import Optional


class ProfileError(Exception):
    """A fatal problem with a profile, reported as a kind plus a message."""

    kind = "profile"

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class UnsupportedProfileError(ProfileError):
    kind = "unsupported-profile"


class ModeMismatchError(ProfileError):
    kind = "mode-mismatch"
