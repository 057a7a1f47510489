"""
Aggregated call trees for pprof CPU and heap profiles.
"""

from .errors import ModeMismatchError, ProfileError, UnsupportedProfileError
from .profile import Profile, build_functions_tree
from .types import Function, MeasurementMode, Sample

__all__ = [
    "Function",
    "MeasurementMode",
    "ModeMismatchError",
    "Profile",
    "ProfileError",
    "Sample",
    "UnsupportedProfileError",
    "build_functions_tree",
]
