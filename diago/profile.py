"""
profile.py

Ties the symbol resolver, the sample extractor and the tree builder together.
Everything is derived again from the decoded profile on each call; nothing is
kept between rebuilds except what `Profile` holds for its own profile.
"""

import logging
from typing import List

from .samples import extract_samples
from .symbols import SymbolTable
from .tree import FunctionsTree, build_tree
from .types import MeasurementMode, Sample

logger = logging.getLogger(__name__)


class Profile:
    def __init__(self, samples: List[Sample], total: int, capture_duration: int, profile_type: str, mode: MeasurementMode):
        self.samples = samples
        self.total = total
        self.capture_duration = capture_duration
        self.profile_type = profile_type
        self.mode = mode

    @classmethod
    def from_pprof(cls, decoded, mode: MeasurementMode = MeasurementMode.DEFAULT) -> "Profile":
        """Resolve symbols and extract samples; raises ProfileError on unusable input."""
        symbols = SymbolTable.from_profile(decoded)
        extraction = extract_samples(decoded, symbols, mode)
        logger.debug(
            "extracted %d samples from a %s profile, column %d, total %d",
            len(extraction.samples),
            extraction.profile_type,
            extraction.column,
            extraction.total,
        )
        return cls(
            samples=extraction.samples,
            total=extraction.total,
            capture_duration=decoded.duration_nanos,
            profile_type=extraction.profile_type,
            mode=mode,
        )

    def build_tree(self, name: str = "", aggregate_by_function: bool = True, search: str = "") -> FunctionsTree:
        return build_tree(self.samples, name, aggregate_by_function, search)


def build_functions_tree(
    decoded,
    mode: MeasurementMode = MeasurementMode.DEFAULT,
    aggregate_by_function: bool = True,
    search: str = "",
    name: str = "",
) -> FunctionsTree:
    return Profile.from_pprof(decoded, mode).build_tree(name, aggregate_by_function, search)
