"""
samples.py

Turns the raw samples of a decoded profile into call stacks ordered from root
to leaf, each carrying the value of the column selected by the measurement mode
and its share of the total.
"""

import logging
from dataclasses import dataclass, replace
from typing import List

from .errors import ModeMismatchError, UnsupportedProfileError
from .symbols import SymbolTable
from .types import MeasurementMode, Sample

logger = logging.getLogger(__name__)

PROFILE_TYPES = ("cpu", "space")

# (period type, mode) -> index in each sample's value array
VALUE_COLUMNS = {
    ("cpu", MeasurementMode.DEFAULT): 1,
    ("cpu", MeasurementMode.CPU): 1,
    ("space", MeasurementMode.DEFAULT): 1,
    ("space", MeasurementMode.HEAP_ALLOC): 1,
    ("space", MeasurementMode.HEAP_INUSE): 3,
}


@dataclass
class Extraction:
    samples: List[Sample]
    total: int
    profile_type: str
    column: int


def profile_type(profile, symbols: SymbolTable) -> str:
    return symbols.string(profile.period_type.type)


def value_column(kind: str, mode: MeasurementMode) -> int:
    """Column of the value array holding `mode` for a profile of period type `kind`."""
    if kind not in PROFILE_TYPES:
        raise UnsupportedProfileError(f"unsupported profile type {kind!r}, only cpu and heap profiles are supported")
    column = VALUE_COLUMNS.get((kind, mode))
    if column is None:
        raise ModeMismatchError(f"mode {mode.value!r} cannot be used with a {kind!r} profile")
    return column


def extract_samples(profile, symbols: SymbolTable, mode: MeasurementMode = MeasurementMode.DEFAULT) -> Extraction:
    kind = profile_type(profile, symbols)
    column = value_column(kind, mode)

    samples = []
    short = 0
    for raw in profile.sample:
        values = raw.value
        if column < len(values):
            value = values[column]
        else:
            short += 1
            value = 0

        sample = Sample(value=value)
        # location ids are stored leaf first
        for location_id in reversed(raw.location_id):
            sample.functions.extend(symbols.frames(location_id))
        # frames are shared with the location table, only the leaf gets its own copy
        if sample.functions:
            sample.functions[-1] = replace(sample.functions[-1], self_value=value)
        samples.append(sample)

    if short:
        logger.debug("%d samples have no value in column %d, counted as 0", short, column)

    total = sum(s.value for s in samples)
    for s in samples:
        s.percent_total = s.value / total * 100.0 if total else 0.0

    return Extraction(samples=samples, total=total, profile_type=kind, column=column)
