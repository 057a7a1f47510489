"""
symbols.py

Lookup tables built from the flat, index-referenced arrays of a decoded pprof
profile: strings by index, functions by id, and locations by id. A location
expands to one frame per line record so that inlined calls show up as their
own frames.
"""

import logging
from dataclasses import replace
from typing import Dict, Tuple

from .types import INLINED_PREFIX, Function

logger = logging.getLogger(__name__)


class SymbolTable:
    def __init__(self, strings, functions: Dict[int, Function], locations: Dict[int, Tuple[Function, ...]]):
        self.strings = strings
        self.functions = functions
        self.locations = locations

    @classmethod
    def from_profile(cls, profile) -> "SymbolTable":
        strings = list(profile.string_table)
        functions = build_functions(profile, strings)
        locations = build_locations(profile, functions)
        return cls(strings, functions, locations)

    def string(self, index: int) -> str:
        return lookup_string(self.strings, index)

    def frames(self, location_id: int) -> Tuple[Function, ...]:
        """Frames of a location, caller first; empty for unknown or skipped locations."""
        return self.locations.get(location_id, ())


def lookup_string(strings, index: int) -> str:
    if 0 <= index < len(strings):
        return strings[index]
    logger.debug("string index %d out of range (table has %d entries)", index, len(strings))
    return ""


def build_functions(profile, strings) -> Dict[int, Function]:
    functions = {}
    for fn in profile.function:
        functions[fn.id] = Function(
            name=lookup_string(strings, fn.name),
            file=lookup_string(strings, fn.filename),
        )
    return functions


def build_locations(profile, functions: Dict[int, Function]) -> Dict[int, Tuple[Function, ...]]:
    """
    Map every usable location id to its frames.

    The last line record of a location is the real frame; the ones before it
    were inlined into it, the first being the innermost. Only the real frame
    updates the canonical line number stored in `functions`.
    """
    locations = {}
    inlined = 0
    for location in profile.location:
        lines = list(location.line)
        if not lines or not lines[0].function_id:
            logger.debug("skipping location %d: no usable line record", location.id)
            continue
        if len(lines) > 1:
            inlined += 1
            logger.debug("location %d carries %d inlined frames", location.id, len(lines) - 1)

        frames = []
        last = len(lines) - 1
        for i in range(last, -1, -1):
            line = lines[i]
            fn = functions.get(line.function_id)
            if fn is None:
                logger.debug("location %d references unknown function %d", location.id, line.function_id)
                fn = Function()
            frame = replace(fn, line_number=line.line, self_value=0)
            if i == last:
                if line.function_id in functions:
                    functions[line.function_id] = replace(fn, line_number=line.line)
            else:
                frame.name = INLINED_PREFIX + frame.name
            frames.append(frame)
        locations[location.id] = tuple(frames)

    if inlined:
        logger.warning("%d locations carry inlined frames, showing them as separate calls", inlined)
    return locations
