"""
Data types shared by the symbol resolver, the sample extractor and the tree.
"""

import enum
import os
from dataclasses import dataclass, field
from typing import List

INLINED_PREFIX = "(inlined) "


class MeasurementMode(enum.Enum):
    DEFAULT = "default"
    CPU = "cpu"
    HEAP_ALLOC = "heap-alloc"
    HEAP_INUSE = "heap-inuse"


@dataclass
class Function:
    name: str = ""
    file: str = ""
    line_number: int = 0
    self_value: int = 0

    def key(self, line_number: bool) -> tuple:
        """Identity used to merge tree nodes; the line only counts at line granularity."""
        if line_number:
            return (self.name, self.file, self.line_number)
        return (self.name, self.file)

    def label(self, line_number: bool) -> str:
        """Display text: name and the base name of the file, plus the line at line granularity."""
        location = os.path.basename(self.file)
        if line_number:
            location = f"{location}:{self.line_number}"
        return f"{self.name} {location}"


@dataclass
class Sample:
    functions: List[Function] = field(default_factory=list)
    value: int = 0
    percent_total: float = 0.0
