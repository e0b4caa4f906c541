# encodingman/model.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class RawFile:
    """Bytes read from a path. The file on disk is never written back."""
    path: Path
    data: bytes

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class EncodingScore:
    """Result of scoring one candidate encoding against one byte sequence."""
    encoding: str           # candidate label, e.g. "Shift_JIS"
    score: float            # >= 0.0, practically <= 1.0
    replacement_count: int  # U+FFFD characters after lossy decode
    script_char_count: int  # characters in the recognized-script ranges
    control_count: int      # Cc characters other than \n, \r, \t
    total_chars: int
    had_errors: bool = False


@dataclass(frozen=True)
class DetectionResult:
    """Best encoding guess for a file."""
    encoding: str
    confidence: float  # 1.0 only for BOM matches and manual choices
    method: str        # one of: bom | score | manual


class OutcomeStatus(str, Enum):
    CONVERTED = "converted"
    ALREADY_UTF8 = "already_utf8"
    BINARY = "binary"
    ERROR = "error"


@dataclass
class FileOutcome:
    """Terminal status of one input path."""
    path: Path
    status: OutcomeStatus
    detected_encoding: str = ""
    confidence: float = 0.0
    data: Optional[bytes] = None      # normalized UTF-8 + BOM, converted only
    error: str = ""
    reason: str = ""                  # classifier or detection method
    preview: List[str] = field(default_factory=list)
    low_confidence: bool = False

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def ok(self) -> bool:
        return self.status is not OutcomeStatus.ERROR


@dataclass
class BatchReport:
    """Ordered outcomes for a batch, one per input path."""
    outcomes: List[FileOutcome] = field(default_factory=list)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def converted(self) -> int:
        return self._count(OutcomeStatus.CONVERTED)

    @property
    def already_utf8(self) -> int:
        return self._count(OutcomeStatus.ALREADY_UTF8)

    @property
    def binary(self) -> int:
        return self._count(OutcomeStatus.BINARY)

    @property
    def errors(self) -> int:
        return self._count(OutcomeStatus.ERROR)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def is_consistent(self) -> bool:
        return self.converted + self.already_utf8 + self.binary + self.errors == self.total
