# encodingman/scorer.py

"""
Encoding inference: BOM fast path, then heuristic scoring of every candidate.

Each candidate decodes the full byte sequence with U+FFFD substitution and
is scored on four cheap signals (replacements, control characters,
recognized-script characters, decoder errors). The weights live in
``ScoreWeights`` so the formula stays explicit and testable.
"""
from __future__ import annotations
import unicodedata
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .candidates import Candidate
from .model import DetectionResult, EncodingScore

REPLACEMENT_CHAR = "\ufffd"

ScriptPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class ScoreWeights:
    replacement: float = 0.4
    valid: float = 0.2
    script: float = 0.3
    base: float = 0.1
    error_penalty: float = 0.3


DEFAULT_WEIGHTS = ScoreWeights()

# Hiragana, Katakana, CJK ideographs and the full/halfwidth and punctuation blocks.
_SCRIPT_RANGES = (
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # CJK Extension A
    (0xF900, 0xFAFF),  # CJK Compatibility Ideographs
    (0xFF00, 0xFFEF),  # Halfwidth/Fullwidth forms
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
)

_ALLOWED_CONTROLS = frozenset("\n\r\t")


def is_recognized_script(ch: str) -> bool:
    cp = ord(ch)
    return any(lo <= cp <= hi for lo, hi in _SCRIPT_RANGES)


def _is_control(ch: str) -> bool:
    return ch not in _ALLOWED_CONTROLS and unicodedata.category(ch) == "Cc"


def _decode(data: bytes, candidate: Candidate) -> Tuple[str, bool]:
    """Decode lossily, also reporting whether strict decoding would fail."""
    try:
        return candidate.decode(data), False
    except UnicodeDecodeError:
        return candidate.decode(data, errors="replace"), True


# --- BOM fast path --------------------------------------------------------------


def detect_bom(data: bytes) -> Optional[DetectionResult]:
    """Identify the encoding from a leading byte-order mark, if any."""
    if data.startswith(b"\xEF\xBB\xBF"):
        return DetectionResult(Candidate.UTF_8.label, 1.0, "bom")
    if data.startswith(b"\xFF\xFE"):
        return DetectionResult(Candidate.UTF_16LE.label, 1.0, "bom")
    if data.startswith(b"\xFE\xFF"):
        return DetectionResult(Candidate.UTF_16BE.label, 1.0, "bom")
    return None


def is_already_utf8(data: bytes) -> bool:
    """True if ``data`` (minus an optional UTF-8 BOM) is valid UTF-8."""
    if data.startswith(b"\xEF\xBB\xBF"):
        data = data[3:]
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


# --- scoring --------------------------------------------------------------------


def score_candidate(
    data: bytes,
    candidate: Candidate,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    script_predicate: ScriptPredicate = is_recognized_script,
) -> EncodingScore:
    """Score how well ``candidate`` explains ``data``.

    Args:
        data (bytes): Raw file content.
        candidate (Candidate): Encoding hypothesis.
        weights (ScoreWeights): Formula constants.
        script_predicate (ScriptPredicate): Which characters count as
            recognized script. Defaults to the Japanese ranges.

    Returns:
        EncodingScore: Score and the counts it was computed from.
    """
    text, had_errors = _decode(data, candidate)

    total = len(text)
    if total == 0:
        return EncodingScore(candidate.label, 0.0, 0, 0, 0, 0, had_errors)

    replacements = script = control = 0
    for ch in text:
        if ch == REPLACEMENT_CHAR:
            replacements += 1
        if script_predicate(ch):
            script += 1
        if _is_control(ch):
            control += 1

    replacement_ratio = replacements / total
    valid_ratio = (total - control) / total
    script_ratio = script / total
    penalty = weights.error_penalty if had_errors else 0.0

    score = (
        (1.0 - replacement_ratio) * weights.replacement
        + valid_ratio * weights.valid
        + script_ratio * weights.script
        + weights.base
        - penalty
    )
    return EncodingScore(
        encoding=candidate.label,
        score=max(0.0, score),
        replacement_count=replacements,
        script_char_count=script,
        control_count=control,
        total_chars=total,
        had_errors=had_errors,
    )


def score_all(
    data: bytes,
    candidates: Iterable[Candidate] = tuple(Candidate),
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    script_predicate: ScriptPredicate = is_recognized_script,
) -> List[EncodingScore]:
    """Score every candidate, best first. Ties keep candidate order."""
    scores = [score_candidate(data, c, weights, script_predicate) for c in candidates]
    return sorted(scores, key=lambda s: s.score, reverse=True)


def best(
    data: bytes,
    candidates: Iterable[Candidate] = tuple(Candidate),
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    script_predicate: ScriptPredicate = is_recognized_script,
) -> EncodingScore:
    """Return the top-ranked score, or a zero-score UTF-8 result if none."""
    scores = score_all(data, candidates, weights, script_predicate)
    if not scores:
        return EncodingScore(Candidate.UTF_8.label, 0.0, 0, 0, 0, 0)
    return scores[0]


def detect(data: bytes, weights: ScoreWeights = DEFAULT_WEIGHTS) -> DetectionResult:
    """Pick the most likely encoding of ``data``.

    A BOM decides immediately with confidence 1.0; otherwise the best
    score is used as the confidence.
    """
    by_bom = detect_bom(data)
    if by_bom is not None:
        return by_bom
    top = best(data, weights=weights)
    return DetectionResult(top.encoding, min(1.0, top.score), "score")
