# encodingman/config.py

from __future__ import annotations
import json
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from .convert import TARGET_ENCODINGS
from .errors import ConfigError


@dataclass(frozen=True)
class PipelineConfig:
    """Settings passed explicitly into the pipeline and batch runner.

    ``confidence_threshold`` never blocks a conversion; outcomes below it are
    only flagged ``low_confidence`` so a caller can ask for confirmation.
    """
    confidence_threshold: float = 0.75
    preview_lines: int = 10
    target_encoding: str = "utf-8-bom"

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ConfigError(
                f"confidence_threshold must be within [0, 1], got {self.confidence_threshold}"
            )
        if self.preview_lines < 0:
            raise ConfigError(f"preview_lines must be >= 0, got {self.preview_lines}")
        if self.target_encoding not in TARGET_ENCODINGS:
            raise ConfigError(
                f"Unsupported target_encoding {self.target_encoding!r} "
                f"(supported: {', '.join(TARGET_ENCODINGS)})"
            )

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "PipelineConfig":
        """Build a config from a JSON-style mapping, ignoring unknown keys.

        Raises:
            ConfigError: If a known key has the wrong type or range.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in cfg.items():
            if key not in known or value is None:
                continue
            values[key] = value

        try:
            if "confidence_threshold" in values:
                values["confidence_threshold"] = float(values["confidence_threshold"])
            if "preview_lines" in values:
                if isinstance(values["preview_lines"], bool):
                    raise TypeError("preview_lines must be an integer")
                values["preview_lines"] = int(values["preview_lines"])
            if "target_encoding" in values:
                values["target_encoding"] = str(values["target_encoding"]).lower()
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid configuration value: {exc}") from exc
        return cls(**values)


def load_config(path: Path | None) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path (Path | None): Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Configuration dictionary. Empty if no file is provided or read fails.
    """
    if not path:
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        print(f"[WARN] Failed to read config {path}: {exc}", file=sys.stderr)
        return {}
    if not isinstance(data, dict):
        print(f"[WARN] Ignoring config {path}: top level must be a JSON object", file=sys.stderr)
        return {}
    return data
