"""src/popyramid/common/config.py"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml


def _as_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


@dataclass(frozen=True)
class AppConfig:
    """Config wrapper with project-root relative paths."""

    raw: Dict[str, Any]
    config_path: Path

    @property
    def project_root(self) -> Path:
        # configs/config.yaml -> project root is parent of "configs"
        return self.config_path.parent.parent.resolve()

    @property
    def logging(self) -> Dict[str, Any]:
        return self.raw.get("logging", {}) or {}

    @property
    def ingest(self) -> Dict[str, Any]:
        return self.raw.get("ingest", {}) or {}

    @property
    def aggregation(self) -> Dict[str, Any]:
        return self.raw.get("aggregation", {}) or {}

    @property
    def max_age(self) -> int:
        return int(self.aggregation.get("max_age", 100))

    @property
    def presets(self) -> Dict[str, List[str]]:
        return dict(self.aggregation.get("presets", {}) or {})


def default_config() -> AppConfig:
    """Config used when no YAML file is available (library defaults only)."""
    return AppConfig(raw={}, config_path=Path.cwd() / "configs" / "config.yaml")


def load_config(config_path: str | Path) -> AppConfig:
    config_path = _as_path(config_path).resolve()
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return AppConfig(raw=raw, config_path=config_path)


DEFAULT_STAGE_PROGRESS: Dict[str, int] = {
    "idle": 0,
    "reading": 20,
    "detecting": 40,
    "validating": 60,
    "building": 80,
    "done": 100,
}


@dataclass(frozen=True)
class IngestSettings:
    """Knobs for a single file ingestion run (the `ingest` config section)."""

    csv_encoding: str = "utf-8-sig"
    csv_delimiters: tuple[str, ...] = (",", ";", "\t")
    stage_progress: tuple[tuple[str, int], ...] = tuple(DEFAULT_STAGE_PROGRESS.items())

    def __post_init__(self) -> None:
        values = [self.progress_for(stage) for stage in DEFAULT_STAGE_PROGRESS]
        if any(b < a for a, b in zip(values, values[1:])):
            order = ", ".join(f"{s}={v}" for s, v in zip(DEFAULT_STAGE_PROGRESS, values))
            raise ValueError(f"ingest.stage_progress must not decrease along the stages: {order}")

    def progress_for(self, stage: str) -> int:
        return dict(self.stage_progress).get(stage, DEFAULT_STAGE_PROGRESS.get(stage, 0))

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "IngestSettings":
        section = cfg.ingest
        progress = dict(DEFAULT_STAGE_PROGRESS)
        progress.update({str(k): int(v) for k, v in (section.get("stage_progress") or {}).items()})
        delimiters = section.get("csv_delimiters") or cls.csv_delimiters
        return cls(
            csv_encoding=str(section.get("csv_encoding", cls.csv_encoding)),
            csv_delimiters=tuple(str(d) for d in delimiters),
            stage_progress=tuple(progress.items()),
        )
