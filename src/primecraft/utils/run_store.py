"""Recorded generation runs.

A run keeps one generation request, the generator configuration it ran
with and its outcome, so past prime sets can be listed, reloaded or pruned.

Directory Structure:
    output/
        runs/
            YYYYMMDD_HHMMSS_<strategy>_<count>x<bits>/
                run.json       # RunRecord: request, configuration, status
                result.json    # PrimeSetResult of a completed run
                run.log        # generation log written by the CLI
"""

from __future__ import annotations

import json
import shutil
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from primecraft.config import GeneratorConfig

if TYPE_CHECKING:
    from primecraft.generation.api import PrimeSetResult

RUN_FILE = "run.json"
RESULT_FILE = "result.json"
LOG_FILE = "run.log"

RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"


@dataclass(frozen=True)
class GenerationRequest:
    """The ``(count, bit_length, strategy)`` triple a run answered."""
    count: int
    bit_length: int
    strategy: str
    seed: int | None = None

    @property
    def label(self) -> str:
        return f"{self.count}x{self.bit_length}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'GenerationRequest':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass
class RunRecord:
    """State of one recorded run.

    ``attempts`` is filled for completed runs and for runs that ran out of
    attempt budget; ``strength`` only for completed runs.
    """
    run_id: str
    request: GenerationRequest
    generator: dict[str, Any]
    started_at: str
    status: str = RUNNING
    finished_at: str | None = None
    attempts: int | None = None
    strength: str | None = None
    error: str | None = None

    @property
    def summary(self) -> str:
        if self.status == COMPLETED:
            return f"{self.request.label} {self.strength}, {self.attempts} attempts"
        if self.status == FAILED:
            return self.error or "failed"
        return self.request.label

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'RunRecord':
        fields = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        fields["request"] = GenerationRequest.from_dict(fields["request"])
        return cls(**fields)


class RunStore:
    """Timestamped run directories under ``<base_dir>/runs``."""

    def __init__(self, base_dir: Path | str | None = None):
        self.base_dir = Path(base_dir) if base_dir is not None else Path("output")
        self.runs_dir = self.base_dir / "runs"
        self.runs_dir.mkdir(parents=True, exist_ok=True)

    def run_dir(self, run_id: str) -> Path:
        return self.runs_dir / run_id

    def log_path(self, record: RunRecord) -> Path:
        return self.run_dir(record.run_id) / LOG_FILE

    def _write(self, record: RunRecord) -> None:
        with open(self.run_dir(record.run_id) / RUN_FILE, "w") as f:
            json.dump(record.to_dict(), f, indent=2)

    def start(self, request: GenerationRequest, config: GeneratorConfig) -> RunRecord:
        """Create the run directory and record the request as running."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_id = f"{timestamp}_{request.strategy}_{request.label}"

        # Same second, same request: disambiguate
        run_id = base_id
        suffix = 1
        while self.run_dir(run_id).exists():
            suffix += 1
            run_id = f"{base_id}_{suffix}"
        self.run_dir(run_id).mkdir(parents=True)

        record = RunRecord(
            run_id=run_id,
            request=request,
            generator=config.to_dict(),
            started_at=datetime.now().isoformat(),
        )
        self._write(record)
        return record

    def complete(self, record: RunRecord, result: PrimeSetResult) -> RunRecord:
        """Store ``result`` and mark the run completed."""
        with open(self.run_dir(record.run_id) / RESULT_FILE, "w") as f:
            f.write(result.to_json())

        record.status = COMPLETED
        record.finished_at = datetime.now().isoformat()
        record.attempts = result.metadata.attempts
        record.strength = result.properties.strength
        self._write(record)
        return record

    def fail(self, record: RunRecord, error: Exception) -> RunRecord:
        """Mark the run failed, keeping the error message and attempts spent."""
        record.status = FAILED
        record.finished_at = datetime.now().isoformat()
        record.attempts = getattr(error, "attempts", None)
        record.error = str(error)
        self._write(record)
        return record

    def load(self, run_id: str) -> RunRecord | None:
        """Read a run record, or None if ``run_id`` is not a recorded run."""
        path = self.run_dir(run_id) / RUN_FILE
        if not path.exists():
            return None
        with open(path) as f:
            return RunRecord.from_dict(json.load(f))

    def load_result(self, run_id: str) -> dict[str, Any] | None:
        path = self.run_dir(run_id) / RESULT_FILE
        if not path.exists():
            return None
        with open(path) as f:
            return json.load(f)

    def list_runs(self, strategy: str | None = None, limit: int = 20) -> list[RunRecord]:
        """Recorded runs, most recent first."""
        records: list[RunRecord] = []

        # directory names start with the timestamp
        for run_dir in sorted(self.runs_dir.iterdir(), reverse=True):
            if not run_dir.is_dir():
                continue
            record = self.load(run_dir.name)
            if record is None:
                continue
            if strategy and record.request.strategy != strategy:
                continue

            records.append(record)
            if len(records) >= limit:
                break

        return records

    def latest(self, strategy: str | None = None) -> RunRecord | None:
        records = self.list_runs(strategy=strategy, limit=1)
        return records[0] if records else None

    def prune(
        self,
        keep: int = 10,
        strategy: str | None = None,
        dry_run: bool = True,
    ) -> list[str]:
        """Delete all but the ``keep`` most recent runs.

        Returns:
            IDs of the runs that were (or, with ``dry_run``, would be) deleted.
        """
        stale = self.list_runs(strategy=strategy, limit=1000)[keep:]

        deleted = []
        for record in stale:
            if not dry_run:
                shutil.rmtree(self.run_dir(record.run_id))
            deleted.append(record.run_id)

        return deleted
