from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RunLogPaths:
    run_id: str
    jsonl_path: Path


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_run_id() -> str:
    return _utcnow().strftime("%Y%m%dT%H%M%S%fZ")


def init_run_log(log_dir: Path, run_id: str) -> RunLogPaths:
    log_dir.mkdir(parents=True, exist_ok=True)
    return RunLogPaths(run_id=run_id, jsonl_path=log_dir / f"run_{run_id}.jsonl")


def append_event(paths: RunLogPaths, event: str, **fields: Any) -> dict[str, Any]:
    """
    Append one JSON line describing an exchange.

    Callers pass metadata only (command, model, sizes, timings, error text);
    prompts, answers and API keys are not written.
    """
    payload: dict[str, Any] = {
        "ts": _utcnow().isoformat(),
        "run_id": paths.run_id,
        "event": event,
    }
    payload.update(fields)
    with paths.jsonl_path.open("a", encoding="utf-8", newline="\n") as f:
        f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    return payload
