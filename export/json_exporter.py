"""Export comparison outcomes as JSON."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from comparison.models import ComparisonOutcome, outcome_kind
from utils.logging import logger


def build_payload(outcome: ComparisonOutcome) -> dict:
    """JSON-serializable dict for any comparison outcome."""
    payload = {
        "outcome": outcome_kind(outcome),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    payload.update(outcome.to_dict())
    return payload


def export_json(outcome: ComparisonOutcome, output_path: str | Path) -> Path:
    """
    Write a comparison outcome to ``output_path`` as UTF-8 JSON.

    Parent directories are created as needed.
    """
    output = Path(output_path)
    logger.info("Writing JSON comparison to %s", output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(build_payload(outcome), indent=2, ensure_ascii=False), encoding="utf-8")
    return output
