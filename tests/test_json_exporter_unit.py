from __future__ import annotations

import json

from comparison.models import EmptyInputSignal
from export.json_exporter import build_payload, export_json
from pipeline import compare_documents

PAGE = "The committee approved the annual budget after a long discussion about capital spending."


def test_export_result_json(tmp_path):
    outcome = compare_documents([PAGE], [PAGE.replace("annual", "revised")])
    out = export_json(outcome, tmp_path / "nested" / "result.json")

    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["outcome"] == "result"
    assert data["requires_ocr"] is False
    assert data["changes"]["added"] == 1
    assert data["changes"]["removed"] == 1
    assert "timestamp" in data


def test_build_payload_for_signals():
    ocr = compare_documents([PAGE], ["scan"])
    payload = build_payload(ocr)
    assert payload["outcome"] == "ocr_required"
    assert payload["requires_ocr"] is True
    assert payload["right_analysis"]["file_type"] == "image-based"

    empty = build_payload(EmptyInputSignal(left_is_empty=True, right_is_empty=False))
    assert empty["outcome"] == "empty_input"
    assert empty["left_is_empty"] is True
