"""Export module for comparison outcomes."""
from export.json_exporter import build_payload, export_json

__all__ = ["build_payload", "export_json"]
