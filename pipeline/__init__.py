"""Pipeline module - orchestrates document classification and comparison."""
from pipeline.compare_documents import (
    compare_documents,
    compare_files,
    ComparisonEngine,
    ComparisonState,
    EngineConfig,
)

__all__ = [
    "compare_documents",
    "compare_files",
    "ComparisonEngine",
    "ComparisonState",
    "EngineConfig",
]
