"""Utility modules for primecraft."""

from primecraft.utils.run_store import (
    GenerationRequest,
    RunRecord,
    RunStore,
)

__all__ = [
    "GenerationRequest",
    "RunRecord",
    "RunStore",
]
