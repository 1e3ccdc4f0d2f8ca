"""
Metrics endpoint for observability and monitoring.
"""

from fastapi import APIRouter
from typing import Dict, Any

from cityexplore.core.error_handlers import error_handler
from cityexplore.core.metrics_explore import snapshot_metrics

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("")
async def get_metrics() -> Dict[str, Any]:
    """Search latency percentiles, mirror race outcomes and error counts."""
    metrics = snapshot_metrics()
    metrics["errors"] = error_handler.get_error_statistics()
    return metrics
