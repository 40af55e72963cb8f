"""Run a blocking analysis off the event loop, bounded by a timeout."""
from __future__ import annotations

import asyncio
from typing import Optional

from analysis.report import analyze_document
from common.config import AnalysisConfig, yaml_config
from common.logger import get_logger
from extraction.document_models import AnalysisReport
from extraction.errors import ExtractionTimeoutError

log = get_logger(__name__)


async def analyze_async(
    data: bytes,
    filename: str,
    media_type: Optional[str] = None,
    strict: bool = False,
    timeout: Optional[float] = None,
    config: AnalysisConfig | None = None,
) -> AnalysisReport:
    """
    Await analyze_document() running in a worker thread.

    Raises ExtractionTimeoutError after `timeout` seconds (default from
    config). If the awaiting task is cancelled, CancelledError propagates and
    the worker's eventual result is dropped.
    """
    cfg = config or yaml_config
    limit = cfg.extraction.timeout_s if timeout is None else timeout
    work = asyncio.to_thread(analyze_document, data, filename, media_type, strict, cfg)
    try:
        return await asyncio.wait_for(work, timeout=limit)
    except asyncio.TimeoutError as e:
        log.error("Analysis of %s timed out after %ss", filename, limit)
        raise ExtractionTimeoutError(limit, filename) from e
