from __future__ import annotations

import hashlib
from pathlib import PurePosixPath
from typing import Optional

from common.config import AnalysisConfig, yaml_config
from common.logger import get_logger
from extraction.dispatcher import extract_text, resolve_format_hint
from extraction.document_models import AnalysisReport, RawDocument
from extraction.errors import DocumentTooLargeError, RejectedUploadError
from extraction.tokenizer import count_words
from similarity.shingles import score_similarity

log = get_logger(__name__)


def validate_upload(
    filename: str,
    media_type: Optional[str] = None,
    size: int = 0,
    config: AnalysisConfig | None = None,
) -> None:
    """
    Refuse documents whose extension or declared media type is not accepted,
    or whose size exceeds the configured maximum.
    """
    cfg = (config or yaml_config).extraction
    ext = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    mime = (media_type or "").lower()

    if ext not in cfg.allowed_extensions or (mime and mime not in cfg.allowed_media_types):
        raise RejectedUploadError(
            "Unsupported file type",
            {"filename": filename, "mimetype": mime},
        )
    if size > cfg.max_upload_bytes:
        raise DocumentTooLargeError(size, cfg.max_upload_bytes, filename)


def build_raw_document(
    data: bytes, filename: str, media_type: Optional[str] = None
) -> RawDocument:
    return RawDocument(
        data=bytes(data),
        format_hint=resolve_format_hint(filename, media_type),
        filename=filename,
        media_type=(media_type or "").lower(),
    )


def analyze_document(
    data: bytes,
    filename: str,
    media_type: Optional[str] = None,
    strict: bool = False,
    config: AnalysisConfig | None = None,
) -> AnalysisReport:
    """
    Extract, count and score one document.

    With strict=True the upload gate runs first (extension, media type, size).
    Extraction errors propagate to the caller.
    """
    cfg = config or yaml_config
    if strict:
        validate_upload(filename, media_type, len(data), cfg)

    doc = build_raw_document(data, filename, media_type)
    extracted = extract_text(doc.data, doc.format_hint)
    similarity = score_similarity(
        extracted.text,
        shingle_size=cfg.scoring.shingle_size,
        min_tokens=cfg.scoring.min_tokens,
    )
    report = AnalysisReport(
        filename=doc.filename,
        mimetype=doc.media_type,
        size=len(doc.data),
        word_count=count_words(extracted.text),
        note=extracted.note,
        similarity=similarity,
        snippet=extracted.text[: cfg.report.snippet_length],
        content_sha1=hashlib.sha1(doc.data).hexdigest(),
    )
    log.info(
        "Analyzed %s: %d words, repetition %d%% (%s)",
        filename, report.word_count, similarity.score, similarity.detail,
    )
    return report
