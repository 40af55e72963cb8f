from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RawDocument:
    data: bytes  # uploaded buffer, never persisted
    format_hint: str  # "pdf" | "docx" | "odt" | "txt" | anything else
    filename: str = ""
    media_type: str = ""


@dataclass(frozen=True)
class ExtractedDocument:
    text: str  # normalized text
    note: str  # which strategy produced it, or why none could


@dataclass(frozen=True)
class SimilarityResult:
    score: int  # 0-100
    method: str
    detail: str
    duplicated: int = 0
    total: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "method": self.method, "detail": self.detail}


@dataclass
class AnalysisReport:
    filename: str
    mimetype: str
    size: int
    word_count: int
    note: str
    similarity: SimilarityResult
    snippet: str
    content_sha1: str
    ok: bool = True

    def as_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "filename": self.filename,
            "mimetype": self.mimetype,
            "size": self.size,
            "wordCount": self.word_count,
            "note": self.note,
            "similarity": self.similarity.as_dict(),
            "snippet": self.snippet,
            "contentSha1": self.content_sha1,
        }
