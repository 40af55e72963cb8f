from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Dict, Optional

from extraction.document_models import ExtractedDocument, RawDocument
from extraction.extractors import (
    DocxExtractor,
    FormatExtractor,
    OdtExtractor,
    PdfExtractor,
    TextExtractor,
    UnsupportedExtractor,
)


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    ODT = "odt"
    TXT = "txt"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_hint(cls, hint: Optional[str]) -> "DocumentFormat":
        key = clean_hint(hint)
        for member in cls:
            if member is not cls.UNSUPPORTED and member.value == key:
                return member
        return cls.UNSUPPORTED


MEDIA_TYPES: Dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "application/vnd.oasis.opendocument.text": DocumentFormat.ODT,
    "text/plain": DocumentFormat.TXT,
}

EXTRACTORS: Dict[DocumentFormat, FormatExtractor] = {
    DocumentFormat.PDF: PdfExtractor(),
    DocumentFormat.DOCX: DocxExtractor(),
    DocumentFormat.ODT: OdtExtractor(),
    DocumentFormat.TXT: TextExtractor(),
}


def clean_hint(hint: Optional[str]) -> str:
    return str(hint or "").strip().lstrip(".").lower()


def resolve_format_hint(filename: Optional[str] = None, media_type: Optional[str] = None) -> str:
    """
    Format hint for an upload: the filename extension when there is one,
    else the format implied by the declared media type, else "".
    """
    suffix = PurePosixPath(filename or "").suffix
    if suffix:
        return clean_hint(suffix)
    fmt = MEDIA_TYPES.get((media_type or "").split(";")[0].strip().lower())
    return fmt.value if fmt else ""


def extractor_for(hint: Optional[str]) -> FormatExtractor:
    fmt = DocumentFormat.from_hint(hint)
    if fmt is DocumentFormat.UNSUPPORTED:
        return UnsupportedExtractor(clean_hint(hint))
    return EXTRACTORS[fmt]


def extract_text(data: bytes, format_hint: Optional[str]) -> ExtractedDocument:
    """
    Extract normalized text from `data` using the strategy for `format_hint`.

    Unknown hints give an empty result with an explanatory note; malformed
    containers raise MalformedContainerError.
    """
    return extractor_for(format_hint).extract(bytes(data))


def extract_document(doc: RawDocument) -> ExtractedDocument:
    return extract_text(doc.data, doc.format_hint)
