from __future__ import annotations

import re
import zipfile
import zlib
from io import BytesIO
from typing import List

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from lxml.etree import XMLSyntaxError
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from common.logger import get_logger
from extraction.cleaners import normalize_text
from extraction.document_models import ExtractedDocument
from extraction.errors import MalformedContainerError

log = get_logger(__name__)

ODT_CONTENT_ENTRY = "content.xml"

_ODT_LINE_BREAK = re.compile(r"<text:line-break\s*/>")
_MARKUP_TAG = re.compile(r"<[^>]+>")

# Only these four entities are decoded; anything else (&quot;, &#233;, ...)
# is left verbatim. This is not an XML decoder.
ODT_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


class FormatExtractor:
    """
    One strategy per container format. Subclasses implement _extract_raw();
    the result is normalized and labelled with the strategy note.
    """

    fmt: str = ""
    note: str = ""

    def extract(self, data: bytes) -> ExtractedDocument:
        text = normalize_text(self._extract_raw(data))
        log.info(
            "Extracted %s: %d bytes -> %d chars (%s)",
            self.fmt, len(data), len(text), self.note,
        )
        return ExtractedDocument(text=text, note=self.note)

    def _extract_raw(self, data: bytes) -> str:
        raise NotImplementedError

    def _malformed(self, data: bytes, exc: Exception) -> MalformedContainerError:
        return MalformedContainerError(self.fmt, f"{type(exc).__name__}: {exc}", len(data))


class PdfExtractor(FormatExtractor):
    fmt = "pdf"
    note = "pypdf (PDF)"

    def _extract_raw(self, data: bytes) -> str:
        try:
            reader = PdfReader(BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError) as e:
            raise self._malformed(data, e) from e
        return "\n\n".join(pages)


class DocxExtractor(FormatExtractor):
    """Visible text of body paragraphs and table cells, styling ignored."""

    fmt = "docx"
    note = "python-docx (DOCX)"

    def _extract_raw(self, data: bytes) -> str:
        try:
            doc = Document(BytesIO(data))
        except (
            zipfile.BadZipFile,
            PackageNotFoundError,
            KeyError,
            ValueError,
            XMLSyntaxError,
        ) as e:
            raise self._malformed(data, e) from e

        blocks: List[str] = []
        for item in doc.iter_inner_content():
            if isinstance(item, Table):
                blocks.extend(_table_cells(item))
            else:
                blocks.append(item.text)
        return "\n\n".join(blocks)


def _table_cells(table: Table) -> List[str]:
    # python-docx repeats a merged cell at every grid position it spans.
    # The set holds the elements themselves so their proxies stay alive.
    seen = set()
    out: List[str] = []
    for row in table.rows:
        for cell in row.cells:
            if cell._tc in seen:
                continue
            seen.add(cell._tc)
            out.append(cell.text)
    return out


class OdtExtractor(FormatExtractor):
    fmt = "odt"
    note = "zipfile (ODT)"

    def _extract_raw(self, data: bytes) -> str:
        try:
            with zipfile.ZipFile(BytesIO(data)) as zf:
                if ODT_CONTENT_ENTRY not in zf.namelist():
                    log.warning("ODT archive has no %s entry", ODT_CONTENT_ENTRY)
                    return ""
                xml = zf.read(ODT_CONTENT_ENTRY).decode("utf-8", errors="replace")
        except (zipfile.BadZipFile, zlib.error) as e:
            raise self._malformed(data, e) from e
        return strip_odt_markup(xml)


def strip_odt_markup(xml: str) -> str:
    text = _ODT_LINE_BREAK.sub("\n", xml)
    text = _MARKUP_TAG.sub(" ", text)
    for entity, char in ODT_ENTITIES:
        text = text.replace(entity, char)
    return text


class TextExtractor(FormatExtractor):
    fmt = "txt"
    note = "plain text"

    def _extract_raw(self, data: bytes) -> str:
        return data.decode("utf-8", errors="replace")


class UnsupportedExtractor(FormatExtractor):
    """Fallback for unknown hints: empty text, note echoing the hint."""

    def __init__(self, hint: str):
        self.fmt = hint
        self.note = f"unhandled extension: .{hint}"

    def extract(self, data: bytes) -> ExtractedDocument:
        log.warning("No extractor for format hint %r", self.fmt)
        return ExtractedDocument(text="", note=self.note)
