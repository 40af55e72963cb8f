import re
from typing import Optional

_SPACE_RUN = re.compile(r"[ \u00a0]+")
_BLANK_LINES = re.compile(r"\n{3,}")
# str.strip() keeps U+FEFF (byte order mark); trim it along with whitespace.
_EDGES = re.compile(r"\A[\s\ufeff]+|[\s\ufeff]+\Z")


def normalize_text(s: Optional[str]) -> str:
    s = str(s or "")
    s = s.replace("\r", "\n")
    s = s.replace("\t", " ")
    s = _SPACE_RUN.sub(" ", s)
    s = _BLANK_LINES.sub("\n\n", s)
    return _EDGES.sub("", s)
