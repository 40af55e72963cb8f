from __future__ import annotations

import re
from typing import List

from extraction.cleaners import normalize_text

# ASCII letters and digits plus the accented letters of French orthography.
_TOKEN = re.compile(r"[a-z0-9àâçéèêëîïôûùüÿñœ]+")


def tokenize(text: str | None) -> List[str]:
    """Lowercase word-like tokens of the normalized text; separators are dropped."""
    return _TOKEN.findall(normalize_text(text).lower())


def count_words(text: str | None) -> int:
    return len(tokenize(text))
