import re

# opening of a new sentence after an ad hoc "/" separator
_SLASH_NEXT = r"(?=[A-Z0-9“\"(\[‘'—-])"
_SLASH_INLINE_RE = re.compile(r"(\S)\s*/\s+" + _SLASH_NEXT)
_SLASH_LEADING_RE = re.compile(r"(^|\n)\s*/\s+" + _SLASH_NEXT)

_CITATION = r"\[\^?\d+\]"
# terminator run only; split_sentences slices at match ends
_SENTENCE_END_RE = re.compile(r"[.!?]+[\"'”’)\]]*(?:" + _CITATION + r")*(?=\s|$)")
_LEADING_GLYPHS_RE = re.compile(r"^[\s•·*#>-]+")


def normalize_paragraph_separators(text: str) -> str:
    if not text:
        return ""
    s = text.replace("\r\n", "\n").replace("\r", "\n")
    # literal escapes coming back from JSON-ish model output
    s = s.replace("\\r\\n", "\n").replace("\\n", "\n")
    s = _SLASH_INLINE_RE.sub(lambda m: m.group(1) + "\n\n", s)
    s = _SLASH_LEADING_RE.sub(lambda m: m.group(1) + "\n\n", s)
    s = re.sub(r"[ \t]+\n", "\n", s)
    s = re.sub(r"\n[ \t]+", "\n", s)
    return re.sub(r"\n{3,}", "\n\n", s)


def split_into_paragraphs(text: str) -> list[str]:
    normalized = normalize_paragraph_separators(text)
    return [p.strip() for p in re.split(r"\n{2,}", normalized) if p.strip()]


def normalize_sentence(sentence: str) -> str:
    s = _LEADING_GLYPHS_RE.sub("", sentence)
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"\s+([,.;!?])", r"\1", s)
    return s.strip()


def split_sentences(paragraph: str) -> list[str]:
    """
    Cut a paragraph at sentence boundaries.

    Pieces are sliced at the end of each terminator run that is followed by
    whitespace, so a "." inside "3.5 million" stays with its sentence, and
    whatever follows the last boundary becomes the final sentence. No
    boundary at all means the paragraph is a single sentence.
    """
    pieces, start = [], 0
    for m in _SENTENCE_END_RE.finditer(paragraph):
        pieces.append(paragraph[start:m.end()])
        start = m.end()
    pieces.append(paragraph[start:])
    out = [normalize_sentence(p) for p in pieces]
    return [s for s in out if s]


def extract(text: str) -> list[list[str]]:
    """Paragraphs of normalized sentences, in input order."""
    if not text or not text.strip():
        return []
    out = []
    for para in split_into_paragraphs(text):
        sentences = split_sentences(para)
        if sentences:
            out.append(sentences)
    return out
