import json, re, requests
from pathlib import Path
from readability import Document
from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader

TEMPLATES = Path(__file__).resolve().parent / "templates"

_BLOCK_TAGS = ["p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote"]
_TEMPLATE_FOR = {"text": "bullets.txt.j2", "markdown": "bullets.md.j2"}
OUTPUT_FORMATS = ("text", "markdown", "json")

def clean_text(txt: str) -> str:
    return re.sub(r"\s+", " ", txt).strip()

def token_trim(s: str, max_chars: int) -> str:
    s = s.strip()
    return s if len(s) <= max_chars else s[:max_chars-1].rstrip() + "…"

def extract_article(url: str, timeout=20, user_agent: str = "Mozilla/5.0") -> str:
    """Fetch a page and return its main text, one block per paragraph."""
    r = requests.get(url, timeout=timeout, headers={"User-Agent": user_agent})
    r.raise_for_status()
    html = Document(r.text).summary(html_partial=True)
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    blocks = [clean_text(el.get_text(" ", strip=True)) for el in soup.find_all(_BLOCK_TAGS)]
    blocks = [b for b in blocks if b]
    if not blocks:
        # no block markup survived readability; keep whatever text there is
        return clean_text(soup.get_text(" ", strip=True))
    return "\n\n".join(blocks)

def render_template(name: str, context: dict) -> str:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES)),
        autoescape=False,   # plain text / markdown, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return env.get_template(name).render(**context).strip() + "\n"

def render_bullets(bullets: list[str], fmt: str = "text") -> str:
    if fmt == "json":
        return json.dumps(bullets, ensure_ascii=False, indent=2) + "\n"
    if fmt not in _TEMPLATE_FOR:
        raise ValueError(f"unknown output format: {fmt!r} (expected one of {', '.join(OUTPUT_FORMATS)})")
    if not bullets:
        return ""
    return render_template(_TEMPLATE_FOR[fmt], {"bullets": bullets})
