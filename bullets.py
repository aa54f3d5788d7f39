import re
from dataclasses import dataclass

from paragraphs import extract, normalize_sentence

CONCLUSION_PHRASES = frozenset({
    "in conclusion", "to conclude", "in summary", "to summarize", "overall",
    "in closing", "finally", "to wrap up", "all in all", "ultimately",
})

TRANSITION_STARTERS = (
    "additionally", "also", "beyond that", "furthermore", "however",
    "in addition", "meanwhile", "notably", "on the other hand", "separately",
    "still", "yet",
)


@dataclass(frozen=True)
class BulletConfig:
    min_words: int = 18
    max_words: int = 72
    continuation_words: int = 6
    long_sentence_ratio: float = 1.2
    merge_ratio: float = 0.6
    conclusion_phrases: frozenset = CONCLUSION_PHRASES
    transition_starters: tuple = TRANSITION_STARTERS


DEFAULT_CONFIG = BulletConfig()


@dataclass(frozen=True)
class BulletState:
    parts: tuple = ()
    word_count: int = 0


_CITATION_RE = re.compile(r"\[\^?\d+\]")
_TERMINAL_RE = re.compile(r"[.!?][\"'”’)\]]*(?:\[\^?\d+\])*$")


def strip_citations(text: str) -> str:
    return _CITATION_RE.sub("", text)

def count_words(text: str) -> int:
    return len(strip_citations(text).split())

def has_terminal_punctuation(text: str) -> bool:
    return bool(_TERMINAL_RE.search(text.strip()))

def normalize_bullet(parts) -> str:
    cleaned = normalize_sentence(" ".join(parts))
    if not cleaned:
        return ""
    return cleaned if has_terminal_punctuation(cleaned) else cleaned + "."

def should_skip_sentence(sentence: str, config: BulletConfig = DEFAULT_CONFIG) -> bool:
    s = sentence.lower()
    return any(
        s.startswith(p) or f", {p}," in s or f". {p}" in s
        for p in config.conclusion_phrases
    )

def starts_with_transition(sentence: str, config: BulletConfig = DEFAULT_CONFIG) -> bool:
    s = sentence.lower()
    return any(s.startswith(f"{t} ") or s.startswith(f"{t},") for t in config.transition_starters)


def _commit(state: BulletState, force: bool = False) -> list[str]:
    bullet = normalize_bullet(state.parts)
    if not bullet or (not force and count_words(bullet) == 0):
        return []
    return [bullet]

def is_continuation(state: BulletState, sentence: str, words: int,
                    config: BulletConfig = DEFAULT_CONFIG) -> bool:
    return (
        not has_terminal_punctuation(sentence)
        or words < config.continuation_words
        or state.word_count < config.min_words
    )

def needs_new_bullet(state: BulletState, sentence: str, words: int,
                     config: BulletConfig = DEFAULT_CONFIG) -> bool:
    if not state.parts or is_continuation(state, sentence, words, config):
        return False
    if state.word_count + words > config.max_words:
        return True
    return state.word_count >= config.min_words and (
        starts_with_transition(sentence, config)
        or words >= config.min_words / config.long_sentence_ratio
    )

def step(state: BulletState, sentence: str, config: BulletConfig = DEFAULT_CONFIG):
    """
    Feed one normalized sentence to the accumulator.

    Returns ``(new_state, committed)`` where ``committed`` lists the bullets
    finished by this sentence (zero, one or two of them). Conclusion
    sentences leave the state untouched.
    """
    if not sentence or should_skip_sentence(sentence, config):
        return state, []
    words = count_words(sentence)
    committed = []
    if needs_new_bullet(state, sentence, words, config):
        committed += _commit(state)
        state = BulletState()
    state = BulletState(state.parts + (sentence,), state.word_count + words)
    if state.word_count >= config.max_words:
        committed += _commit(state)
        state = BulletState()
    return state, committed

def accumulate(paragraphs, config: BulletConfig = DEFAULT_CONFIG) -> list[str]:
    bullets, state = [], BulletState()
    for sentences in paragraphs:
        for sentence in sentences:
            state, committed = step(state, sentence, config)
            bullets.extend(committed)
        # a full bullet never bleeds into the next paragraph
        if state.word_count >= config.min_words:
            bullets.extend(_commit(state))
            state = BulletState()
    if state.parts:
        bullets.extend(_commit(state, force=True))
    return bullets

def refine(bullets: list[str], config: BulletConfig = DEFAULT_CONFIG) -> list[str]:
    out = []
    for b in bullets:
        words = count_words(b)
        if out and words < config.min_words * config.merge_ratio:
            out.append(normalize_bullet([out.pop(), b]))
        elif words:
            out.append(b)
    return out

def segment(text: str, config: BulletConfig = DEFAULT_CONFIG) -> list[str]:
    """
    Re-flow free-form prose into a list of terminated bullets.

    Sentences are grouped greedily between ``config.min_words`` and
    ``config.max_words``, conclusion sentences ("In conclusion, ...") are
    dropped, and undersized trailing bullets are folded into the one before.
    Pure and total: any string in, a (possibly empty) list out.
    """
    if not text:
        return []
    return refine(accumulate(extract(text), config), config)

def sentence_bullets(text: str, config: BulletConfig = DEFAULT_CONFIG) -> list[str]:
    # One bullet per sentence, for the plain "key points" view
    out = []
    for sentences in extract(text or ""):
        for s in sentences:
            if should_skip_sentence(s, config):
                continue
            b = normalize_bullet([s])
            if count_words(b):
                out.append(b)
    return out
