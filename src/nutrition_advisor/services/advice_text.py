"""Advice text cleanup and bullet splitting."""

import re

_BULLET_GLYPHS = re.compile("[•·▪●○■□◆◇]")
_LONG_DASHES = re.compile("[\u2013\u2014]")
_REPLACEMENT_CHAR = "\ufffd"
_CYRILLIC = re.compile("[\u0400-\u04ff]")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_LINE_BREAKS = re.compile(r"\n+")
_DASH_BULLET = re.compile(r"\s*-\s+")
_SENTENCE_END = re.compile(r"(?<=[。.!?])\s+")


def normalize_advice(value: object) -> str:
    """Return the canonical plain-text form of model-written advice."""
    if not isinstance(value, str):
        return ""
    text = value.replace("\r", "\n")
    text = _BULLET_GLYPHS.sub("-", text)
    text = _LONG_DASHES.sub("-", text)
    text = text.replace(_REPLACEMENT_CHAR, "")
    text = _CYRILLIC.sub("", text)
    text = _INLINE_WHITESPACE.sub(" ", text)
    return text.strip()


def split_advice(text: str) -> list[str]:
    """Split advice into display bullets.

    Lines and " - " bullets are preferred. When that yields a single item the
    text is split into sentences instead.
    """
    cleaned = normalize_advice(text)
    if not cleaned:
        return []
    bullets = [
        part.strip()
        for line in _LINE_BREAKS.split(cleaned)
        for part in _DASH_BULLET.split(line)
    ]
    bullets = [bullet for bullet in bullets if bullet]
    if len(bullets) > 1:
        return bullets
    sentences = (part.strip() for part in _SENTENCE_END.split(cleaned))
    return [sentence for sentence in sentences if sentence]
