"""Display-width helpers for laying out suggestion rows.

Widths are terminal columns: wide (CJK, emoji) clusters take two, combining
marks and control characters take none. All helpers expect unstyled text;
styling is applied after layout.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cluster_width(cluster: str) -> int:
    if len(cluster) == 1:
        if unicodedata.category(cluster) == "Cc":
            return 0
        return max(_wcwidth.wcwidth(cluster), 0)

    # Emoji presentation selector, ZWJ sequences, skin tones and flags
    for ch in cluster:
        cp = ord(ch)
        if ch in "\ufe0f\u200d" or 0x1F1E6 <= cp <= 0x1F1FF or 0x1F3FB <= cp <= 0x1F3FF:
            return 2

    base = cluster[0]
    if unicodedata.category(base) in ("Mn", "Me", "Mc", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(base), 0)


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies. Tabs count as three."""
    text = text.replace("\t", "   ")
    if text.isascii() and text.isprintable():
        return len(text)

    width = _width_cache.get(text)
    if width is None:
        width = sum(_cluster_width(c) for c in grapheme.graphemes(text))
        if len(_width_cache) >= _WIDTH_CACHE_MAX:
            _width_cache.clear()
        _width_cache[text] = width
    return width


def take_columns(text: str, columns: int) -> str:
    """Longest prefix of *text* that fits in *columns*, cut between clusters."""
    if visible_width(text) <= columns:
        return text

    used = 0
    end = 0
    for cluster in grapheme.graphemes(text):
        width = visible_width(cluster)
        if used + width > columns:
            break
        used += width
        end += len(cluster)
    return text[:end]


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces to *width* columns."""
    return text + " " * max(0, width - visible_width(text))
