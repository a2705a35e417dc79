"""HTML helper utilities shared by the page parsers."""

from __future__ import annotations

import re
from typing import Optional

NBSP_RE = re.compile(r"\xa0|&nbsp;?")
WS_RE = re.compile(r"\s+")
TIME_RE = re.compile(r"(\d{2}:\d{2})")


def clean_cell(text: str) -> str:
    text = NBSP_RE.sub(" ", text)
    return WS_RE.sub(" ", text).strip()


def node_text(node) -> str:
    return clean_cell(node.get_text(" ", strip=True)) if node is not None else ""


def first_text(root, *selectors: str) -> str:
    """Text of the first element matched by the first selector that matches anything."""
    if root is None:
        return ""
    for sel in selectors:
        el = root.select_one(sel)
        if el is not None:
            return node_text(el)
    return ""


def extract_time(text: str) -> Optional[str]:
    m = TIME_RE.search(text)
    return m.group(1) if m else None
