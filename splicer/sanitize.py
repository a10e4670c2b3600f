# splicer/sanitize.py
from __future__ import annotations

import re

# Opening tags may carry attributes: <script type="module" defer>
_SCRIPT_TAG_RE = re.compile(r"</?script\b[^>]*>", re.IGNORECASE)
# Non-greedy so adjacent comments are removed one by one, across lines.
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)


def strip_script_tags(text: str) -> str:
    return _SCRIPT_TAG_RE.sub("", text)


def strip_html_comments(text: str) -> str:
    return _HTML_COMMENT_RE.sub("", text)


def sanitize(text: str) -> str:
    """
    Make extracted code safe to re-embed inside a <script> block.

    1) remove nested <script ...> / </script> delimiters
    2) remove <!-- ... --> spans

    Both are textual substitutions; nothing outside a matched span changes.
    Removing one span can join its neighbours into a new match
    (e.g. "<scr<!-- x -->ipt>"), so both passes repeat until the text is
    stable. Every pass that changes anything makes the text shorter, so
    this terminates, and sanitize(sanitize(x)) == sanitize(x).

    Limitation: delimiter-like text inside JavaScript strings or comments is
    removed as well. There is no tokenizer here.
    """
    while True:
        cleaned = strip_html_comments(strip_script_tags(text))
        if cleaned == text:
            return cleaned
        text = cleaned
