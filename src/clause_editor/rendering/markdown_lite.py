"""Markdown-lite rendering of clause text for read-only previews.

The renderer runs a fixed sequence of substitution passes over the whole
buffer, each pass consuming the previous one's output:

1. ``**x**`` to ``<strong>``
2. ``*x*`` to ``<em>``
3. ``__x__`` to ``<u>``
4. ``## x`` lines to ``<h2>``
5. ``### x`` lines to ``<h3>``
6. ``• x`` and ``<n>. x`` lines to ``<li>``
7. remaining lines grouped into ``<p>`` blocks, split on blank lines

Inline passes are non-greedy and never span a line break. Unbalanced
markers do not match and are left as literal text. Overlapping markers are
resolved purely by pass order, so ``**a*b*c**`` renders as
``<strong>a<em>b</em>c</strong>``.
"""

import re
from typing import List

from markupsafe import Markup, escape


_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_UNDERLINE = re.compile(r"__(.+?)__")
_HEADING_2 = re.compile(r"^## (.+)$", re.MULTILINE)
_HEADING_3 = re.compile(r"^### (.+)$", re.MULTILINE)
_BULLET_ITEM = re.compile(r"^• (.+)$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^\d+\. (.+)$", re.MULTILINE)

_BLOCK_LINE = re.compile(r"^<(h2|h3|li)>")


def render(text: str) -> Markup:
    """
    Render marked-up clause text to HTML.

    The input is HTML-escaped before any markup is applied, so the
    returned Markup only contains tags produced by the passes above.

    Args:
        text: Clause content with inline markup tokens.

    Returns:
        Markup safe to embed in a Jinja2 template.
    """
    if not text:
        return Markup("")

    html = str(escape(text.replace("\r\n", "\n")))
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _ITALIC.sub(r"<em>\1</em>", html)
    html = _UNDERLINE.sub(r"<u>\1</u>", html)
    html = _HEADING_2.sub(r"<h2>\1</h2>", html)
    html = _HEADING_3.sub(r"<h3>\1</h3>", html)
    html = _BULLET_ITEM.sub(r"<li>\1</li>", html)
    html = _NUMBERED_ITEM.sub(r"<li>\1</li>", html)
    return Markup("\n".join(_build_blocks(html)))


def _build_blocks(html: str) -> List[str]:
    """Group plain lines into paragraphs; keep heading and list lines as-is."""
    blocks: List[str] = []
    paragraph: List[str] = []

    def flush() -> None:
        if paragraph:
            blocks.append("<p>" + "<br>".join(paragraph) + "</p>")
            paragraph.clear()

    for line in html.split("\n"):
        if not line.strip():
            flush()
        elif _BLOCK_LINE.match(line):
            flush()
            blocks.append(line)
        else:
            paragraph.append(line)
    flush()

    return blocks
