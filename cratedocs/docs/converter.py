"""
HTML to Markdown conversion for documentation pages.

Renders the subset of HTML that rustdoc and crates.io produce: headings,
paragraphs, lists, tables, code (inline and ``<pre>`` blocks), emphasis and
links. Page chrome (scripts, navigation, sidebars, buttons) is dropped.
Heading and code text is emitted as plain text so that signature lines such
as ``pub fn len(&self) -> usize`` survive intact for later scanning.
"""

import re
from typing import List

from bs4 import BeautifulSoup, NavigableString, Tag, Comment
from bs4.element import PreformattedString

DROPPED_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "svg", "button", "form", "template"]
BLOCK_TAGS = {"p", "div", "section", "article", "main", "details", "summary", "dl", "dd", "dt", "blockquote", "body", "html"}
HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

_WHITESPACE = re.compile(r"[ \t\r\f\v]+")
_BLANK_RUNS = re.compile(r"\n{3,}")


def html_to_markdown(html: str) -> str:
    """Convert an HTML document to normalized Markdown text."""
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.find_all(DROPPED_TAGS):
        element.decompose()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    # rustdoc section anchors ("§") and source links
    for anchor in soup.select("a.anchor, a.doc-anchor, a.src, a.srclink, .out-of-band, #copy-path"):
        anchor.decompose()

    root = soup.body or soup
    markdown = _render_children(root)
    markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))
    return _BLANK_RUNS.sub("\n\n", markdown).strip() + "\n"


def _plain_text(node: Tag) -> str:
    return re.sub(r"\s+", " ", node.get_text()).strip()


def _render_children(node: Tag) -> str:
    return "".join(_render(child) for child in node.children)


def _render(node) -> str:
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        text = str(node)
        if not text.strip():
            return " " if text else ""
        return _WHITESPACE.sub(" ", text.replace("\n", " "))

    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name in HEADING_TAGS:
        text = _plain_text(node).lstrip("§").strip()
        return f"\n\n{'#' * HEADING_TAGS[name]} {text}\n\n" if text else ""
    if name == "pre":
        return _render_pre(node)
    if name == "code":
        text = node.get_text()
        return f"`{text}`" if text.strip() else ""
    if name in ("strong", "b"):
        inner = _render_children(node).strip()
        return f"**{inner}**" if inner else ""
    if name in ("em", "i"):
        inner = _render_children(node).strip()
        return f"*{inner}*" if inner else ""
    if name == "a":
        return _render_link(node)
    if name == "br":
        return "\n"
    if name == "hr":
        return "\n\n---\n\n"
    if name in ("ul", "ol"):
        return _render_list(node, ordered=(name == "ol"))
    if name == "table":
        return _render_table(node)
    if name == "img":
        alt = node.get("alt", "")
        return f"[{alt}]" if alt else ""
    if name in BLOCK_TAGS:
        inner = _render_children(node).strip()
        return f"\n\n{inner}\n\n" if inner else ""
    return _render_children(node)


def _render_pre(node: Tag) -> str:
    classes = node.get("class") or []
    language = "rust" if "rust" in classes else ""
    code = node.get_text().strip("\n")
    if not code.strip():
        return ""
    return f"\n\n```{language}\n{code}\n```\n\n"


def _render_link(node: Tag) -> str:
    text = _render_children(node).strip()
    href = node.get("href")
    if not text:
        return ""
    if not href or href.startswith("#") or href.startswith("javascript:"):
        return text
    return f"[{text}]({href})"


def _render_list(node: Tag, ordered: bool) -> str:
    lines: List[str] = []
    items = node.find_all("li", recursive=False)
    for index, item in enumerate(items, start=1):
        marker = f"{index}." if ordered else "-"
        text = _render_children(item).strip()
        text = _BLANK_RUNS.sub("\n\n", text).replace("\n", "\n  ")
        if text:
            lines.append(f"{marker} {text}")
    if not lines:
        return ""
    return "\n\n" + "\n".join(lines) + "\n\n"


def _render_table(node: Tag) -> str:
    rows = []
    for row in node.find_all("tr"):
        cells = [_render_children(cell).strip().replace("\n", " ").replace("|", "\\|")
                 for cell in row.find_all(["th", "td"])]
        if cells:
            rows.append(cells)
    if not rows:
        return ""

    width = max(len(r) for r in rows)
    rows = [r + [""] * (width - len(r)) for r in rows]
    lines = ["| " + " | ".join(rows[0]) + " |", "|" + " --- |" * width]
    lines.extend("| " + " | ".join(r) + " |" for r in rows[1:])
    return "\n\n" + "\n".join(lines) + "\n\n"
