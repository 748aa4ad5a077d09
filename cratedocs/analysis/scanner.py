"""
Tolerant line scanning over converted documentation.

Both the example extractor and the relationship analyzer read the same
loosely structured Markdown, so heading detection, fence tracking, kind
inference and signature slicing all live here. None of these helpers raise
on malformed input; they return ``None`` or an empty result instead.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

FENCE = "```"
FN_MARKER = "fn "
ARROW = "->"
IMPL_FOR = " for "

# Checked in this order; the first keyword found alongside the item name wins.
KIND_KEYWORDS: Tuple[str, ...] = ("struct", "trait", "enum", "fn")

RECEIVER_FORMS = {"self", "&self", "&mut self", "mut self"}
EXAMPLES_HEADINGS = {"# examples", "## examples"}

HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.+?)\s*#*\s*$')
IMPL_PATTERN = re.compile(r'\bimpl\b')
ASSOCIATED_TYPE_PATTERN = re.compile(r'\btype\s+([A-Za-z_]\w*)\s*(?:<[^>]*>)?\s*[:=;]')

_OPENERS = "<([{"
_CLOSERS = ">)]}"


@dataclass
class CodeBlock:
    """A fenced block, fences included, plus the prose that preceded it."""
    lines: List[str]
    start_line: int
    preceding_text: List[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return "\n".join(self.lines)

    @property
    def body(self) -> str:
        """Text between the fences."""
        return "\n".join(self.lines[1:-1])

    @property
    def has_content(self) -> bool:
        return bool(self.body.strip())


# ============================================================================
# LINE CLASSIFICATION
# ============================================================================

def parse_heading(line: str) -> Optional[Tuple[int, str]]:
    """Return (level, title) for a Markdown ATX heading, else None."""
    match = HEADING_PATTERN.match(line.strip())
    if not match:
        return None
    return len(match.group(1)), match.group(2).strip()


def is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE)


def is_examples_heading(line: str) -> bool:
    return line.strip().lower() in EXAMPLES_HEADINGS


def find_examples_heading(lines: List[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if is_examples_heading(line):
            return index
    return None


def iter_code_blocks(lines: Iterable[str]) -> Iterator[CodeBlock]:
    """
    Yield every fenced block in document order.

    A block still open at the end of the document is closed with a synthetic
    fence so callers always get balanced output.
    """
    current: Optional[CodeBlock] = None
    prose: List[str] = []

    for number, line in enumerate(lines, start=1):
        if is_fence(line):
            if current is None:
                current = CodeBlock(lines=[line], start_line=number, preceding_text=prose)
                prose = []
            else:
                current.lines.append(line)
                yield current
                current = None
            continue

        if current is not None:
            current.lines.append(line)
        elif line.strip() and parse_heading(line) is None:
            prose.append(line.strip())

    if current is not None:
        current.lines.append(FENCE)
        yield current


# ============================================================================
# KIND INFERENCE
# ============================================================================

def infer_item_kind(text: str, item_name: str) -> Optional[str]:
    """
    Guess the item's kind from keyword and name co-occurrence.

    Returns one of ``KIND_KEYWORDS`` or None. When the name collides across
    kinds the fixed keyword order decides; there is no other disambiguation.
    """
    lowered = text.lower()
    name = item_name.lower()
    if not name or name not in lowered:
        return None
    for keyword in KIND_KEYWORDS:
        if keyword in lowered:
            return keyword
    return None


# ============================================================================
# SIGNATURE SLICING
# ============================================================================

def signature_lines(lines: Iterable[str]) -> Iterator[str]:
    """Lines that look like a function signature with a return type."""
    for line in lines:
        if FN_MARKER in line and ARROW in line:
            yield line


def _is_arrow_tip(text: str, index: int) -> bool:
    return text[index] == ">" and index > 0 and text[index - 1] == "-"


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` outside of any <>, (), [] or {} nesting."""
    parts: List[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS and not _is_arrow_tip(text, index):
            depth = max(depth - 1, 0)
        elif char == separator and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])
    return [part.strip() for part in parts if part.strip()]


def _matching_close(text: str, open_index: int) -> Optional[int]:
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS and not _is_arrow_tip(text, index):
            depth -= 1
            if depth == 0:
                return index
    return None


def _parameters_span(line: str) -> Optional[Tuple[int, Optional[int]]]:
    """(open, close) indexes of the parameter list after ``fn name<...>``."""
    fn_index = line.find(FN_MARKER)
    if fn_index == -1:
        return None
    index = fn_index + len(FN_MARKER)
    while index < len(line) and (line[index].isalnum() or line[index] == "_"):
        index += 1
    if index < len(line) and line[index] == "<":
        generics_close = _matching_close(line, index)
        if generics_close is None:
            return None
        index = generics_close + 1
    open_index = line.find("(", index)
    if open_index == -1:
        return None
    return open_index, _matching_close(line, open_index)


def return_type(line: str) -> Optional[str]:
    """
    Text after the arrow that follows the parameter list, minus where-clauses
    and trailing punctuation. Arrows inside closure-typed parameters are skipped.
    """
    span = _parameters_span(line)
    tail = line[span[1] + 1:] if span and span[1] is not None else line
    if ARROW not in tail:
        return None
    result = tail.split(ARROW, 1)[1]
    result = re.split(r'\swhere\b', result, maxsplit=1)[0]
    result = result.strip().rstrip("{;,").strip()
    return result or None


def parameter_list(line: str) -> Optional[str]:
    """The raw text inside the parentheses following ``fn name``."""
    span = _parameters_span(line)
    if span is None:
        return None
    open_index, close_index = span
    if close_index is None:
        return line[open_index + 1:]
    return line[open_index + 1:close_index]


def parameter_types(line: str) -> List[str]:
    """Types of every non-receiver ``name: Type`` parameter on the line."""
    params = parameter_list(line)
    if not params:
        return []

    types = []
    for param in split_top_level(params):
        if param in RECEIVER_FORMS or ":" not in param:
            continue
        name, _, type_text = param.partition(":")
        if name.strip() in RECEIVER_FORMS:
            continue
        type_text = type_text.strip()
        if type_text:
            types.append(type_text)
    return types


def strip_leading_generics(text: str) -> str:
    """Drop a leading ``<...>`` parameter list, e.g. '<T: Debug> Debug' -> 'Debug'."""
    text = text.strip()
    if not text.startswith("<"):
        return text
    close_index = _matching_close(text, 0)
    if close_index is None:
        return text
    return text[close_index + 1:].strip()


def implemented_trait(line: str) -> Optional[str]:
    """Trait name from an ``impl<..> Trait for Type`` line."""
    match = IMPL_PATTERN.search(line)
    if not match:
        return None
    for_index = line.find(IMPL_FOR, match.end())
    if for_index == -1:
        return None
    trait = strip_leading_generics(line[match.end():for_index])
    return trait or None


def associated_type(line: str) -> Optional[str]:
    match = ASSOCIATED_TYPE_PATTERN.search(line)
    return match.group(1) if match else None


def dedupe(items: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping first-seen order."""
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
