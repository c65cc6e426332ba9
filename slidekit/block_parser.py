"""
Block parser: turns the residual Markdown of one slide into typed blocks.

The scanner walks the content line by line.  It is always in one of three
states: DEFAULT, IN_CODE (inside a fenced code block) or IN_HTML (inside a
raw HTML container).  The non-default states carry the lines collected so
far; HTML additionally tracks the open/close tag depth so that a container
with nested containers is kept together as one opaque block.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .models import Block, Slide

logger = logging.getLogger(__name__)

CODE_FENCE = "```"

# Tags that open an opaque HTML block when they start a line.
HTML_BLOCK_PREFIXES = ("<div", "<section", "<script", "<ol", "<table")

_HTML_OPEN_RE = re.compile(r"<(div|section|script|table|ol|ul)\b")
_HTML_CLOSE_RE = re.compile(r"</(div|section|script|table|ol|ul)>")
_NUMBERED_RE = re.compile(r"^(\d+)\.\s+(.+)$")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

TAB_WIDTH = 4
INDENT_WIDTH = 4


class ScanState(Enum):
    DEFAULT = "default"
    IN_CODE = "in_code"
    IN_HTML = "in_html"


@dataclass
class _Scanner:
    """Mutable scan state for a single slide."""
    slide: Slide
    state: ScanState = ScanState.DEFAULT
    lines: List[str] = field(default_factory=list)  # payload of IN_CODE / IN_HTML
    code_lang: str = ""
    html_depth: int = 0
    paragraph: List[str] = field(default_factory=list)

    def emit(self, block: Block) -> None:
        self.flush_paragraph()
        self.slide.body.append(block)

    def flush_paragraph(self) -> None:
        if self.paragraph:
            text = "\n".join(self.paragraph)
            self.paragraph = []
            if text:
                self.slide.body.append(Block.paragraph(text))

    def enter(self, state: ScanState, first_lines: Optional[List[str]] = None) -> None:
        self.state = state
        self.lines = list(first_lines or [])


def count_indent_level(line: str) -> int:
    """
    Nesting level of a list item from its leading whitespace.

    Four spaces make one level; a tab counts as four spaces.
    """
    spaces = 0
    for ch in line:
        if ch == " ":
            spaces += 1
        elif ch == "\t":
            spaces += TAB_WIDTH
        else:
            break
    return spaces // INDENT_WIDTH


def is_html_block_start(trimmed: str) -> bool:
    return trimmed.startswith(HTML_BLOCK_PREFIXES)


def html_depth_delta(line: str) -> int:
    """Opening container tags minus closing ones on ``line``."""
    return len(_HTML_OPEN_RE.findall(line)) - len(_HTML_CLOSE_RE.findall(line))


def parse_image(trimmed: str):
    """Return ``(alt, url)`` for a Markdown image, or ``None``."""
    match = _IMAGE_RE.search(trimmed)
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_slide_content(slide: Slide, content: str) -> Slide:
    """
    Fill ``slide``'s title, subtitle and body from Markdown ``content``.

    Args:
        slide: Slide to populate; blocks are appended to ``slide.body``
        content: Slide Markdown with directives and notes already removed

    Returns:
        The same slide, for chaining
    """
    scanner = _Scanner(slide=slide)
    lines = content.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()

        if scanner.state == ScanState.IN_CODE:
            if trimmed.startswith(CODE_FENCE):
                scanner.emit(Block.code("\n".join(scanner.lines), scanner.code_lang))
                scanner.enter(ScanState.DEFAULT)
            else:
                scanner.lines.append(line)
            i += 1
            continue

        if scanner.state == ScanState.IN_HTML:
            scanner.lines.append(line)
            scanner.html_depth += html_depth_delta(line)
            if scanner.html_depth <= 0:
                scanner.emit(Block.paragraph("\n".join(scanner.lines)))
                scanner.enter(ScanState.DEFAULT)
            i += 1
            continue

        if trimmed.startswith(CODE_FENCE):
            scanner.flush_paragraph()
            scanner.code_lang = trimmed[len(CODE_FENCE):].strip()
            scanner.enter(ScanState.IN_CODE)
            i += 1
            continue

        if is_html_block_start(trimmed):
            scanner.flush_paragraph()
            scanner.html_depth = html_depth_delta(line)
            if scanner.html_depth <= 0:
                scanner.emit(Block.paragraph(line))
            else:
                scanner.enter(ScanState.IN_HTML, [line])
            i += 1
            continue

        i = _scan_default_line(scanner, lines, i)

    _finish(scanner)
    return slide


def _scan_default_line(scanner: _Scanner, lines: List[str], i: int) -> int:
    """Handle one DEFAULT-state line; returns the index of the next line."""
    slide = scanner.slide
    line = lines[i]
    trimmed = line.strip()

    if not trimmed:
        return i + 1

    if trimmed.startswith("# "):
        text = trimmed[2:]
        if not slide.title:
            scanner.flush_paragraph()
            slide.title = text
        else:
            scanner.emit(Block.heading(text, 1))
        return i + 1

    if trimmed.startswith("## "):
        text = trimmed[3:]
        if not slide.title:
            scanner.flush_paragraph()
            slide.title = text
        elif not slide.subtitle:
            scanner.flush_paragraph()
            slide.subtitle = text
        else:
            scanner.emit(Block.heading(text, 2))
        return i + 1

    if trimmed.startswith("### "):
        scanner.emit(Block.heading(trimmed[4:], 3))
        return i + 1

    if trimmed.startswith("- ") or trimmed.startswith("* "):
        scanner.emit(Block.bullet(trimmed[2:].strip(), count_indent_level(line)))
        return i + 1

    numbered = _NUMBERED_RE.match(trimmed)
    if numbered:
        scanner.emit(Block.numbered(numbered.group(2), count_indent_level(line)))
        return i + 1

    if trimmed.startswith("> "):
        scanner.emit(Block.quote(trimmed[2:]))
        return i + 1

    if trimmed.startswith("!["):
        image = parse_image(trimmed)
        if image is not None:
            alt, url = image
            scanner.emit(Block.image(url, alt))
            return i + 1

    if trimmed.startswith("|"):
        table = []
        while i < len(lines) and lines[i].strip().startswith("|"):
            table.append(lines[i])
            i += 1
        scanner.emit(Block.paragraph("\n".join(table)))
        return i

    scanner.paragraph.append(trimmed)
    return i + 1


def _finish(scanner: _Scanner) -> None:
    """Flush whatever is still open at end of content."""
    if scanner.state == ScanState.IN_CODE:
        logger.debug("Unterminated code fence; keeping %d line(s) as code", len(scanner.lines))
        scanner.emit(Block.code("\n".join(scanner.lines), scanner.code_lang))
    elif scanner.state == ScanState.IN_HTML:
        logger.debug("Unterminated HTML block (depth %d); keeping it verbatim", scanner.html_depth)
        scanner.emit(Block.paragraph("\n".join(scanner.lines)))
    scanner.enter(ScanState.DEFAULT)
    scanner.flush_paragraph()
