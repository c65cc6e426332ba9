"""
Marp Markdown parser: reads a presentation into the canonical deck model.

Pipeline:
    raw text -> frontmatter -> body -> slide fragments -> directives & notes
    -> section groups -> per-slide blocks + layout -> Deck

Parsing is lenient.  Unterminated frontmatter, unterminated
code or HTML blocks and unknown keys are absorbed; ``parse`` always returns
a Deck.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .block_parser import CODE_FENCE, parse_slide_content
from .models import Block, Deck, Layout, Meta, Section, Slide, Theme

logger = logging.getLogger(__name__)

SLIDE_SEPARATOR = "---"

CLASS_DIRECTIVE = "_class"
SECTION_DIVIDER_CLASS = "section-divider"
LEAD_CLASS = "lead"

# Literal markers of multi-column markup; authored decks depend on these exact strings.
TWO_COLUMN_MARKERS = ('class="columns"', "grid-template-columns")

_DIRECTIVE_RE = re.compile(r"<!--\s*(_\w+)\s*:\s*(.+?)\s*-->")
_NOTE_RE = re.compile(r"<!--\s*\n(.*?)\n\s*-->", re.DOTALL)
_PAUSE_RE = re.compile(r"\[PAUSE:(\d+)\]")
_BREAK_RE = re.compile(r'<break\s+time="(\d+)ms"\s*/?>')


@dataclass
class Frontmatter:
    """Recognized header keys plus every other key verbatim in ``custom``."""
    marp: bool = False
    theme: str = ""
    paginate: bool = False
    style: str = ""
    custom: Dict[str, str] = field(default_factory=dict)


@dataclass
class ParsedSlide:
    """Intermediate state of one slide fragment."""
    directives: Dict[str, str] = field(default_factory=dict)
    notes: List[str] = field(default_factory=list)
    content: str = ""  # remaining Markdown / HTML
    raw: str = ""      # fragment as found in the source

    @property
    def css_class(self) -> str:
        return self.directives.get(CLASS_DIRECTIVE, "")

    def is_section_divider(self) -> bool:
        return self.css_class == SECTION_DIVIDER_CLASS


def parse_frontmatter(text: str) -> Tuple[Frontmatter, str]:
    """
    Split the fenced key/value header from the document body.

    Args:
        text: Full document text

    Returns:
        ``(frontmatter, body)``.  Without an opening fence, or when the
        closing fence is missing, the frontmatter is empty and the body is
        the whole (trimmed) text.
    """
    fm = Frontmatter()
    content = text.strip()
    if not content.startswith(SLIDE_SEPARATOR):
        return fm, content

    rest = content[3:]
    idx = rest.find("\n---")
    if idx < 0:
        logger.debug("Frontmatter fence is never closed; treating the whole document as body")
        return fm, content

    header = rest[:idx].strip()
    body = rest[idx + 4:]

    lines = header.split("\n")
    i = 0
    while i < len(lines):
        trimmed = lines[i].strip()
        if not trimmed or ":" not in trimmed:
            i += 1
            continue

        key, value = trimmed.split(":", 1)
        key = key.strip()
        value = value.strip()

        if key == "marp":
            fm.marp = value == "true"
        elif key == "theme":
            fm.theme = value
        elif key == "paginate":
            fm.paginate = value == "true"
        elif key == "style":
            if value == "|":
                # Block scalar: continues while lines stay indented.
                style_lines = []
                i += 1
                while i < len(lines) and lines[i][:1] in (" ", "\t"):
                    style_lines.append(lines[i] if lines[i].strip() else "")
                    i += 1
                fm.style = "\n".join(style_lines)
                continue
            fm.style = value
        else:
            fm.custom[key] = value
        i += 1

    return fm, body


def split_slides(body: str) -> List[str]:
    """
    Split the document body into raw slide fragments on ``---`` lines.

    Separator lines inside fenced code blocks are content, not separators.
    Fragments that are blank after trimming are dropped.
    """
    slides = []
    current: List[str] = []
    in_code = False

    def _flush():
        fragment = "\n".join(current)
        if fragment.strip():
            slides.append(fragment)

    for line in body.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(CODE_FENCE):
            in_code = not in_code

        if not in_code and trimmed == SLIDE_SEPARATOR:
            _flush()
            current = []
            continue

        current.append(line)

    _flush()
    return slides


def clean_note_text(text: str) -> str:
    """
    Strip pacing markers and collapse a note into a single line of prose.

    ``[PAUSE:<ms>]`` and ``<break time="<ms>ms"/>`` markers are removed, every
    line is trimmed, blank lines are dropped and the rest joined by spaces.
    """
    text = _PAUSE_RE.sub("", text)
    text = _BREAK_RE.sub("", text)
    lines = [line.strip() for line in text.split("\n")]
    return " ".join(line for line in lines if line)


def parse_raw_slide(raw: str) -> ParsedSlide:
    """Pull directives and speaker notes out of one raw slide fragment."""
    parsed = ParsedSlide(raw=raw)

    for match in _DIRECTIVE_RE.finditer(raw):
        parsed.directives[match.group(1)] = match.group(2)
    remaining = _DIRECTIVE_RE.sub("", raw)

    for match in _NOTE_RE.finditer(remaining):
        note = match.group(1)
        # Comments wrapping script markup are not narration.
        if "<script" in note:
            logger.debug("Skipping comment containing <script> as speaker note")
            continue
        parsed.notes.append(clean_note_text(note))
    remaining = _NOTE_RE.sub("", remaining)

    parsed.content = remaining.strip()
    return parsed


def extract_section_title(content: str, default: str = "untitled") -> str:
    """
    Title of a section divider slide.

    The first ``##`` heading wins over the first ``#`` heading, since
    dividers usually read "# Section 2" followed by the descriptive
    "## Architecture".
    """
    h1 = h2 = ""
    for line in content.split("\n"):
        trimmed = line.strip()
        if not h1 and trimmed.startswith("# "):
            h1 = trimmed[2:]
        elif not h2 and trimmed.startswith("## "):
            h2 = trimmed[3:]
    return h2 or h1 or default


def contains_columns(content: str) -> bool:
    """Check if slide content carries multi-column markup."""
    return any(marker in content for marker in TWO_COLUMN_MARKERS)


def classify_layout(directives: Dict[str, str], content: str) -> Layout:
    css_class = directives.get(CLASS_DIRECTIVE, "")
    if css_class == SECTION_DIVIDER_CLASS:
        layout = Layout.SECTION
    elif css_class == LEAD_CLASS:
        layout = Layout.TITLE
    else:
        layout = Layout.TITLE_BODY

    if layout == Layout.TITLE_BODY and contains_columns(content):
        layout = Layout.TITLE_TWO_COL
    return layout


class MarkdownParser:
    """
    Parser for Marp Markdown presentations.

    The parser holds configuration only; every ``parse`` call starts from a
    clean slate, so one instance can be shared.
    """

    def __init__(
        self,
        *,
        default_section_title: str = "default",
        untitled_section_title: str = "untitled",
    ):
        """
        Initialize the markdown parser.

        Args:
            default_section_title: Title of the implicit group of slides that
                precede the first section divider
            untitled_section_title: Title used for a divider without headings
        """
        self.default_section_title = default_section_title
        self.untitled_section_title = untitled_section_title

    def parse(self, markdown_text: str) -> Deck:
        """
        Parse Marp Markdown into a Deck.

        Args:
            markdown_text: Raw document text

        Returns:
            The deck; empty input yields a deck without sections
        """
        frontmatter, body = parse_frontmatter(markdown_text or "")
        fragments = split_slides(body)
        parsed = [parse_raw_slide(fragment) for fragment in fragments]
        deck = self.build_deck(frontmatter, parsed)
        logger.debug(
            "Parsed %d fragment(s) into %d section(s), %d slide(s)",
            len(fragments), len(deck.sections), deck.slide_count(),
        )
        return deck

    def build_deck(self, frontmatter: Frontmatter, parsed: List[ParsedSlide]) -> Deck:
        """Group parsed fragments into sections and convert them to slides."""
        deck = Deck(theme=self._theme_from(frontmatter), meta=self._meta_from(frontmatter))

        groups: List[Tuple[str, List[ParsedSlide]]] = []
        title = self.default_section_title
        members: List[ParsedSlide] = []

        for ps in parsed:
            if ps.is_section_divider():
                if members:
                    groups.append((title, members))
                title = extract_section_title(ps.content, self.untitled_section_title)
                members = [ps]
            else:
                members.append(ps)
        if members:
            groups.append((title, members))

        for section_idx, (section_title, group) in enumerate(groups):
            section = Section(id=f"section-{section_idx}", title=section_title)
            for slide_idx, ps in enumerate(group):
                section.slides.append(self.convert_slide(ps, section_idx, slide_idx))
            deck.sections.append(section)

        if deck.sections and deck.sections[0].slides:
            deck.title = deck.sections[0].slides[0].title

        return deck

    def convert_slide(self, ps: ParsedSlide, section_idx: int, slide_idx: int) -> Slide:
        slide = Slide(id=f"s{section_idx}-{slide_idx}")
        parse_slide_content(slide, ps.content)
        slide.layout = classify_layout(ps.directives, ps.content)

        for note in ps.notes:
            if note:
                slide.notes.append(Block.paragraph(note))

        slide.transition = ps.directives.get("_transition")
        slide.background = (
            ps.directives.get("_backgroundImage") or ps.directives.get("_backgroundColor")
        )
        return slide

    @staticmethod
    def _theme_from(frontmatter: Frontmatter) -> Optional[Theme]:
        if not frontmatter.theme and not frontmatter.style:
            return None
        theme = Theme(name=frontmatter.theme)
        if frontmatter.style:
            theme.set_custom("style", frontmatter.style)
        return theme

    @staticmethod
    def _meta_from(frontmatter: Frontmatter) -> Meta:
        meta = Meta()
        for key, value in frontmatter.custom.items():
            if key == "author":
                meta.author = value
            elif key == "date":
                meta.date = value
            elif key == "description":
                meta.description = value
            elif key == "keywords":
                meta.keywords = [kw.strip() for kw in value.split(",") if kw.strip()]
            else:
                meta.custom[key] = value
        return meta


def parse_markdown(markdown_text: str) -> Deck:
    """
    Convenience function to parse Marp Markdown into a Deck.

    Args:
        markdown_text: Raw document text

    Returns:
        Parsed deck
    """
    return MarkdownParser().parse(markdown_text)
