"""
Marp Markdown writer: serializes a Deck back into the authoring dialect.

Sections are not written as such.  Section boundaries survive through the
``section-divider`` class directive on the divider slides themselves.
"""
import logging
from typing import List, Optional

from .models import Block, BlockKind, Deck, Layout, Slide
from .storage import FileStorage, Storage

logger = logging.getLogger(__name__)

SLIDE_BREAK = "\n---\n\n"

_LAYOUT_DIRECTIVES = {
    Layout.SECTION: ["<!-- _class: section-divider -->", "<!-- _paginate: false -->"],
    Layout.TITLE: ["<!-- _class: lead -->", "<!-- _paginate: false -->"],
}

# Keeps a slide with nothing to write from collapsing into an empty fragment.
EMPTY_SLIDE_MARKER = "<!-- _class: blank -->"

# Functional notations valid for a background-image; anything else is a color.
_IMAGE_FUNCTIONS = ("url(", "image(", "image-set(", "cross-fade(", "element(")


def is_background_image(value: str) -> bool:
    """Check if a background value is an image (``url(...)``, gradients) rather than a color."""
    value = value.strip().lower()
    return value.startswith(_IMAGE_FUNCTIONS) or "gradient(" in value


class MarkdownWriter:
    """
    Converts a Deck into Marp Markdown.
    """

    def __init__(self, *, indent: str = "    "):
        """
        Args:
            indent: Indentation unit for one level of list nesting
        """
        self.indent = indent

    def encode(self, deck: Deck) -> str:
        """
        Render ``deck`` as Marp Markdown.

        Args:
            deck: Deck to serialize

        Returns:
            Markdown text, frontmatter first
        """
        out: List[str] = []
        self._write_frontmatter(out, deck)

        rendered = [self.encode_slide(slide) for slide in deck.all_slides()]
        out.append(SLIDE_BREAK.join(rendered))

        logger.debug("Encoded %d slide(s) as Markdown", len(rendered))
        return "".join(out)

    def write_file(self, deck: Deck, path, storage: Optional[Storage] = None) -> None:
        """Serialize ``deck`` and store it at ``path`` as UTF-8."""
        storage = storage or FileStorage()
        storage.write(path, self.encode(deck).encode("utf-8"))

    def _write_frontmatter(self, out: List[str], deck: Deck) -> None:
        out.append("---\n")
        out.append("marp: true\n")
        if deck.theme is not None and deck.theme.name:
            out.append(f"theme: {deck.theme.name}\n")
        out.append("paginate: true\n")

        meta = deck.meta
        if meta.author:
            out.append(f"author: {meta.author}\n")
        if meta.date:
            out.append(f"date: {meta.date}\n")
        if meta.description:
            out.append(f"description: {meta.description}\n")
        if meta.keywords:
            out.append(f"keywords: {', '.join(meta.keywords)}\n")
        for key in sorted(meta.custom):
            out.append(f"{key}: {meta.custom[key]}\n")

        style = deck.theme.style if deck.theme is not None else ""
        if style:
            out.append("style: |\n")
            for line in style.split("\n"):
                # Block scalar lines, empty ones included, must stay indented to be read back.
                if not line.startswith((" ", "\t")):
                    line = "  " + line
                out.append(line + "\n")

        out.append("---\n\n")

    def encode_slide(self, slide: Slide) -> str:
        """Render a single slide without separators."""
        out: List[str] = []

        directives = list(_LAYOUT_DIRECTIVES.get(slide.layout, []))
        if slide.transition:
            directives.append(f"<!-- _transition: {slide.transition} -->")
        if slide.background:
            key = "_backgroundImage" if is_background_image(slide.background) else "_backgroundColor"
            directives.append(f"<!-- {key}: {slide.background} -->")

        content: List[str] = []
        if slide.notes:
            content.append("<!--\n")
            for note in slide.notes:
                content.append(note.text + "\n")
            content.append("-->\n\n")

        if slide.title:
            content.append(f"# {slide.title}\n")
        if slide.subtitle:
            content.append(f"## {slide.subtitle}\n")
        if slide.title or slide.subtitle:
            content.append("\n")

        for block in slide.body:
            content.append(self.encode_block(block))

        if not directives and not content:
            directives = [EMPTY_SLIDE_MARKER]

        if directives:
            out.append("\n".join(directives) + "\n\n")
        out.extend(content)
        return "".join(out)

    def encode_block(self, block: Block) -> str:
        """Render one body block, newline-terminated."""
        kind = block.kind
        if kind == BlockKind.BULLET:
            return f"{self.indent * block.level}- {block.text}\n"
        if kind == BlockKind.NUMBERED:
            return f"{self.indent * block.level}1. {block.text}\n"
        if kind == BlockKind.PARAGRAPH:
            if block.is_passthrough():
                return block.text + "\n"
            return "\n" + block.text + "\n"
        if kind == BlockKind.CODE:
            return f"\n```{block.lang}\n{block.text}\n```\n"
        if kind == BlockKind.IMAGE:
            return f"![{block.alt}]({block.url})\n"
        if kind == BlockKind.QUOTE:
            return f"> {block.text}\n"
        if kind == BlockKind.HEADING:
            return f"{'#' * max(block.level, 1)} {block.text}\n"
        logger.warning("Skipping block of unknown kind %r", kind)
        return ""


def encode_markdown(deck: Deck) -> str:
    """Convenience function to render a Deck as Marp Markdown."""
    return MarkdownWriter().encode(deck)
