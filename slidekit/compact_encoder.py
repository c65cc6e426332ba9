"""
Compact line-oriented encoding of decks and change sets (TOON).

Every structural element becomes one line that starts with a fixed keyword
(``deck``, ``meta``, ``section``, ``slide``, ``title``, ``bullet``, ``note``,
...).  Nesting is expressed by two-space indentation.  The format is a
one-way projection for machine consumers; nothing in slidekit reads it back.
"""
from datetime import timedelta
from typing import Any, List

from .models import Audio, AudioSource, Block, BlockKind, ChangeOp, Deck, Diff, Section, Slide, SlideInfo

_CHANGE_MARKERS = {
    ChangeOp.ADD: "+",
    ChangeOp.REMOVE: "-",
    ChangeOp.UPDATE: "~",
    ChangeOp.MOVE: ">",
}

_BLOCK_KEYWORDS = {
    BlockKind.BULLET: "bullet",
    BlockKind.NUMBERED: "numbered",
    BlockKind.PARAGRAPH: "para",
    BlockKind.CODE: "code",
    BlockKind.IMAGE: "image",
    BlockKind.QUOTE: "quote",
    BlockKind.HEADING: "heading",
}


def format_duration(duration: timedelta) -> str:
    """
    Render a duration the way Go's ``time.Duration`` prints it.

    ``timedelta(minutes=5)`` -> ``5m0s``, ``timedelta(seconds=1.5)`` ->
    ``1.5s``, ``timedelta(hours=1, seconds=3)`` -> ``1h0m3s``.
    """
    micros = int(round(duration.total_seconds() * 1_000_000))
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1_000_000:
        if micros % 1000 == 0:
            return f"{sign}{micros // 1000}ms"
        return f"{sign}{_trim_fraction(micros / 1000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim_fraction(rest / 1_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim_fraction(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text or "0"


class CompactEncoder:
    """
    Encodes decks, slides, slide listings and diffs into TOON text.
    """

    def __init__(self, *, indent: str = "  "):
        self.indent = indent

    def encode_deck(self, deck: Deck) -> str:
        """Encode a full deck, header and metadata first."""
        out = [f"deck {deck.title}"]

        meta = deck.meta
        if meta.author:
            out.append(f"meta author {meta.author}")
        if meta.date:
            out.append(f"meta date {meta.date}")
        if meta.description:
            out.append(f"meta description {meta.description}")
        if meta.keywords:
            out.append(f"meta keywords {', '.join(meta.keywords)}")

        for section in deck.sections:
            out.append("")
            self._encode_section(out, section)

        return "\n".join(out) + "\n"

    def encode_slide(self, slide: Slide) -> str:
        """Encode one slide at top level."""
        out: List[str] = []
        self._encode_slide(out, slide, "")
        return "\n".join(out) + "\n"

    def encode_slide_list(self, slides: List[SlideInfo]) -> str:
        """One ``slide <id> <layout>[ <title>]`` line per slide."""
        lines = []
        for info in slides:
            line = f"slide {info.id} {info.layout}"
            if info.title:
                line += f" {info.title}"
            lines.append(line + "\n")
        return "".join(lines)

    def encode_diff(self, diff: Diff) -> str:
        """
        Encode change records.

        Each change is a marker (``+`` add, ``-`` remove, ``~`` update,
        ``>`` move) followed by its path, then optional indented ``- old``
        and ``+ new`` value lines.
        """
        out = [f"plan deck {diff.deck_id}"]
        for change in diff.changes:
            out.append(f"{_CHANGE_MARKERS[change.op]} {change.path}")
            if change.old_value is not None:
                out.append(f"{self.indent}- {self._value(change.old_value)}")
            if change.new_value is not None:
                out.append(f"{self.indent}+ {self._value(change.new_value)}")
        return "\n".join(out) + "\n"

    def _encode_section(self, out: List[str], section: Section) -> None:
        header = f"section {section.id}"
        if section.title:
            header += f" {section.title}"
        out.append(header)

        if section.audio is not None:
            out.append(self.indent + self.encode_audio(section.audio))

        for slide in section.slides:
            self._encode_slide(out, slide, self.indent)

    def _encode_slide(self, out: List[str], slide: Slide, prefix: str) -> None:
        out.append(f"{prefix}slide {slide.id} {slide.layout}")
        inner = prefix + self.indent

        if slide.title:
            out.append(f"{inner}title {slide.title}")
        if slide.subtitle:
            out.append(f"{inner}subtitle {slide.subtitle}")
        for block in slide.body:
            out.append(inner + self.encode_block(block))
        for note in slide.notes:
            out.append(f"{inner}note {note.text}")
        if slide.audio is not None:
            out.append(inner + self.encode_audio(slide.audio))
        if slide.transition:
            out.append(f"{inner}transition {slide.transition}")
        if slide.background:
            out.append(f"{inner}background {slide.background}")

    def encode_block(self, block: Block) -> str:
        keyword = _BLOCK_KEYWORDS.get(block.kind, str(block.kind))
        if block.kind in (BlockKind.BULLET, BlockKind.NUMBERED):
            return f"{self.indent * block.level}{keyword} {block.text}"
        if block.kind == BlockKind.CODE:
            lang = f"{block.lang} " if block.lang else ""
            return f"{keyword} {lang}{block.text}"
        if block.kind == BlockKind.IMAGE:
            alt = f" {block.alt}" if block.alt else ""
            return f"{keyword} {block.url}{alt}"
        if block.kind == BlockKind.HEADING:
            level = f"{block.level} " if block.level > 0 else ""
            return f"{keyword} {level}{block.text}"
        return f"{keyword} {block.text}"

    def encode_audio(self, audio: Audio) -> str:
        parts = [f"audio {audio.source}"]
        if audio.source == AudioSource.FILE:
            parts.append(audio.path)
        elif audio.source == AudioSource.URL:
            parts.append(audio.url)
        elif audio.voice:
            parts.append(f"voice={audio.voice}")
        if audio.duration is not None and audio.duration > timedelta(0):
            parts.append(f"duration={format_duration(audio.duration)}")
        return " ".join(parts)

    @staticmethod
    def _value(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return "[" + " ".join(str(item) for item in value) + "]"
        return str(value)


def encode_deck(deck: Deck) -> str:
    """Convenience function to encode a deck as TOON."""
    return CompactEncoder().encode_deck(deck)


def encode_diff(diff: Diff) -> str:
    """Convenience function to encode change records as TOON."""
    return CompactEncoder().encode_diff(diff)
