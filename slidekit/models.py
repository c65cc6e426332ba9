"""
Data models for slidekit.

The canonical deck model is a plain value tree: a Deck owns Sections, a
Section owns Slides, a Slide owns its body and notes Blocks.  Nothing holds
a reference back to its parent.
"""
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import SectionNotFoundError, SlideNotFoundError


class Layout(str, Enum):
    """Visual arrangement of a slide."""
    TITLE = "title"
    TITLE_BODY = "title_body"
    TITLE_TWO_COL = "title_two_col"
    SECTION = "section"
    BLANK = "blank"
    IMAGE = "image"
    COMPARISON = "comparison"

    def __str__(self):
        return self.value


class BlockKind(str, Enum):
    """Content type of a Block."""
    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    NUMBERED = "numbered"
    CODE = "code"
    IMAGE = "image"
    QUOTE = "quote"
    HEADING = "heading"

    def __str__(self):
        return self.value


class AudioSource(str, Enum):
    """Where the audio for a slide or section comes from."""
    FILE = "file"    # pre-recorded audio file
    URL = "url"      # remote audio
    TTS = "tts"      # text-to-speech from an explicit script
    NOTES = "notes"  # text-to-speech from the slide's speaker notes

    def __str__(self):
        return self.value

    def needs_tts(self) -> bool:
        """Check if this source requires speech synthesis."""
        return self in (AudioSource.TTS, AudioSource.NOTES)


class ChangeOp(str, Enum):
    """Kind of change carried by a Change record."""
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    MOVE = "move"

    def __str__(self):
        return self.value


@dataclass
class Block:
    """
    A unit of slide content.

    Only the fields relevant to ``kind`` are populated: ``level`` for
    bullets, numbered items and headings, ``lang`` for code, ``url`` and
    ``alt`` for images.
    """
    kind: BlockKind = BlockKind.PARAGRAPH
    text: str = ""
    level: int = 0
    lang: str = ""
    url: str = ""
    alt: str = ""

    @classmethod
    def paragraph(cls, text: str) -> "Block":
        return cls(kind=BlockKind.PARAGRAPH, text=text)

    @classmethod
    def bullet(cls, text: str, level: int = 0) -> "Block":
        return cls(kind=BlockKind.BULLET, text=text, level=level)

    @classmethod
    def numbered(cls, text: str, level: int = 0) -> "Block":
        return cls(kind=BlockKind.NUMBERED, text=text, level=level)

    @classmethod
    def code(cls, code: str, lang: str = "") -> "Block":
        return cls(kind=BlockKind.CODE, text=code, lang=lang)

    @classmethod
    def image(cls, url: str, alt: str = "") -> "Block":
        return cls(kind=BlockKind.IMAGE, url=url, alt=alt)

    @classmethod
    def quote(cls, text: str) -> "Block":
        return cls(kind=BlockKind.QUOTE, text=text)

    @classmethod
    def heading(cls, text: str, level: int) -> "Block":
        return cls(kind=BlockKind.HEADING, text=text, level=level)

    def is_list_item(self):
        """Check if this block is a bullet or numbered item."""
        return self.kind in (BlockKind.BULLET, BlockKind.NUMBERED)

    def is_heading(self):
        """Check if this block is a heading."""
        return self.kind == BlockKind.HEADING

    def is_passthrough(self):
        """Check if this block is raw HTML or a table kept verbatim."""
        if self.kind != BlockKind.PARAGRAPH:
            return False
        stripped = self.text.strip()
        return stripped.startswith("<") or stripped.startswith("|")


@dataclass
class Audio:
    """
    Audio attachment for a slide or a section.

    Exactly the payload field matching ``source`` is expected to be set:
    ``path`` for files, ``url`` for remote audio, ``script`` for TTS.  Audio
    derived from notes carries no payload, it is computed from the owning
    slide later on.
    """
    source: AudioSource
    path: str = ""
    url: str = ""
    script: str = ""
    duration: Optional[timedelta] = None
    voice: str = ""

    @classmethod
    def from_file(cls, path: str, duration: Optional[timedelta] = None) -> "Audio":
        return cls(source=AudioSource.FILE, path=path, duration=duration)

    @classmethod
    def from_url(cls, url: str, duration: Optional[timedelta] = None) -> "Audio":
        return cls(source=AudioSource.URL, url=url, duration=duration)

    @classmethod
    def from_script(cls, script: str, voice: str = "") -> "Audio":
        return cls(source=AudioSource.TTS, script=script, voice=voice)

    @classmethod
    def from_notes(cls, voice: str = "") -> "Audio":
        return cls(source=AudioSource.NOTES, voice=voice)

    def has_content(self) -> bool:
        """Check if the audio references something that can be played."""
        if self.source == AudioSource.FILE:
            return bool(self.path)
        if self.source == AudioSource.URL:
            return bool(self.url)
        if self.source == AudioSource.TTS:
            return bool(self.script)
        return self.source == AudioSource.NOTES

    def duration_or_zero(self) -> timedelta:
        return self.duration if self.duration else timedelta(0)


@dataclass
class Theme:
    """Presentation-wide styling."""
    name: str = ""
    primary: str = ""      # hex color
    secondary: str = ""    # hex color
    background: str = ""   # hex color
    font: str = ""
    custom: Dict[str, str] = field(default_factory=dict)  # backend-specific settings

    def get_custom(self, key: str, default: str = "") -> str:
        return self.custom.get(key, default)

    def set_custom(self, key: str, value: str) -> None:
        self.custom[key] = value

    @property
    def style(self) -> str:
        """Embedded stylesheet snippet, empty when absent."""
        return self.get_custom("style", "")


@dataclass
class Meta:
    """Presentation metadata."""
    author: str = ""
    date: str = ""
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    custom: Dict[str, str] = field(default_factory=dict)


@dataclass
class Slide:
    """One visual unit of a deck."""
    id: str = ""
    layout: Layout = Layout.TITLE_BODY
    title: str = ""
    subtitle: str = ""
    body: List[Block] = field(default_factory=list)
    notes: List[Block] = field(default_factory=list)  # speaker notes
    audio: Optional[Audio] = None
    transition: Optional[str] = None
    background: Optional[str] = None

    def has_title(self) -> bool:
        return bool(self.title)

    def has_body(self) -> bool:
        return bool(self.body)

    def has_notes(self) -> bool:
        return bool(self.notes)

    def notes_text(self) -> str:
        """Speaker notes as plain text, one note per line."""
        return "\n".join(block.text for block in self.notes)

    def bullet_count(self) -> int:
        return sum(1 for block in self.body if block.is_list_item())


@dataclass
class SlideInfo:
    """Summary of a slide used by slide listings."""
    id: str
    section_id: str
    title: str
    layout: Layout


@dataclass
class Section:
    """A named run of consecutive slides (a chapter or module)."""
    id: str = ""
    title: str = ""
    slides: List[Slide] = field(default_factory=list)
    audio: Optional[Audio] = None  # section-level audio

    def slide_count(self) -> int:
        return len(self.slides)

    def find_slide(self, slide_id: str) -> Optional[Slide]:
        for slide in self.slides:
            if slide.id == slide_id:
                return slide
        return None

    def total_duration(self) -> timedelta:
        """
        Total audio duration of the section.

        Section-level audio with a duration takes precedence; otherwise the
        slide-level durations are summed.
        """
        if self.audio is not None and self.audio.duration:
            return self.audio.duration
        total = timedelta(0)
        for slide in self.slides:
            if slide.audio is not None:
                total += slide.audio.duration_or_zero()
        return total

    def has_audio(self) -> bool:
        if self.audio is not None:
            return True
        return any(slide.audio is not None for slide in self.slides)


@dataclass
class Deck:
    """A complete presentation."""
    id: str = ""
    title: str = ""
    sections: List[Section] = field(default_factory=list)
    theme: Optional[Theme] = None
    meta: Meta = field(default_factory=Meta)

    def slide_count(self) -> int:
        return sum(section.slide_count() for section in self.sections)

    def all_slides(self) -> List[Slide]:
        """All slides in deck order."""
        return [slide for section in self.sections for slide in section.slides]

    def find_slide(self, slide_id: str) -> Optional[Slide]:
        for section in self.sections:
            slide = section.find_slide(slide_id)
            if slide is not None:
                return slide
        return None

    def find_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def get_slide(self, slide_id: str) -> Slide:
        """
        Return the slide with ``slide_id``.

        Raises:
            SlideNotFoundError: If no slide in the deck has that id
        """
        slide = self.find_slide(slide_id)
        if slide is None:
            raise SlideNotFoundError(slide_id)
        return slide

    def get_section(self, section_id: str) -> Section:
        section = self.find_section(section_id)
        if section is None:
            raise SectionNotFoundError(section_id)
        return section

    def total_duration(self) -> timedelta:
        total = timedelta(0)
        for section in self.sections:
            total += section.total_duration()
        return total

    def slide_summaries(self) -> List[SlideInfo]:
        return [
            SlideInfo(id=slide.id, section_id=section.id, title=slide.title, layout=slide.layout)
            for section in self.sections
            for slide in section.slides
        ]


@dataclass
class Change:
    """
    A single modification between two deck states.

    ``path`` addresses the changed element, e.g.
    ``sections/section-0/slides/s0-1/title``.
    """
    op: ChangeOp
    path: str
    slide_id: str = ""
    section_id: str = ""
    old_value: Any = None
    new_value: Any = None

    @classmethod
    def add(cls, path: str, value: Any) -> "Change":
        return cls(op=ChangeOp.ADD, path=path, new_value=value)

    @classmethod
    def remove(cls, path: str, value: Any) -> "Change":
        return cls(op=ChangeOp.REMOVE, path=path, old_value=value)

    @classmethod
    def update(cls, path: str, old_value: Any, new_value: Any) -> "Change":
        return cls(op=ChangeOp.UPDATE, path=path, old_value=old_value, new_value=new_value)

    @classmethod
    def move(cls, from_path: str, to_path: str) -> "Change":
        return cls(op=ChangeOp.MOVE, path=from_path, new_value=to_path)


@dataclass
class Diff:
    """Ordered change records for one deck."""
    deck_id: str = ""
    changes: List[Change] = field(default_factory=list)

    def add_change(self, change: Change) -> None:
        self.changes.append(change)

    def is_empty(self) -> bool:
        return not self.changes

    def change_count(self) -> int:
        return len(self.changes)

    def count_by_op(self) -> Dict[ChangeOp, int]:
        counts: Dict[ChangeOp, int] = {}
        for change in self.changes:
            counts[change.op] = counts.get(change.op, 0) + 1
        return counts

    def changes_for(self, op: ChangeOp) -> List[Change]:
        return [change for change in self.changes if change.op == op]

    def add_changes(self) -> List[Change]:
        return self.changes_for(ChangeOp.ADD)

    def remove_changes(self) -> List[Change]:
        return self.changes_for(ChangeOp.REMOVE)

    def update_changes(self) -> List[Change]:
        return self.changes_for(ChangeOp.UPDATE)

    def move_changes(self) -> List[Change]:
        return self.changes_for(ChangeOp.MOVE)
