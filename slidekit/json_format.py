"""
JSON projection of the deck model and output-format selection.

``deck_to_dict`` / ``deck_from_dict`` give external callers a way to build
decks without going through Markdown.  Audio durations travel as seconds.
"""
import json
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .compact_encoder import CompactEncoder
from .models import (
    Audio,
    AudioSource,
    Block,
    BlockKind,
    Deck,
    Layout,
    Meta,
    Section,
    Slide,
    SlideInfo,
    Theme,
)


class OutputFormat(str, Enum):
    TOON = "toon"
    JSON = "json"

    def __str__(self):
        return self.value


def _enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = [member.value for member in enum_cls]
        raise ValueError(f"Invalid {field_name} {value!r}; expected one of {valid}") from None


def block_to_dict(block: Block) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": block.kind.value}
    if block.text:
        data["text"] = block.text
    if block.level:
        data["level"] = block.level
    if block.lang:
        data["lang"] = block.lang
    if block.url:
        data["url"] = block.url
    if block.alt:
        data["alt"] = block.alt
    return data


def block_from_dict(data: Dict[str, Any]) -> Block:
    return Block(
        kind=_enum(BlockKind, data.get("kind", "paragraph"), "block kind"),
        text=data.get("text", ""),
        level=int(data.get("level", 0)),
        lang=data.get("lang", ""),
        url=data.get("url", ""),
        alt=data.get("alt", ""),
    )


def audio_to_dict(audio: Audio) -> Dict[str, Any]:
    data: Dict[str, Any] = {"source": audio.source.value}
    for name in ("path", "url", "script", "voice"):
        value = getattr(audio, name)
        if value:
            data[name] = value
    if audio.duration is not None:
        data["duration"] = audio.duration.total_seconds()
    return data


def audio_from_dict(data: Optional[Dict[str, Any]]) -> Optional[Audio]:
    if not data:
        return None
    duration = data.get("duration")
    return Audio(
        source=_enum(AudioSource, data.get("source"), "audio source"),
        path=data.get("path", ""),
        url=data.get("url", ""),
        script=data.get("script", ""),
        duration=timedelta(seconds=duration) if duration is not None else None,
        voice=data.get("voice", ""),
    )


def slide_to_dict(slide: Slide) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": slide.id, "layout": slide.layout.value}
    if slide.title:
        data["title"] = slide.title
    if slide.subtitle:
        data["subtitle"] = slide.subtitle
    if slide.body:
        data["body"] = [block_to_dict(block) for block in slide.body]
    if slide.notes:
        data["notes"] = [block_to_dict(block) for block in slide.notes]
    if slide.audio is not None:
        data["audio"] = audio_to_dict(slide.audio)
    if slide.transition is not None:
        data["transition"] = slide.transition
    if slide.background is not None:
        data["background"] = slide.background
    return data


def slide_from_dict(data: Dict[str, Any]) -> Slide:
    return Slide(
        id=data.get("id", ""),
        layout=_enum(Layout, data.get("layout", Layout.TITLE_BODY.value), "layout"),
        title=data.get("title", ""),
        subtitle=data.get("subtitle", ""),
        body=[block_from_dict(item) for item in data.get("body", [])],
        notes=[block_from_dict(item) for item in data.get("notes", [])],
        audio=audio_from_dict(data.get("audio")),
        transition=data.get("transition"),
        background=data.get("background"),
    )


def deck_to_dict(deck: Deck) -> Dict[str, Any]:
    """Plain-dict form of ``deck``; empty fields are omitted."""
    meta: Dict[str, Any] = {}
    for name in ("author", "date", "description"):
        value = getattr(deck.meta, name)
        if value:
            meta[name] = value
    if deck.meta.keywords:
        meta["keywords"] = list(deck.meta.keywords)
    if deck.meta.custom:
        meta["custom"] = dict(deck.meta.custom)

    data: Dict[str, Any] = {
        "id": deck.id,
        "title": deck.title,
        "meta": meta,
        "sections": [],
    }
    for section in deck.sections:
        section_data: Dict[str, Any] = {
            "id": section.id,
            "title": section.title,
            "slides": [slide_to_dict(slide) for slide in section.slides],
        }
        if section.audio is not None:
            section_data["audio"] = audio_to_dict(section.audio)
        data["sections"].append(section_data)

    if deck.theme is not None:
        theme = {
            name: getattr(deck.theme, name)
            for name in ("name", "primary", "secondary", "background", "font")
            if getattr(deck.theme, name)
        }
        if deck.theme.custom:
            theme["custom"] = dict(deck.theme.custom)
        data["theme"] = theme
    return data


def deck_from_dict(data: Dict[str, Any]) -> Deck:
    """
    Build a Deck from its plain-dict form.

    Raises:
        ValueError: If a layout, block kind or audio source is not recognized
    """
    meta_data = data.get("meta") or {}
    theme_data = data.get("theme")
    theme = None
    if theme_data is not None:
        theme = Theme(
            name=theme_data.get("name", ""),
            primary=theme_data.get("primary", ""),
            secondary=theme_data.get("secondary", ""),
            background=theme_data.get("background", ""),
            font=theme_data.get("font", ""),
            custom=dict(theme_data.get("custom") or {}),
        )

    return Deck(
        id=data.get("id", ""),
        title=data.get("title", ""),
        meta=Meta(
            author=meta_data.get("author", ""),
            date=meta_data.get("date", ""),
            description=meta_data.get("description", ""),
            keywords=list(meta_data.get("keywords") or []),
            custom=dict(meta_data.get("custom") or {}),
        ),
        sections=[
            Section(
                id=section.get("id", ""),
                title=section.get("title", ""),
                slides=[slide_from_dict(slide) for slide in section.get("slides", [])],
                audio=audio_from_dict(section.get("audio")),
            )
            for section in data.get("sections", [])
        ],
        theme=theme,
    )


def format_deck(deck: Deck, fmt=OutputFormat.TOON) -> str:
    """Serialize ``deck`` as TOON (default) or indented JSON."""
    if OutputFormat(fmt) == OutputFormat.JSON:
        return json.dumps(deck_to_dict(deck), indent=2)
    return CompactEncoder().encode_deck(deck)


def format_slide(slide: Slide, fmt=OutputFormat.TOON) -> str:
    if OutputFormat(fmt) == OutputFormat.JSON:
        return json.dumps(slide_to_dict(slide), indent=2)
    return CompactEncoder().encode_slide(slide)


def format_slide_list(slides: List[SlideInfo], fmt=OutputFormat.TOON) -> str:
    if OutputFormat(fmt) == OutputFormat.JSON:
        return json.dumps(
            [
                {"id": s.id, "section_id": s.section_id, "title": s.title, "layout": str(s.layout)}
                for s in slides
            ],
            indent=2,
        )
    return CompactEncoder().encode_slide_list(slides)
