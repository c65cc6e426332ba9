"""
Narration scripts for slide audio.

Audio with the ``notes`` source has no payload of its own: the script is
derived from the owning slide's speaker notes.  Notes are Markdown, so they
are rendered with markdown-it-py and flattened to plain text, which keeps
emphasis markers, inline code ticks and link URLs out of the spoken text.
"""
import logging
from typing import Optional

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from .models import AudioSource, Slide

logger = logging.getLogger(__name__)

_markdown = MarkdownIt("commonmark", {"html": True})


def markdown_to_speech(text: str) -> str:
    """
    Flatten Markdown to plain prose.

    Paragraphs are separated by a blank line; everything inside a paragraph
    is collapsed onto one line.
    """
    if not text or not text.strip():
        return ""

    html = _markdown.render(text)
    soup = BeautifulSoup(html, "html.parser")

    paragraphs = []
    for element in soup.find_all(["p", "li", "blockquote", "h1", "h2", "h3", "h4", "h5", "h6", "pre"]):
        # Nested elements are reached through their container.
        if element.find_parent(["li", "blockquote"]) is not None:
            continue
        spoken = " ".join(element.get_text().split())
        if spoken:
            paragraphs.append(spoken)

    if not paragraphs:
        paragraphs = [" ".join(soup.get_text().split())]
    return "\n\n".join(p for p in paragraphs if p)


def notes_script(slide: Slide) -> str:
    """Spoken script derived from the slide's speaker notes."""
    return "\n\n".join(
        script for script in (markdown_to_speech(note.text) for note in slide.notes) if script
    )


def audio_script(slide: Slide) -> Optional[str]:
    """
    Script to synthesize for the slide's audio.

    Returns:
        The explicit script for ``tts`` audio, the notes-derived script for
        ``notes`` audio, ``None`` for recorded audio or when the slide has no
        audio at all
    """
    audio = slide.audio
    if audio is None or not audio.source.needs_tts():
        return None
    if audio.source == AudioSource.TTS:
        return audio.script
    script = notes_script(slide)
    if not script:
        logger.debug("Slide %s derives audio from notes but has none", slide.id)
    return script
