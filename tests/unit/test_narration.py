"""Test narration scripts derived from slide notes and audio."""

import pytest

import slidekit
from slidekit import parse
from slidekit.models import Audio, Block, Slide
from slidekit.narration import audio_script, markdown_to_speech, notes_script


@pytest.mark.parametrize(
    "markdown, expected",
    [
        ("", ""),
        ("   \n", ""),
        ("Hello **world**", "Hello world"),
        ("See [the docs](https://example.com).", "See the docs."),
        ("Run `make test` first.", "Run make test first."),
        ("First paragraph.\n\nSecond one.", "First paragraph.\n\nSecond one."),
        ("Wrapped\nline", "Wrapped line"),
        ("- one\n- two", "one\n\ntwo"),
        ("# Heading\nText", "Heading\n\nText"),
        ("> quoted *words*", "quoted words"),
        ("<div>raw html</div>", "raw html"),
    ],
)
def test_markdown_to_speech(markdown, expected):
    assert markdown_to_speech(markdown) == expected


def test_notes_script_joins_notes():
    slide = Slide(notes=[Block.paragraph("Intro with **emphasis**."), Block.paragraph(""), Block.paragraph("Outro.")])
    assert notes_script(slide) == "Intro with emphasis.\n\nOutro."


def test_audio_script_sources():
    notes = [Block.paragraph("Spoken _text_.")]

    assert audio_script(Slide(notes=notes)) is None
    assert audio_script(Slide(notes=notes, audio=Audio.from_file("a.mp3"))) is None
    assert audio_script(Slide(notes=notes, audio=Audio.from_url("https://x/a.mp3"))) is None
    assert audio_script(Slide(notes=notes, audio=Audio.from_script("Explicit script"))) == "Explicit script"
    assert audio_script(Slide(notes=notes, audio=Audio.from_notes())) == "Spoken text."


def test_audio_script_from_missing_notes():
    assert audio_script(Slide(audio=Audio.from_notes())) == ""


def test_sample_deck_notes(sample_marp):
    deck = parse(sample_marp)
    slide = deck.get_slide("s1-1")
    slide.audio = Audio.from_notes(voice="alloy")

    assert audio_script(slide) == "The architecture uses a modular approach. Each component is independent."


def test_narration_is_public_api():
    slide = Slide(notes=[Block.paragraph("Hello **there**.")], audio=Audio.from_notes())

    assert slidekit.audio_script(slide) == "Hello there."
    assert slidekit.notes_script(slide) == "Hello there."
    assert "audio_script" in slidekit.__all__
