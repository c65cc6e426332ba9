"""Test the compact TOON encoding of decks, slides and diffs."""

from datetime import timedelta

import pytest

from slidekit import encode_deck, encode_diff, parse
from slidekit.compact_encoder import CompactEncoder, format_duration
from slidekit.models import (
    Audio,
    Block,
    Change,
    Deck,
    Diff,
    Layout,
    Meta,
    Section,
    Slide,
)


@pytest.fixture
def encoder():
    return CompactEncoder()


@pytest.fixture
def demo_deck():
    slide = Slide(
        id="s0-0",
        layout=Layout.TITLE,
        title="Hello",
        subtitle="Sub",
        body=[
            Block.bullet("one"),
            Block.bullet("two", 1),
            Block.numbered("n"),
            Block.paragraph("p"),
            Block.code("x=1", "py"),
            Block.image("a.png", "Alt"),
            Block.quote("q"),
            Block.heading("H", 3),
        ],
        notes=[Block.paragraph("Say hi")],
        audio=Audio.from_script("Hello", voice="nova"),
        transition="fade",
    )
    return Deck(
        title="Demo",
        meta=Meta(author="Ann", keywords=["a", "b"]),
        sections=[
            Section(
                id="section-0",
                title="Intro",
                audio=Audio.from_file("intro.mp3", timedelta(minutes=5)),
                slides=[slide],
            )
        ],
    )


@pytest.mark.parametrize(
    "duration, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(minutes=5), "5m0s"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(seconds=1.5), "1.5s"),
        (timedelta(seconds=42), "42s"),
        (timedelta(hours=1, seconds=3), "1h0m3s"),
        (timedelta(hours=1, minutes=2, seconds=3), "1h2m3s"),
        (timedelta(milliseconds=250), "250ms"),
    ],
)
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected


def test_encode_deck(encoder, demo_deck):
    """Test the full line layout of a deck."""
    assert encoder.encode_deck(demo_deck) == (
        "deck Demo\n"
        "meta author Ann\n"
        "meta keywords a, b\n"
        "\n"
        "section section-0 Intro\n"
        "  audio file intro.mp3 duration=5m0s\n"
        "  slide s0-0 title\n"
        "    title Hello\n"
        "    subtitle Sub\n"
        "    bullet one\n"
        "      bullet two\n"
        "    numbered n\n"
        "    para p\n"
        "    code py x=1\n"
        "    image a.png Alt\n"
        "    quote q\n"
        "    heading 3 H\n"
        "    note Say hi\n"
        "    audio tts voice=nova\n"
        "    transition fade\n"
    )


def test_encode_is_deterministic(encoder, demo_deck):
    assert encoder.encode_deck(demo_deck) == encoder.encode_deck(demo_deck)


def test_encode_empty_deck(encoder):
    assert encoder.encode_deck(Deck()) == "deck \n"


def test_section_without_title(encoder):
    out = encoder.encode_deck(Deck(title="T", sections=[Section(id="section-0")]))
    assert out == "deck T\n\nsection section-0\n"


def test_encode_slide_top_level(encoder):
    slide = Slide(id="s1-0", title="Alone", background="#000")
    assert encoder.encode_slide(slide) == "slide s1-0 title_body\n  title Alone\n  background #000\n"


@pytest.mark.parametrize(
    "audio, expected",
    [
        (Audio.from_file("a.mp3"), "audio file a.mp3"),
        (Audio.from_url("https://x/a.mp3", timedelta(seconds=1.5)), "audio url https://x/a.mp3 duration=1.5s"),
        (Audio.from_script("Read this"), "audio tts"),
        (Audio.from_notes(voice="alloy"), "audio notes voice=alloy"),
    ],
)
def test_encode_audio(encoder, audio, expected):
    assert encoder.encode_audio(audio) == expected


def test_block_without_optional_parts(encoder):
    assert encoder.encode_block(Block.code("raw")) == "code raw"
    assert encoder.encode_block(Block.image("pic.png")) == "image pic.png"
    assert encoder.encode_block(Block.numbered("deep", 2)) == "    numbered deep"


def test_encode_slide_list(encoder, sample_marp):
    deck = parse(sample_marp)
    out = encoder.encode_slide_list(deck.slide_summaries())
    lines = out.splitlines()

    assert len(lines) == 9
    assert lines[0] == "slide s0-0 title My Presentation"
    assert lines[4] == "slide s1-2 title_two_col Two Column Layout"


def test_encode_slide_list_without_title(encoder):
    deck = Deck(sections=[Section(id="section-0", slides=[Slide(id="s0-0", layout=Layout.BLANK)])])
    assert encoder.encode_slide_list(deck.slide_summaries()) == "slide s0-0 blank\n"


def test_encode_sample_deck(sample_marp):
    out = encode_deck(parse(sample_marp))

    assert out.startswith("deck My Presentation\nmeta author Jane Doe\nmeta keywords ai, slides\n\n")
    assert "section section-1 Architecture\n  slide s1-0 section\n    title Section 2\n" in out
    assert "    note Welcome to the presentation. This is the introduction.\n" in out
    assert out.count("\nsection ") == 3


def test_encode_diff():
    """Test markers and old/new value lines of each change kind."""
    diff = Diff(deck_id="d1")
    diff.add_change(Change.add("sections/section-0/slides/s0-2", "New slide"))
    diff.add_change(Change.remove("sections/section-0/slides/s0-1", "Old"))
    diff.add_change(Change.update("sections/section-0/slides/s0-0/title", "Hello", "Hi"))
    diff.add_change(Change.move("sections/section-0/slides/s0-0", "sections/section-1/slides/s1-0"))

    assert encode_diff(diff) == (
        "plan deck d1\n"
        "+ sections/section-0/slides/s0-2\n"
        "  + New slide\n"
        "- sections/section-0/slides/s0-1\n"
        "  - Old\n"
        "~ sections/section-0/slides/s0-0/title\n"
        "  - Hello\n"
        "  + Hi\n"
        "> sections/section-0/slides/s0-0\n"
        "  + sections/section-1/slides/s1-0\n"
    )


def test_encode_diff_values(encoder):
    diff = Diff(deck_id="d2", changes=[Change.update("meta/keywords", ["a", "b"], ["a"])])
    assert encoder.encode_diff(diff) == "plan deck d2\n~ meta/keywords\n  - [a b]\n  + [a]\n"


def test_encode_empty_diff(encoder):
    assert encoder.encode_diff(Diff(deck_id="d3")) == "plan deck d3\n"
