"""slidekit – top-level package

Reads Marp Markdown into a backend-agnostic deck model, writes it back, and
projects it into the compact TOON notation.  Exposes the public API **and**
sets up a minimal logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDEKIT_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise WARNING.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDEKIT_LOG_LEVEL", "WARNING").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

logger = logging.getLogger(__name__)

# Public API re-exports ------------------------------------------------
from .compact_encoder import CompactEncoder  # noqa: E402
from .errors import (  # noqa: E402
    SectionNotFoundError,
    SlideNotFoundError,
    SlidekitError,
    StorageError,
    ThemeNotFoundError,
)
from .json_format import OutputFormat, deck_from_dict, deck_to_dict, format_deck  # noqa: E402
from .markdown_parser import MarkdownParser  # noqa: E402
from .markdown_writer import MarkdownWriter  # noqa: E402
from .models import (  # noqa: E402
    Audio,
    AudioSource,
    Block,
    BlockKind,
    Change,
    ChangeOp,
    Deck,
    Diff,
    Layout,
    Meta,
    Section,
    Slide,
    Theme,
)
from .narration import audio_script, markdown_to_speech, notes_script  # noqa: E402
from .storage import FileStorage, MemoryStorage, Storage  # noqa: E402
from .theme_loader import get_css, get_theme, list_available_themes, validate_theme  # noqa: E402

__version__ = "0.1.0"


def parse(text: str) -> Deck:
    """Parse Marp Markdown into a Deck.  Never fails on malformed input."""
    return MarkdownParser().parse(text)


def encode(deck: Deck) -> str:
    """Render a Deck as Marp Markdown."""
    return MarkdownWriter().encode(deck)


def encode_deck(deck: Deck) -> str:
    """Render a Deck in the compact TOON notation."""
    return CompactEncoder().encode_deck(deck)


def encode_diff(diff: Diff) -> str:
    """Render change records in the compact TOON notation."""
    return CompactEncoder().encode_diff(diff)


def read_file(path, storage: Storage | None = None) -> Deck:
    """
    Read and parse a Marp Markdown file.

    Raises:
        StorageError: If the file cannot be read or is not valid UTF-8
    """
    storage = storage or FileStorage()
    data = storage.read(path)
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("Could not decode %s: %s", path, exc)
        raise StorageError("decoding file", path, exc) from exc
    return parse(text)


def write_file(deck: Deck, path, storage: Storage | None = None) -> None:
    """
    Write ``deck`` as Marp Markdown to ``path``.

    Raises:
        StorageError: If the file cannot be written
    """
    MarkdownWriter().write_file(deck, path, storage)


__all__ = [
    "parse",
    "encode",
    "encode_deck",
    "encode_diff",
    "read_file",
    "write_file",
    "format_deck",
    "deck_to_dict",
    "deck_from_dict",
    "OutputFormat",
    "get_theme",
    "get_css",
    "list_available_themes",
    "validate_theme",
    "notes_script",
    "audio_script",
    "markdown_to_speech",
    "MarkdownParser",
    "MarkdownWriter",
    "CompactEncoder",
    "Storage",
    "FileStorage",
    "MemoryStorage",
    "Deck",
    "Section",
    "Slide",
    "Block",
    "BlockKind",
    "Layout",
    "Theme",
    "Meta",
    "Audio",
    "AudioSource",
    "Diff",
    "Change",
    "ChangeOp",
    "SlidekitError",
    "SlideNotFoundError",
    "SectionNotFoundError",
    "StorageError",
    "ThemeNotFoundError",
]
