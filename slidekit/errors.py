"""
Exceptions raised by slidekit.

Parsing never raises for malformed Markdown; only lookups and storage
access can fail.
"""


class SlidekitError(Exception):
    """Base class for all slidekit errors."""


class SlideNotFoundError(SlidekitError, LookupError):
    """Requested slide id does not exist in the deck."""

    def __init__(self, slide_id: str):
        self.slide_id = slide_id
        super().__init__(f"slide not found: {slide_id}")


class SectionNotFoundError(SlidekitError, LookupError):
    """Requested section id does not exist in the deck."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"section not found: {section_id}")


class ThemeNotFoundError(SlidekitError, FileNotFoundError):
    """No built-in theme with the requested name."""

    def __init__(self, name: str, available=None):
        self.name = name
        self.available = list(available or [])
        super().__init__(f"Theme '{name}' not found. Available themes: {self.available}")


class StorageError(SlidekitError, OSError):
    """Reading or writing the backing text failed."""

    def __init__(self, operation: str, path, cause: Exception):
        self.operation = operation
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{operation} {self.path}: {cause}")
