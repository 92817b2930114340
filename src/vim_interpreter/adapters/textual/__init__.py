"""Textual host integration: key decoding, controller, and editing surface."""

from .controller import (
    TextualUIHooks,
    TextualVimAdapter,
    key_event_from_textual,
    status_text,
)
from .surface import TextAreaSurface

__all__ = [
    "TextAreaSurface",
    "TextualUIHooks",
    "TextualVimAdapter",
    "key_event_from_textual",
    "status_text",
]
