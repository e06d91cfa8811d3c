"""
ASCII-art text via pyfiglet.
"""

from __future__ import annotations

import logging

import pyfiglet

logger = logging.getLogger(__name__)

FALLBACK_FONT = "standard"


def render_ascii(text: str, font: str = FALLBACK_FONT, width: int = 200) -> str:
    """Render ``text`` as FIGlet art. Unknown fonts fall back to ``standard``."""
    try:
        art = pyfiglet.figlet_format(text, font=font or FALLBACK_FONT, width=width)
    except pyfiglet.FontNotFound:
        logger.warning("Unknown ASCII font %r — using %r", font, FALLBACK_FONT)
        art = pyfiglet.figlet_format(text, font=FALLBACK_FONT, width=width)
    return art.rstrip("\n")
