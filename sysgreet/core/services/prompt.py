"""
Interactive overwrite prompt.

Blocking, line-oriented: print a menu, read answers until one is valid.
End of input without a valid answer means cancel, so a detached or
piped caller never hangs or crashes here.
"""

from __future__ import annotations

import logging
from typing import TextIO

from sysgreet.core.errors import PromptReadError
from sysgreet.core.models.bootstrap import PromptDecision

logger = logging.getLogger(__name__)

_CHOICES: dict[str, PromptDecision] = {
    "k": PromptDecision.KEEP,
    "keep": PromptDecision.KEEP,
    "o": PromptDecision.OVERWRITE,
    "overwrite": PromptDecision.OVERWRITE,
    "c": PromptDecision.CANCEL,
    "cancel": PromptDecision.CANCEL,
}

MENU = (
    "Choose an option:\n"
    "  [K]eep existing config\n"
    "  [O]verwrite with defaults (backup will be created)\n"
    "  [C]ancel and exit\n"
)
SELECTION_PROMPT = "Selection [K/O/C]: "
INVALID_SELECTION = "Invalid selection. Please choose K, O, or C.\n"


def ask_overwrite(stdin: TextIO, out: TextIO, path: object) -> PromptDecision:
    """Ask whether to keep, overwrite, or cancel for an existing config.

    Args:
        stdin: Line source for answers.
        out: Where the notice, menu, and re-prompts are written.
        path: Config path shown in the notice.

    Returns:
        The user's decision. ``CANCEL`` on end of input.

    Raises:
        PromptReadError: The input stream raised while reading.
    """
    out.write(f"sysgreet bootstrap: configuration already exists at {path}\n")
    out.write(MENU)

    while True:
        out.write(SELECTION_PROMPT)
        out.flush()
        try:
            line = stdin.readline()
        except (OSError, ValueError) as e:
            raise PromptReadError(f"prompt read: {e}") from e

        if line == "":
            logger.debug("Prompt input closed without an answer, treating as cancel")
            out.write("\n")
            return PromptDecision.CANCEL

        choice = line.strip().lower()
        decision = _CHOICES.get(choice)
        if decision is not None:
            return decision
        if choice:
            out.write(INVALID_SELECTION)
