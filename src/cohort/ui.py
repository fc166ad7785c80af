"""User interaction — injected confirm/notify callbacks.

Cohort never opens dialogs itself.  The host supplies an object satisfying
``UserInterface``; headless hosts and tests use :class:`LoggingUI`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

APPLICATION_NAME = "Cohort"


class MessageLevel(Enum):
    """Severity of a message shown to the user."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@runtime_checkable
class UserInterface(Protocol):
    """Callbacks for the few decisions and messages that involve the user."""

    def confirm(self, question: str, title: str = APPLICATION_NAME) -> bool: ...
    def notify(
        self,
        message: str,
        *,
        title: str = APPLICATION_NAME,
        level: MessageLevel = MessageLevel.INFO,
    ) -> None: ...


_LOG_LEVELS = {
    MessageLevel.INFO: logging.INFO,
    MessageLevel.WARNING: logging.WARNING,
    MessageLevel.ERROR: logging.ERROR,
}


class LoggingUI:
    """Headless ``UserInterface``: logs messages and answers every question alike.

    Every call is recorded in ``questions`` / ``messages`` so callers can
    inspect what would have been shown.
    """

    def __init__(self, *, auto_confirm: bool = False) -> None:
        self.auto_confirm = auto_confirm
        self.questions: list[tuple[str, str]] = []
        self.messages: list[tuple[MessageLevel, str, str]] = []

    def confirm(self, question: str, title: str = APPLICATION_NAME) -> bool:
        self.questions.append((title, question))
        logger.info("%s: %s -> %s", title, question, "yes" if self.auto_confirm else "no")
        return self.auto_confirm

    def notify(
        self,
        message: str,
        *,
        title: str = APPLICATION_NAME,
        level: MessageLevel = MessageLevel.INFO,
    ) -> None:
        self.messages.append((level, title, message))
        logger.log(_LOG_LEVELS[level], "%s: %s", title, message)


def bug_message(message: str) -> str:
    """Wrap *message* in the text shown for a probable internal error."""
    return (
        f"{message}\n\n"
        f"This is possibly a bug in {APPLICATION_NAME}.\n"
        "Please inform the developers about what you were doing and\n"
        "what the expected result would have been."
    )
