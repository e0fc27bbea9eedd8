"""PageEnvironment for running the checkout in a terminal.

The console writes through click; window geometry is the terminal size
plus an optional amount of surrounding chrome.
"""

from __future__ import annotations

import logging
import shutil

import click

from geocheckout.domain.model.security import ViewportGeometry
from geocheckout.domain.ports.page import PageEnvironment

logger = logging.getLogger(__name__)


class TerminalConsole:

    def log(self, *args) -> None:
        click.echo(" ".join(str(a) for a in args))

    def warn(self, *args) -> None:
        click.echo(" ".join(str(a) for a in args), err=True)

    def error(self, *args) -> None:
        click.echo(click.style(" ".join(str(a) for a in args), fg="red"), err=True)


class TerminalPage(PageEnvironment):

    def __init__(self, chrome_width: int = 0, chrome_height: int = 0) -> None:
        self._console = TerminalConsole()
        self._chrome_width = chrome_width
        self._chrome_height = chrome_height
        self.text_selection_enabled = True
        self.reload_requested = False

    @property
    def console(self) -> TerminalConsole:
        return self._console

    def viewport(self) -> ViewportGeometry:
        size = shutil.get_terminal_size()
        return ViewportGeometry(
            outer_width=size.columns + self._chrome_width,
            outer_height=size.lines + self._chrome_height,
            inner_width=size.columns,
            inner_height=size.lines,
        )

    def set_text_selection(self, enabled: bool) -> None:
        self.text_selection_enabled = enabled

    def checkpoint(self) -> None:
        # Set a debugger breakpoint here to exercise the debug probe.
        return None

    def reload(self) -> None:
        logger.info("Page reload requested")
        self.reload_requested = True
