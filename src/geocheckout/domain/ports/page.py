"""Abstract port for the page the checkout is rendered in.

The console and the text-selection style are page-wide state; the
tamper monitor is the only writer while it is active.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from geocheckout.domain.model.security import ViewportGeometry


class PageEnvironment(ABC):

    @property
    @abstractmethod
    def console(self) -> Any:
        """Object exposing ``log``, ``warn`` and ``error`` callables."""

    @abstractmethod
    def viewport(self) -> ViewportGeometry:
        """Current outer and inner window dimensions."""

    @abstractmethod
    def set_text_selection(self, enabled: bool) -> None:
        """Enable or disable text selection across the page."""

    @abstractmethod
    def checkpoint(self) -> None:
        """Run the designated checkpoint routine.

        Hosts with an attachable debugger should make this a point where
        a paused debugger is observable as elapsed time.
        """

    @abstractmethod
    def reload(self) -> None:
        """Force a full reload of the page."""
