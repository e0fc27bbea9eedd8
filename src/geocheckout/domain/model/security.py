"""Tamper countermeasure configuration and the alerts it produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DEFAULT_ALERT_MESSAGE = "Security alert: unauthorized access attempt detected."


class Capability(Enum):
    ANTI_RIGHT_CLICK = "antiRightClick"
    ANTI_COPY = "antiCopy"
    ANTI_DEVTOOLS = "antiDevTools"
    ANTI_DEBUG = "antiDebug"


@dataclass(frozen=True)
class SecurityConfig:
    """Which countermeasures are on.  Everything is off unless asked for."""

    anti_right_click: bool = False
    anti_copy: bool = False
    anti_devtools: bool = False
    anti_debug: bool = False
    alert_message: str = DEFAULT_ALERT_MESSAGE

    @property
    def enabled(self) -> frozenset[Capability]:
        flags = {
            Capability.ANTI_RIGHT_CLICK: self.anti_right_click,
            Capability.ANTI_COPY: self.anti_copy,
            Capability.ANTI_DEVTOOLS: self.anti_devtools,
            Capability.ANTI_DEBUG: self.anti_debug,
        }
        return frozenset(cap for cap, on in flags.items() if on)

    @property
    def any_enabled(self) -> bool:
        return bool(self.enabled)


@dataclass(frozen=True)
class AlertEvent:
    message: str
    source: str = "unknown"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class KeyPress:
    """A key-down event as seen by the page."""

    key: str
    ctrl: bool = False
    shift: bool = False


@dataclass(frozen=True)
class ViewportGeometry:
    outer_width: int
    outer_height: int
    inner_width: int
    inner_height: int

    def exceeds(self, threshold: int) -> bool:
        """True when chrome around the viewport is wider or taller than *threshold*."""
        return (
            self.outer_width - self.inner_width > threshold
            or self.outer_height - self.inner_height > threshold
        )
