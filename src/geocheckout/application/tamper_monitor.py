"""Tamper Countermeasure Monitor.

Watches the page for signs of inspection (context menu, copy and
devtools key combinations, window geometry, a paused debugger, console
usage) and publishes advisory alerts to the AlertBroker.  Nothing here
blocks the checkout flow.

Each capability is installed by ``configure()`` and removed by
``teardown()``.  Periodic probes run as asyncio tasks keyed by
capability; the console and text-selection overrides keep a handle to
the original behaviour and restore it on teardown.

The debugger probe times a host-provided checkpoint routine.  Whether a
paused debugger is observable that way depends entirely on the host, so
the probe is best-effort.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

from geocheckout.application.alert_broker import SECURITY_MARKER, AlertBroker
from geocheckout.domain.model.security import Capability, KeyPress, SecurityConfig
from geocheckout.domain.ports.page import PageEnvironment

logger = logging.getLogger(__name__)

DEVTOOLS_THRESHOLD_PX = 160
DEVTOOLS_POLL_SECONDS = 1.0
DEBUG_PROBE_SECONDS = 4.0
DEBUG_THRESHOLD_SECONDS = 0.1

COPY_KEYS = frozenset({"c", "v", "x", "a"})

LOG_EXEMPT_MARKERS = ("[GEOLOCATION]", SECURITY_MARKER)
WARN_EXEMPT_MARKERS = (SECURITY_MARKER,)


def is_copy_combo(event: KeyPress) -> bool:
    return event.ctrl and event.key in COPY_KEYS


def is_devtools_combo(event: KeyPress) -> bool:
    """F12, Ctrl+Shift+I, Ctrl+Shift+C or Ctrl+U."""
    return (
        event.key == "F12"
        or (event.ctrl and event.shift and event.key in ("I", "C"))
        or (event.ctrl and event.key == "u")
    )


class ConsoleInterception:
    """Replaces the console's ``log``/``warn``/``error`` channels.

    ``restore()`` puts the original callables back.  The error channel
    is wrapped but never reports usage.
    """

    def __init__(self, console: Any, on_usage: Callable[[str], None]) -> None:
        self._console = console
        self._on_usage = on_usage
        self._originals: dict[str, Callable[..., Any]] = {}

    @property
    def active(self) -> bool:
        return bool(self._originals)

    def install(self) -> None:
        if self.active:
            return
        for channel in ("log", "warn", "error"):
            self._originals[channel] = getattr(self._console, channel)

        self._console.log = self._wrap("log", LOG_EXEMPT_MARKERS)
        self._console.warn = self._wrap("warn", WARN_EXEMPT_MARKERS)
        original_error = self._originals["error"]

        def error(*args: Any) -> Any:
            return original_error(*args)

        self._console.error = error

    def restore(self) -> None:
        for channel, original in self._originals.items():
            setattr(self._console, channel, original)
        self._originals.clear()

    def _wrap(self, channel: str, exempt: tuple[str, ...]) -> Callable[..., Any]:
        original = self._originals[channel]

        def wrapper(*args: Any) -> Any:
            first = str(args[0]) if args else ""
            if not any(marker in first for marker in exempt):
                self._on_usage(channel)
            return original(*args)

        return wrapper


class TamperMonitor:

    def __init__(
        self,
        page: PageEnvironment,
        broker: AlertBroker,
        *,
        devtools_interval: float = DEVTOOLS_POLL_SECONDS,
        debug_interval: float = DEBUG_PROBE_SECONDS,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._page = page
        self._broker = broker
        self._devtools_interval = devtools_interval
        self._debug_interval = debug_interval
        self._clock = clock
        self._config = SecurityConfig()
        self._timers: dict[Capability, asyncio.Task] = {}
        self._console: ConsoleInterception | None = None
        self._selection_disabled = False
        self._devtools_open = False

    @property
    def config(self) -> SecurityConfig:
        return self._config

    @property
    def active_timers(self) -> frozenset[Capability]:
        return frozenset(cap for cap, task in self._timers.items() if not task.done())

    # --- Lifecycle ------------------------------------------------------------

    def configure(self, config: SecurityConfig) -> None:
        """Tear down current observers and install those *config* enables.

        Periodic probes need a running event loop.
        """
        self.teardown()
        self._config = config
        enabled = config.enabled

        if Capability.ANTI_COPY in enabled:
            self._page.set_text_selection(False)
            self._selection_disabled = True

        if Capability.ANTI_DEVTOOLS in enabled:
            self._schedule(
                Capability.ANTI_DEVTOOLS,
                self._devtools_interval,
                self.check_devtools_geometry,
            )

        if Capability.ANTI_DEBUG in enabled:
            self._schedule(
                Capability.ANTI_DEBUG, self._debug_interval, self.probe_debugger
            )

        if config.any_enabled:
            self._console = ConsoleInterception(
                self._page.console, lambda channel: self._raise_alert(f"console.{channel}")
            )
            self._console.install()

        logger.info(
            "Tamper monitor configured: %s",
            sorted(cap.value for cap in enabled) or "all off",
        )

    def teardown(self) -> None:
        """Cancel probes and give page-wide state back to the page."""
        for task in self._timers.values():
            task.cancel()
        self._timers.clear()

        if self._console is not None:
            self._console.restore()
            self._console = None

        if self._selection_disabled:
            self._page.set_text_selection(True)
            self._selection_disabled = False

        self._devtools_open = False
        self._config = SecurityConfig(alert_message=self._config.alert_message)

    # --- Event handlers -------------------------------------------------------

    def handle_context_menu(self) -> bool:
        """Return True when the context menu should be suppressed."""
        if Capability.ANTI_RIGHT_CLICK not in self._config.enabled:
            return False
        self._raise_alert("contextmenu")
        return True

    def handle_key_down(self, event: KeyPress) -> bool:
        """Return True when the key press should be suppressed."""
        enabled = self._config.enabled
        if Capability.ANTI_COPY in enabled and is_copy_combo(event):
            self._raise_alert("copy-shortcut")
            return True
        if Capability.ANTI_DEVTOOLS in enabled and is_devtools_combo(event):
            self._raise_alert("devtools-shortcut")
            return True
        return False

    # --- Probes ---------------------------------------------------------------

    def check_devtools_geometry(self) -> bool:
        """Compare outer and inner window size; alert on opening only.

        Returns True when this check saw devtools open up.
        """
        if self._page.viewport().exceeds(DEVTOOLS_THRESHOLD_PX):
            if not self._devtools_open:
                self._devtools_open = True
                self._raise_alert("devtools-geometry")
                return True
        else:
            self._devtools_open = False
        return False

    def probe_debugger(self) -> bool:
        """Time the page checkpoint; a long pause means a debugger stopped it."""
        start = self._clock()
        self._page.checkpoint()
        elapsed = self._clock() - start

        if elapsed > DEBUG_THRESHOLD_SECONDS:
            logger.info("Checkpoint took %.3fs, reloading page", elapsed)
            self._raise_alert("debugger")
            self._page.reload()
            return True
        return False

    # --- Internal helpers -----------------------------------------------------

    def _raise_alert(self, source: str) -> None:
        self._broker.publish(source, self._config.alert_message)

    def _schedule(
        self, capability: Capability, interval: float, probe: Callable[[], Any]
    ) -> None:
        loop = asyncio.get_running_loop()
        self._timers[capability] = loop.create_task(self._repeat(interval, probe))

    @staticmethod
    async def _repeat(interval: float, probe: Callable[[], Any]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                probe()
            except Exception:
                logger.exception("Tamper probe %r failed", probe)
