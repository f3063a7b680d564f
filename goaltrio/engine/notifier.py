"""Fire-and-forget broadcast of reminder events to listening surfaces."""

import logging
from dataclasses import asdict, dataclass
from typing import List, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodChangeEvent:
    """Payload of a reflection prompt."""

    has_weekly_change: bool
    has_monthly_change: bool
    current_week_key: str  # e.g. "2025-W52"
    current_month_key: str  # e.g. "2025-12"

    def to_dict(self) -> dict:
        return asdict(self)


class Surface(Protocol):
    """Something that can show a reflection prompt to the user."""

    async def on_period_change(self, event: PeriodChangeEvent) -> None: ...

    async def present(self) -> None: ...


class Notifier:
    """Broadcast channel with zero or more subscribed surfaces.

    Delivery is fire-and-forget: a failing surface is logged and skipped,
    and having no surfaces at all is not an error.
    """

    def __init__(self) -> None:
        self._surfaces: List[Surface] = []

    @property
    def surfaces(self) -> List[Surface]:
        return list(self._surfaces)

    def subscribe(self, surface: Surface) -> None:
        if surface not in self._surfaces:
            self._surfaces.append(surface)

    def unsubscribe(self, surface: Surface) -> None:
        if surface in self._surfaces:
            self._surfaces.remove(surface)

    async def emit(self, event: PeriodChangeEvent) -> int:
        """Deliver `event` to every surface. Returns the number that accepted it."""
        if not self._surfaces:
            logger.debug("No surfaces listening for %s", event)
            return 0

        delivered = 0
        for surface in self.surfaces:
            try:
                await surface.on_period_change(event)
                delivered += 1
            except Exception as e:
                logger.error(f"Surface {surface!r} failed to receive event: {e}")
        return delivered

    async def present(self) -> None:
        """Ask every surface to bring itself to the foreground."""
        for surface in self.surfaces:
            try:
                await surface.present()
            except Exception as e:
                logger.error(f"Surface {surface!r} failed to present: {e}")
