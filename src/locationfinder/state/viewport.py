"""Viewport state — map center and span, moved by resolutions and zoom actions.

Zoom halves or doubles both span axes independently. Each axis is clamped
to [min_span, max_span]; a zoom that would cross a bound stops at the bound.
"""

import logging

from locationfinder.config import settings
from locationfinder.core.types import Coordinate, Span

logger = logging.getLogger(__name__)

ZOOM_FACTOR = 2.0


def default_span() -> Span:
    return Span(settings.default_span, settings.default_span)


def default_center() -> Coordinate:
    return Coordinate(settings.default_latitude, settings.default_longitude)


class ViewportState:
    """Mutable center + span for one session."""

    def __init__(
        self,
        center: Coordinate | None = None,
        span: Span | None = None,
        min_span: float | None = None,
        max_span: float | None = None,
    ):
        self.min_span = min_span if min_span is not None else settings.min_span
        self.max_span = max_span if max_span is not None else settings.max_span
        if not 0 < self.min_span < self.max_span:
            raise ValueError(f"invalid span bounds [{self.min_span}, {self.max_span}]")
        self.center = center or default_center()
        self.span = self._clamp(span or default_span())

    def __repr__(self) -> str:
        return f"ViewportState(center={self.center}, span={self.span})"

    def _clamp_delta(self, delta: float) -> float:
        return min(max(delta, self.min_span), self.max_span)

    def _clamp(self, span: Span) -> Span:
        return Span(
            self._clamp_delta(span.latitude_delta),
            self._clamp_delta(span.longitude_delta),
        )

    def _scale(self, factor: float) -> Span:
        new_span = self._clamp(Span(
            self.span.latitude_delta * factor,
            self.span.longitude_delta * factor,
        ))
        if new_span == self.span:
            logger.debug("Zoom at bound, span unchanged: %s", self.span)
        self.span = new_span
        return new_span

    def zoom_in(self) -> Span:
        return self._scale(1 / ZOOM_FACTOR)

    def zoom_out(self) -> Span:
        return self._scale(ZOOM_FACTOR)

    def recenter(self, coordinate: Coordinate, span: Span | None = None) -> None:
        """Move to a resolved coordinate, resetting span to the default zoom."""
        self.center = coordinate
        self.span = self._clamp(span or default_span())

    def snapshot(self) -> tuple[Coordinate, Span]:
        return self.center, self.span
