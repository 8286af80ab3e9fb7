"""Location Finder CLI — search and autocomplete commands."""

import asyncio
import logging
import sys


def _setup() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    from locationfinder.observability.tracing import configure_tracing
    configure_tracing()


def main() -> None:
    """Resolve a place: locationfinder <query>"""
    if len(sys.argv) < 2:
        print("Usage: locationfinder <query>")
        print('  Example: locationfinder "Ferry Building, San Francisco"')
        sys.exit(1)

    _setup()
    query = " ".join(sys.argv[1:])

    from locationfinder.core.types import display_label
    from locationfinder.pipeline.session import LocationSession

    session = LocationSession(debounce_ms=0)
    place = asyncio.run(session.search(query))

    if place is None:
        for notice in session.drain_notices():
            print(f"Not found: {notice.message}")
        sys.exit(1)

    snapshot = session.map_snapshot()
    print(display_label(place))
    if place.address:
        print(f"  {place.address}")
    print(f"  lat={place.coordinate.latitude:.6f} lng={place.coordinate.longitude:.6f}")
    print(
        f"  viewport span: {snapshot.span.latitude_delta:g}° x {snapshot.span.longitude_delta:g}°"
    )


def complete_main() -> None:
    """List type-ahead candidates: locationfinder-complete <fragment>"""
    if len(sys.argv) < 2:
        print("Usage: locationfinder-complete <fragment>")
        print('  Example: locationfinder-complete "golden ga"')
        sys.exit(1)

    _setup()
    fragment = " ".join(sys.argv[1:])

    from locationfinder.pipeline.session import LocationSession

    session = LocationSession(debounce_ms=0)
    candidates = asyncio.run(session.update_candidates(fragment))

    if not candidates:
        print(f"No candidates for {fragment!r}")
        return

    for i, c in enumerate(candidates, 1):
        line = f"{i:>2}. {c.title}"
        if c.subtitle:
            line += f" — {c.subtitle}"
        print(line)


if __name__ == "__main__":
    main()
