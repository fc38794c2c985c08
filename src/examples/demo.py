"""
demo.py – One-shot showcase of a typed wrapper built on typertrack.

Assumes:
  • generator metadata in $TYPERTRACK_* (or a .env file next to this script)
  • no real host SDK: `PrintingAnalytics` stands in for one
"""

from __future__ import annotations

from pprint import pprint
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field

from typertrack import (
    GeneratorContext,
    PropertyEnum,
    SerializableProperties,
    TypedAnalytics,
    on,
)

load_dotenv()


# ────────────────────────────────── 1. Wrapper classes ─────────────────────────────────
class Planet(PropertyEnum):
    EARTH = "earth"
    MARS = "mars"


class Universe(SerializableProperties):
    """Nested object property."""

    name: Optional[str] = None
    planets: Optional[List[Planet]] = None


@on.track("Universe Viewed", description="Fired when a universe page renders")
class UniverseViewed(SerializableProperties):
    universe: Optional[Universe] = None
    related: Optional[List[Universe]] = None
    sample_property_1: Optional[str] = Field(None, alias="Sample property 1")


@on.identify()
class Identify(SerializableProperties):
    email: Optional[str] = None


# ────────────────────────────────── 2. Stand-in host SDK ──────────────────────────────
class PrintingAnalytics:
    def _emit(self, call: str, **message):
        print(f"\n→ {call}")
        message["options"] = message["options"].to_dict()
        pprint(message, width=80)

    def track(self, **message):
        self._emit("track", **message)

    def identify(self, **message):
        self._emit("identify", **message)

    def screen(self, **message):
        self._emit("screen", **message)

    def page(self, **message):
        self._emit("page", **message)

    def group(self, **message):
        self._emit("group", **message)


def main():
    try:
        context = GeneratorContext.from_env()
    except KeyError:
        context = GeneratorContext(
            sdk="analytics-python",
            generator_version="0.1.0",
            tracking_plan_id="tp_demo",
            tracking_plan_version=1,
        )

    client = TypedAnalytics(context, analytics=PrintingAnalytics(), validate=True)

    milky_way = Universe.Builder().name("Milky Way").planets([Planet.EARTH, Planet.MARS]).build()
    andromeda = Universe.Builder().name("Andromeda").build()

    event = (
        UniverseViewed.Builder()
        .universe(milky_way)
        .related([andromeda])
        .sample_property_1(None)  # explicit null is kept
        .build()
    )

    client.universe_viewed(event, user_id="user-1")
    client.identify_traits(Identify.Builder().email("a@example.com").build(), user_id="user-1")
    client.not_in_the_plan()  # reported as "Unknown Analytics Call Fired"


if __name__ == "__main__":
    main()
