import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from wingzam.catalog.catalog import BirdCatalog
from wingzam.catalog.matcher import NameMatcher
from wingzam.system.path_resolver import PathResolver


class FakeTimer:
    """Timer handle returned by FakeScheduler."""

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Scheduler driven by a manual clock instead of the event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every timer that comes due."""
        self.now += seconds
        due = sorted(
            (t for t in self.timers if not t.cancelled and not t.fired and t.when <= self.now),
            key=lambda t: t.when,
        )
        for timer in due:
            timer.fired = True
            timer.callback(*timer.args)

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Get the absolute path to the repository root."""
    return Path(__file__).parent.parent.resolve()


@pytest.fixture
def catalog_data() -> list[dict[str, Any]]:
    """Raw catalog records shaped like the enrichment step's output."""
    return [
        {
            "id": 1,
            "common_name": "Blue Jay",
            "scientific_name": "Cyanocitta cristata",
            "expansion": "Woodland",
            "color": "#1f6fd1",
            "power_text": "Mimics hawks.",
            "wingspan": "38 cm",
            "recording": {
                "lat": "42.4534",
                "lng": "-76.4735",
                "file": "//xeno-canto.org/sounds/blue-jay.mp3",
                "sono": {"med": "//xeno-canto.org/ffts/blue-jay-med.png"},
            },
            "common_names": ["blue jay", "blue-jay"],
        },
        {
            "id": 2,
            "common_name": "Black-capped Chickadee",
            "scientific_name": "Poecile atricapillus",
            "expansion": "Woodland",
            "color": "#2b2b2b",
            "wingspan": 20,
            "common_names": [
                "black-capped chickadee",
                "blackcapped chickadee",
                "black capped chickadee",
            ],
        },
        {
            "id": 3,
            "common_name": "Northern Cardinal",
            "scientific_name": "Cardinalis cardinalis",
            "expansion": "Backyard",
            "color": "#c41e3a",
            "note": "State bird of seven US states.",
            "common_names": ["northern cardinal", "northern-cardinal", "redbird"],
        },
        {
            "id": 4,
            "common_name": "Summer Tanager",
            "scientific_name": "Piranga rubra",
            "expansion": "Woodland",
            "color": "#e34234",
            "common_names": ["summer tanager", "summer-tanager", "redbird"],
        },
    ]


@pytest.fixture
def catalog(catalog_data) -> BirdCatalog:
    """Catalog built from catalog_data."""
    return BirdCatalog.from_data(catalog_data)


@pytest.fixture
def name_matcher(catalog) -> NameMatcher:
    """NameMatcher over the test catalog."""
    return NameMatcher(catalog)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_data) -> Path:
    """Catalog data written to a JSON file."""
    path = tmp_path / "birds.json"
    path.write_text(json.dumps(catalog_data))
    return path


@pytest.fixture
def path_resolver(tmp_path: Path, catalog_file: Path) -> PathResolver:
    """Provide a PathResolver whose writable paths live in a temporary directory."""
    resolver = PathResolver()

    temp_config_dir = tmp_path / "config"
    temp_config_dir.mkdir(parents=True)
    temp_data_dir = tmp_path / "data"
    temp_data_dir.mkdir(parents=True)

    resolver.data_dir = temp_data_dir
    resolver.get_data_dir = lambda: temp_data_dir
    resolver.get_wingzam_config_path = lambda: temp_config_dir / "wingzam.yaml"
    resolver.get_catalog_path = lambda: catalog_file
    return resolver


@pytest.fixture
def scheduler() -> FakeScheduler:
    """Manually advanced scheduler for timer-driven session behaviour."""
    return FakeScheduler()
