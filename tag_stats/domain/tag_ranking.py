from dataclasses import dataclass, field
from typing import Optional

SCOPE_COUNTRY = "country"
SCOPE_GLOBAL = "global"

METRIC_VIEWS = "views"
METRIC_INTERACTION = "interaction"
METRICS = (METRIC_VIEWS, METRIC_INTERACTION)

DIRECTION_TOP = "top"
DIRECTION_BOTTOM = "bottom"
DIRECTIONS = (DIRECTION_TOP, DIRECTION_BOTTOM)

TagEntry = tuple[str, float]


@dataclass
class TagRanking:
    scope: str
    metric: str
    direction: str
    limit: int
    country: Optional[str] = None
    entries: list[TagEntry] = field(default_factory=list)


@dataclass
class CountryTagReport:
    country: str
    top_views: TagRanking
    bottom_views: TagRanking
    top_interaction: TagRanking
    bottom_interaction: TagRanking

    def rankings(self) -> list[TagRanking]:
        return [self.top_views, self.bottom_views, self.top_interaction, self.bottom_interaction]


@dataclass
class GlobalTagReport:
    top_views: TagRanking
    bottom_views: Optional[TagRanking] = None
    top_interaction: Optional[TagRanking] = None
    bottom_interaction: Optional[TagRanking] = None

    def rankings(self) -> list[TagRanking]:
        candidates = [self.top_views, self.bottom_views, self.top_interaction, self.bottom_interaction]
        return [r for r in candidates if r is not None]


@dataclass
class TagReport:
    backend: str
    countries: list[CountryTagReport]
    global_report: GlobalTagReport
