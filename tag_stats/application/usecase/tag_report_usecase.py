from typing import Callable, Iterable, Optional

from tag_stats.application.port.tag_stat_port import TagStatPort
from tag_stats.application.usecase.aggregation_store import AggregationStore
from tag_stats.application.usecase.tag_ranker import bottom_n, top_n
from tag_stats.domain.errors import UnknownCountryError
from tag_stats.domain.tag_ranking import (
    DIRECTION_BOTTOM,
    DIRECTION_TOP,
    DIRECTIONS,
    METRIC_INTERACTION,
    METRIC_VIEWS,
    METRICS,
    SCOPE_COUNTRY,
    SCOPE_GLOBAL,
    CountryTagReport,
    GlobalTagReport,
    TagRanking,
    TagReport,
)

DEFAULT_REPORT_LIMIT = 25

_SELECTORS: dict[str, Callable] = {DIRECTION_TOP: top_n, DIRECTION_BOTTOM: bottom_n}


class TagReportUseCase:
    def __init__(self, store: AggregationStore, limit: int = DEFAULT_REPORT_LIMIT, global_extended: bool = False):
        # 적재가 끝난 저장소를 읽기 전용으로 받아 랭킹만 조립한다.
        self.store = store
        self.limit = limit
        self.global_extended = global_extended

    def rank(
        self,
        metric: str,
        direction: str,
        country: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> TagRanking:
        """
        - country 가 None 이면 전체(global) 범위
        - metric: views | interaction, direction: top | bottom
        """
        if metric not in METRICS:
            raise ValueError(f"Unknown metric {metric!r} (choose from: {', '.join(METRICS)})")
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction {direction!r} (choose from: {', '.join(DIRECTIONS)})")
        limit = self.limit if limit is None else limit

        stats = self._stats_for(metric, country)
        return TagRanking(
            scope=SCOPE_GLOBAL if country is None else SCOPE_COUNTRY,
            country=country,
            metric=metric,
            direction=direction,
            limit=limit,
            entries=_SELECTORS[direction](stats, limit),
        )

    def country_report(self, country: str, limit: Optional[int] = None) -> CountryTagReport:
        return CountryTagReport(
            country=country,
            top_views=self.rank(METRIC_VIEWS, DIRECTION_TOP, country, limit),
            bottom_views=self.rank(METRIC_VIEWS, DIRECTION_BOTTOM, country, limit),
            top_interaction=self.rank(METRIC_INTERACTION, DIRECTION_TOP, country, limit),
            bottom_interaction=self.rank(METRIC_INTERACTION, DIRECTION_BOTTOM, country, limit),
        )

    def global_report(self, limit: Optional[int] = None, extended: Optional[bool] = None) -> GlobalTagReport:
        extended = self.global_extended if extended is None else extended
        report = GlobalTagReport(top_views=self.rank(METRIC_VIEWS, DIRECTION_TOP, None, limit))
        if extended:
            report.bottom_views = self.rank(METRIC_VIEWS, DIRECTION_BOTTOM, None, limit)
            report.top_interaction = self.rank(METRIC_INTERACTION, DIRECTION_TOP, None, limit)
            report.bottom_interaction = self.rank(METRIC_INTERACTION, DIRECTION_BOTTOM, None, limit)
        return report

    def build_report(
        self,
        countries: Iterable[str],
        limit: Optional[int] = None,
        extended: Optional[bool] = None,
    ) -> TagReport:
        return TagReport(
            backend=self.store.backend,
            countries=[self.country_report(c, limit) for c in countries],
            global_report=self.global_report(limit, extended),
        )

    def _stats_for(self, metric: str, country: Optional[str]) -> TagStatPort:
        if country is None:
            return self.store.global_views if metric == METRIC_VIEWS else self.store.global_interaction
        if not self.store.has_country(country):
            raise UnknownCountryError(country)
        if metric == METRIC_VIEWS:
            return self.store.country_views_for(country)
        return self.store.country_interaction_for(country)
