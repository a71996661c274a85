import logging
from typing import Callable, Iterable

from tag_stats.application.port.tag_stat_port import TagStatPort
from tag_stats.domain.engagement import engagement_rate, qualifying_tags
from tag_stats.domain.video_record import VideoRecord

logger = logging.getLogger(__name__)


class AggregationStore:
    """
    국가별/전체 태그 누적값(조회수, 참여도 가중 인터랙션)을 한 번의 적재 패스로 쌓는다.

    - 백엔드(mapping/tree)는 실행 단위로 하나만 쓰며, 네 종류의 TagStat 모두 같은 팩토리로 만든다.
    - 조회수가 0인 레코드는 참여도를 정의할 수 없으므로 건너뛰고 경고만 남긴다.
    """

    def __init__(self, tag_stat_factory: Callable[[], TagStatPort], backend: str = "mapping"):
        self.backend = backend
        self._new_tag_stat = tag_stat_factory
        self._country_views: dict[str, TagStatPort] = {}
        self._country_interaction: dict[str, TagStatPort] = {}
        self.global_views: TagStatPort = tag_stat_factory()
        self.global_interaction: TagStatPort = tag_stat_factory()
        self._observed: set[str] = set()
        self.record_count = 0
        self.skipped_records = 0

    def update(self, record: VideoRecord) -> bool:
        self._observed.add(record.country)
        if record.views == 0:
            self.skipped_records += 1
            logger.warning(
                "[TAG-INGEST] skipped zero-view record | video_id=%s, country=%s",
                record.video_id,
                record.country,
            )
            return False

        tags = qualifying_tags(record.tags)
        self.record_count += 1
        if not tags:
            return True

        weighted = engagement_rate(record) * record.views
        country_views = self._country_stat(self._country_views, record.country)
        country_interaction = self._country_stat(self._country_interaction, record.country)
        for tag in tags:
            country_views.add(tag, record.views)
            country_interaction.add(tag, weighted)
            self.global_views.add(tag, record.views)
            self.global_interaction.add(tag, weighted)
        return True

    def update_all(self, records: Iterable[VideoRecord]) -> "AggregationStore":
        for record in records:
            self.update(record)
        return self

    @property
    def countries(self) -> list[str]:
        return sorted(self._observed)

    def has_country(self, country: str) -> bool:
        return country in self._observed

    def country_views_for(self, country: str) -> TagStatPort:
        stat = self._country_views.get(country)
        return stat if stat is not None else self._new_tag_stat()

    def country_interaction_for(self, country: str) -> TagStatPort:
        stat = self._country_interaction.get(country)
        return stat if stat is not None else self._new_tag_stat()

    def merge(self, other: "AggregationStore") -> "AggregationStore":
        """
        다른 파티션에서 만든 저장소의 값을 같은 키끼리 더해 합친다.
        """
        if other.backend != self.backend:
            raise ValueError(f"Cannot merge a {other.backend!r} store into a {self.backend!r} store")

        for country, stat in other._country_views.items():
            _merge_into(self._country_stat(self._country_views, country), stat)
        for country, stat in other._country_interaction.items():
            _merge_into(self._country_stat(self._country_interaction, country), stat)
        _merge_into(self.global_views, other.global_views)
        _merge_into(self.global_interaction, other.global_interaction)

        self._observed |= other._observed
        self.record_count += other.record_count
        self.skipped_records += other.skipped_records
        return self

    def _country_stat(self, by_country: dict[str, TagStatPort], country: str) -> TagStatPort:
        stat = by_country.get(country)
        if stat is None:
            stat = self._new_tag_stat()
            by_country[country] = stat
        return stat


def _merge_into(target: TagStatPort, source: TagStatPort) -> None:
    for tag, value in source.get_all():
        target.add(tag, value)


def fold_partitions(
    partitions: Iterable[Iterable[VideoRecord]],
    store_factory: Callable[[], AggregationStore],
) -> AggregationStore:
    """
    파티션마다 부분 저장소를 만든 뒤 키별 합산으로 병합한다. 최종 값은 순차 적재와 같다.
    """
    merged = store_factory()
    for partition in partitions:
        merged.merge(store_factory().update_all(partition))
    return merged
