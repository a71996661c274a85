import logging
import time
from dataclasses import dataclass, field

from tag_stats.application.port.record_source_port import RecordSourcePort
from tag_stats.application.usecase.aggregation_store import AggregationStore

logger = logging.getLogger(__name__)


@dataclass
class IngestionSummary:
    backend: str
    record_count: int = 0
    skipped_records: int = 0
    skipped_rows: int = 0
    countries: list[str] = field(default_factory=list)
    elapsed_ms: int = 0


class IngestionUseCase:
    def __init__(self, store: AggregationStore):
        self.store = store

    def ingest(self, source: RecordSourcePort) -> IngestionSummary:
        """
        레코드 소스를 끝까지 읽어 저장소에 순차 적재한다. 파싱부터 집계까지 걸린 시간을 함께 기록한다.
        """
        started = time.perf_counter()
        self.store.update_all(source.iter_records())
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            "[TAG-INGEST] Time taken to parse data using %s: %d milliseconds",
            self.store.backend,
            elapsed_ms,
        )
        summary = IngestionSummary(
            backend=self.store.backend,
            record_count=self.store.record_count,
            skipped_records=self.store.skipped_records,
            skipped_rows=source.skipped_rows,
            countries=self.store.countries,
            elapsed_ms=elapsed_ms,
        )
        if summary.skipped_records or summary.skipped_rows:
            logger.warning(
                "[TAG-INGEST] skipped | zero_view_records=%d, malformed_rows=%d",
                summary.skipped_records,
                summary.skipped_rows,
            )
        return summary
