import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from config.s3_client import get_s3_client
from config.settings import S3DatasetSettings, TagStatsSettings
from tag_stats.application.port.record_source_port import RecordSourcePort
from tag_stats.application.usecase.aggregation_store import AggregationStore
from tag_stats.application.usecase.ingestion_usecase import IngestionSummary, IngestionUseCase
from tag_stats.infrastructure.source.local_csv_source import LocalCsvRecordSource
from tag_stats.infrastructure.source.s3_csv_source import S3CsvRecordSource
from tag_stats.infrastructure.store.tag_stat_factory import build_aggregation_store

logger = logging.getLogger(__name__)

SOURCE_LOCAL = "local"
SOURCE_S3 = "s3"


def build_record_source(
    settings: TagStatsSettings,
    s3_settings: Optional[S3DatasetSettings] = None,
    s3_client=None,
) -> RecordSourcePort:
    """
    TAG_STATS_SOURCE 에 따라 레코드 소스를 만든다.
    - local: TAG_STATS_DATA_DIR 폴더의 *.csv
    - s3: AWS_S3_BUCKET / TAG_STATS_S3_PREFIX 아래의 *.csv
    """
    source = settings.source.lower()
    if source == SOURCE_LOCAL:
        return LocalCsvRecordSource(settings.data_dir)
    if source == SOURCE_S3:
        s3_settings = s3_settings or S3DatasetSettings()
        client = s3_client or get_s3_client(s3_settings)
        return S3CsvRecordSource(client, bucket=s3_settings.bucket, prefix=s3_settings.prefix)
    raise ValueError(f"Unknown record source {settings.source!r} (choose from: {SOURCE_LOCAL}, {SOURCE_S3})")


def load_tag_store(
    settings: TagStatsSettings,
    source: Optional[RecordSourcePort] = None,
) -> tuple[AggregationStore, IngestionSummary]:
    store = build_aggregation_store(settings.backend)
    source = source or build_record_source(settings)
    summary = IngestionUseCase(store).ingest(source)
    return store, summary


def run_tag_load_batch_once(settings: Optional[TagStatsSettings] = None) -> Dict[str, Any]:
    """
    설정대로 데이터셋을 한 번 적재하고 요약을 반환하는 단일 실행 진입점.
    """
    settings = settings or TagStatsSettings()
    logger.info("[TAG-LOAD-BATCH] run started | backend=%s, source=%s", settings.backend, settings.source)
    store, summary = load_tag_store(settings)
    result = asdict(summary)
    result["global_tag_count"] = len(store.global_views)
    logger.info("[TAG-LOAD-BATCH] run success: %s", result)
    return result


if __name__ == "__main__":
    # 수동 실행: python -m app.batch.tag_load_batch
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    run_tag_load_batch_once()
