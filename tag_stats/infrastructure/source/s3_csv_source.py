import io
import logging
from typing import Iterator

from botocore.exceptions import BotoCoreError, ClientError

from config.s3_client import build_s3_uri
from tag_stats.application.port.record_source_port import RecordSourcePort
from tag_stats.domain.video_record import VideoRecord
from tag_stats.infrastructure.source.trending_csv import TrendingCsvParser, country_from_filename

logger = logging.getLogger(__name__)


class S3CsvRecordSource(RecordSourcePort):
    """
    S3 버킷 prefix 아래의 트렌딩 CSV 객체들을 읽는 레코드 소스.
    로컬 폴더 소스와 동일하게 객체 이름 앞 두 글자를 국가 코드로 쓰고, 실패한 객체는 건너뛴다.
    """

    def __init__(self, client, bucket: str, prefix: str = ""):
        if not bucket:
            raise ValueError("S3 bucket is not configured (AWS_S3_BUCKET)")
        self.client = client
        self.bucket = bucket
        self.prefix = prefix
        self.parser = TrendingCsvParser()
        self.skipped_files: list[str] = []

    @property
    def skipped_rows(self) -> int:
        return self.parser.skipped_rows

    def csv_keys(self) -> list[str]:
        paginator = self.client.get_paginator("list_objects_v2")
        keys: list[str] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=self.prefix):
            for item in page.get("Contents", []):
                if item["Key"].endswith(".csv"):
                    keys.append(item["Key"])
        return sorted(keys)

    def iter_records(self) -> Iterator[VideoRecord]:
        for key in self.csv_keys():
            uri = build_s3_uri(self.bucket, key)
            country = country_from_filename(key)
            logger.info("[TAG-SOURCE] reading %s | country=%s", uri, country)
            try:
                body = self.client.get_object(Bucket=self.bucket, Key=key)["Body"].read()
                yield from self.parser.parse(io.BytesIO(body), country, label=uri)
            except (BotoCoreError, ClientError, ValueError) as exc:
                self.skipped_files.append(uri)
                logger.error("[TAG-SOURCE] Error parsing file %s: %s", uri, exc)
