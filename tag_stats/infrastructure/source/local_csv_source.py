import logging
from pathlib import Path
from typing import Iterator

from tag_stats.application.port.record_source_port import RecordSourcePort
from tag_stats.domain.video_record import VideoRecord
from tag_stats.infrastructure.source.trending_csv import TrendingCsvParser, country_from_filename

logger = logging.getLogger(__name__)


class LocalCsvRecordSource(RecordSourcePort):
    def __init__(self, data_dir: str | Path):
        # 폴더 안의 *.csv 를 이름 순으로 읽고, 파일명 앞 두 글자를 국가 코드로 쓴다.
        self.data_dir = Path(data_dir)
        self.parser = TrendingCsvParser()
        self.skipped_files: list[str] = []

    @property
    def skipped_rows(self) -> int:
        return self.parser.skipped_rows

    def csv_files(self) -> list[Path]:
        if not self.data_dir.is_dir():
            raise FileNotFoundError(f"Data directory {self.data_dir} not found")
        return sorted(p for p in self.data_dir.iterdir() if p.is_file() and p.suffix == ".csv")

    def iter_records(self) -> Iterator[VideoRecord]:
        for path in self.csv_files():
            country = country_from_filename(path.name)
            logger.info("[TAG-SOURCE] reading %s | country=%s", path, country)
            try:
                yield from self.parser.parse(path, country, label=str(path))
            except (OSError, ValueError) as exc:
                # 파일 하나가 깨져도 나머지 파일 적재는 계속한다.
                self.skipped_files.append(str(path))
                logger.error("[TAG-SOURCE] Error parsing file %s: %s", path, exc)
