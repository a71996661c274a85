import logging
from pathlib import PurePath
from typing import IO, Iterator

import pandas as pd

from tag_stats.domain.errors import MalformedRecordError, MalformedTrendingFileError
from tag_stats.domain.video_record import TRENDING_COLUMNS, VideoRecord

logger = logging.getLogger(__name__)

FIELD_PADDING = " \t"


def country_from_filename(name: str) -> str:
    # USvideos.csv -> US
    return PurePath(name).name[:2]


class TrendingCsvParser:
    """
    국가별 트렌딩 CSV 한 개를 VideoRecord 로 디코딩한다.

    - 모든 컬럼을 문자열로 읽고(NA 변환 없음) 필드 앞뒤 공백/탭을 제거한다.
    - 필수 16개 컬럼이 없으면 MalformedTrendingFileError, 추가 컬럼은 무시한다.
    - 형식이 깨진 행은 건너뛰고 skipped_rows 에 센다.
    """

    def __init__(self):
        self.skipped_rows = 0

    def parse(self, source: str | PurePath | IO, country: str, label: str = "") -> Iterator[VideoRecord]:
        frame = self.read_frame(source, label or country)
        missing = [c for c in TRENDING_COLUMNS if c not in frame.columns]
        if missing:
            raise MalformedTrendingFileError(f"{label or country}: missing columns {missing}")

        frame = frame[list(TRENDING_COLUMNS)]
        for position, values in enumerate(frame.itertuples(index=False, name=None), start=1):
            row = dict(zip(TRENDING_COLUMNS, values))
            try:
                yield VideoRecord.from_row(country, row)
            except MalformedRecordError as exc:
                self.skipped_rows += 1
                logger.warning("[TAG-SOURCE] skipped row | file=%s, row=%d, reason=%s", label, position, exc)

    def read_frame(self, source: str | PurePath | IO, label: str = "") -> pd.DataFrame:
        def skip_bad_line(fields: list[str]) -> None:
            # 필드 수가 헤더보다 많은 행
            self.skipped_rows += 1
            logger.warning("[TAG-SOURCE] skipped row | file=%s, reason=too many fields (%d)", label, len(fields))
            return None

        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=skip_bad_line,
            encoding="utf-8",
            encoding_errors="replace",
        )
        frame.columns = [str(c).strip(FIELD_PADDING) for c in frame.columns]
        for column in frame.columns:
            frame[column] = frame[column].str.strip(FIELD_PADDING)
        return frame
