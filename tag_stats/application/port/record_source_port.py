from abc import ABC, abstractmethod
from typing import Iterator

from tag_stats.domain.video_record import VideoRecord


class RecordSourcePort(ABC):
    skipped_rows: int = 0

    @abstractmethod
    def iter_records(self) -> Iterator[VideoRecord]:
        raise NotImplementedError
