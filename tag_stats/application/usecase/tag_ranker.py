import heapq
from typing import Iterable, Mapping

from tag_stats.application.port.tag_stat_port import Number, TagStatPort

TagStats = TagStatPort | Mapping[str, Number] | Iterable[tuple[str, Number]]


def top_n(stats: TagStats, n: int) -> list[tuple[str, Number]]:
    """
    값 내림차순 상위 n개. 같은 값은 태그 오름차순으로 고정한다.
    n 이 항목 수보다 크면 항목 수로 잘라 반환한다.
    """
    entries = _entries(stats)
    return heapq.nsmallest(_clamp(n, len(entries)), entries, key=lambda e: (-e[1], e[0]))


def bottom_n(stats: TagStats, n: int) -> list[tuple[str, Number]]:
    """
    값이 가장 낮은 n개를 낮은 값부터 반환한다. 같은 값은 태그 오름차순.
    """
    entries = _entries(stats)
    return heapq.nsmallest(_clamp(n, len(entries)), entries, key=lambda e: (e[1], e[0]))


def _entries(stats: TagStats) -> list[tuple[str, Number]]:
    if isinstance(stats, TagStatPort):
        return stats.get_all()
    if isinstance(stats, Mapping):
        return list(stats.items())
    return list(stats)


def _clamp(n: int, size: int) -> int:
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return min(n, size)
