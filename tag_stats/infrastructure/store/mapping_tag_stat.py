from tag_stats.application.port.tag_stat_port import Number, TagStatPort


class MappingTagStat(TagStatPort):
    """dict 기반 구현. 태그당 갱신은 평균 O(1)."""

    def __init__(self):
        self._totals: dict[str, Number] = {}

    def add(self, tag: str, amount: Number) -> None:
        self._totals[tag] = self._totals.get(tag, 0) + amount

    def get(self, tag: str, default: Number = 0) -> Number:
        return self._totals.get(tag, default)

    def get_all(self) -> list[tuple[str, Number]]:
        # 삽입 순서 그대로 반환한다. 값 기준 정렬은 랭커가 담당한다.
        return list(self._totals.items())

    def __len__(self) -> int:
        return len(self._totals)
