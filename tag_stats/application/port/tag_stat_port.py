from abc import ABC, abstractmethod

Number = int | float


class TagStatPort(ABC):
    """
    태그 -> 누적값 저장소. 값은 증가만 하며 삭제 연산은 없다.
    """

    @abstractmethod
    def add(self, tag: str, amount: Number) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, tag: str, default: Number = 0) -> Number:
        raise NotImplementedError

    @abstractmethod
    def get_all(self) -> list[tuple[str, Number]]:
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    def __contains__(self, tag: object) -> bool:
        sentinel = object()
        return isinstance(tag, str) and self.get(tag, sentinel) is not sentinel
