from typing import Optional

from tag_stats.application.port.tag_stat_port import Number, TagStatPort


class _TagNode:
    __slots__ = ("key", "value", "left", "right")

    def __init__(self, key: str, value: Number):
        self.key = key
        self.value = value
        self.left: Optional["_TagNode"] = None
        self.right: Optional["_TagNode"] = None


class TreeTagStat(TagStatPort):
    """
    태그 문자열 사전순으로 정렬되는 이진 탐색 트리 구현.

    - 새 키는 리프로 삽입하고, 기존 키는 값에 누적한다.
    - 자가 균형을 하지 않으므로 정렬된 순서로 태그가 들어오면 높이가 k 까지 늘어난다.
      (갱신 O(log k) 평균, 최악 O(k)) 재귀 한도에 걸리지 않도록 모든 순회는 반복문으로 처리한다.
    """

    def __init__(self):
        self._root: Optional[_TagNode] = None
        self._size = 0

    def add(self, tag: str, amount: Number) -> None:
        if self._root is None:
            self._root = _TagNode(tag, amount)
            self._size += 1
            return

        node = self._root
        while True:
            if tag < node.key:
                if node.left is None:
                    node.left = _TagNode(tag, amount)
                    self._size += 1
                    return
                node = node.left
            elif tag > node.key:
                if node.right is None:
                    node.right = _TagNode(tag, amount)
                    self._size += 1
                    return
                node = node.right
            else:
                node.value += amount
                return

    def get(self, tag: str, default: Number = 0) -> Number:
        node = self._find(tag)
        return node.value if node is not None else default

    def get_all(self) -> list[tuple[str, Number]]:
        # 중위 순회라 키 순서로 나온다.
        result: list[tuple[str, Number]] = []
        stack: list[_TagNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append((node.key, node.value))
            node = node.right
        return result

    def height(self) -> int:
        if self._root is None:
            return 0
        deepest = 0
        pending = [(self._root, 1)]
        while pending:
            node, depth = pending.pop()
            deepest = max(deepest, depth)
            if node.left is not None:
                pending.append((node.left, depth + 1))
            if node.right is not None:
                pending.append((node.right, depth + 1))
        return deepest

    def __len__(self) -> int:
        return self._size

    def _find(self, tag: str) -> Optional[_TagNode]:
        node = self._root
        while node is not None and node.key != tag:
            node = node.left if tag < node.key else node.right
        return node
