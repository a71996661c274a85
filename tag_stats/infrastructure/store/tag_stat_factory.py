from typing import Callable

from tag_stats.application.port.tag_stat_port import TagStatPort
from tag_stats.application.usecase.aggregation_store import AggregationStore
from tag_stats.domain.errors import UnknownBackendError
from tag_stats.infrastructure.store.mapping_tag_stat import MappingTagStat
from tag_stats.infrastructure.store.tree_tag_stat import TreeTagStat

BACKEND_MAPPING = "mapping"
BACKEND_TREE = "tree"
BACKENDS = (BACKEND_MAPPING, BACKEND_TREE)

_ALIASES = {
    "mapping": BACKEND_MAPPING,
    "map": BACKEND_MAPPING,
    "dict": BACKEND_MAPPING,
    "tree": BACKEND_TREE,
    "bst": BACKEND_TREE,
}

_IMPLEMENTATIONS: dict[str, Callable[[], TagStatPort]] = {
    BACKEND_MAPPING: MappingTagStat,
    BACKEND_TREE: TreeTagStat,
}


def resolve_backend(name: str) -> str:
    """
    대소문자/공백을 무시하고 백엔드 이름(별칭 포함)을 정식 이름으로 바꾼다.
    """
    canonical = _ALIASES.get((name or "").strip().lower())
    if canonical is None:
        raise UnknownBackendError(name, tuple(_ALIASES))
    return canonical


def build_aggregation_store(backend: str = BACKEND_MAPPING) -> AggregationStore:
    canonical = resolve_backend(backend)
    return AggregationStore(_IMPLEMENTATIONS[canonical], backend=canonical)
