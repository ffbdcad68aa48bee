import re
from typing import Sequence, Tuple

from associations import AssociationStore
from models import INVALID_INDEX


def search(store: AssociationStore, query: str) -> Tuple[str, ...]:
    if not query:
        return store.keys()
    # The query is literal text, never a pattern.
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return tuple(key for key in store.keys() if pattern.search(key))


def index_or_invalid(results: Sequence[str], index: int) -> int:
    if 0 <= index < len(results):
        return index
    return INVALID_INDEX


def first_index(results: Sequence[str]) -> int:
    return index_or_invalid(results, 0)
