import re
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from errors import ConfigReadError
from logger import get_logger
from models import AssociationRecord
from utils import split_tokens, unique_sorted

logger = get_logger(__name__)

# KEY=VALUE; where VALUE is itself a ;-separated list and the trailing ; is mandatory.
LINE_PATTERN = re.compile(r"^(.*?)=(.*);$")


def parse_line(line: str) -> Optional[Tuple[str, List[str]]]:
    match = LINE_PATTERN.match(line)
    if not match:
        return None
    key = match.group(1).strip()
    if not key:
        return None
    return key, split_tokens(match.group(2))


def parse_text(text: str) -> Iterator[Tuple[str, List[str]]]:
    # Only \n ends a line; a trailing \r is dropped.
    for raw in text.split("\n"):
        line = raw[:-1] if raw.endswith("\r") else raw
        parsed = parse_line(line)
        if parsed is None:
            if line.strip():
                logger.debug("Skipping line without associations: %r", line)
            continue
        yield parsed


def read_source(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(path, str(exc)) from exc


class AssociationStore:
    """Read-only mapping of mime type to its merged, sorted handlers."""

    def __init__(self, records: Iterable[AssociationRecord] = ()) -> None:
        ordered = sorted(records, key=lambda record: record.mime_type)
        self._records: Tuple[AssociationRecord, ...] = tuple(ordered)
        self._index: Dict[str, AssociationRecord] = {record.mime_type: record for record in ordered}
        if len(self._index) != len(self._records):
            raise ValueError("Duplicate mime types in association records.")
        self._keys: Tuple[str, ...] = tuple(record.mime_type for record in ordered)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Sequence[str]]]) -> "AssociationStore":
        merged: Dict[str, List[str]] = {}
        for key, tokens in pairs:
            merged.setdefault(key, []).extend(tokens)
        # Dedupe only once everything is merged so source order never matters.
        return cls(AssociationRecord(key, tuple(unique_sorted(tokens))) for key, tokens in merged.items())

    def keys(self) -> Tuple[str, ...]:
        return self._keys

    def records(self) -> Tuple[AssociationRecord, ...]:
        return self._records

    def get(self, mime_type: str) -> Optional[AssociationRecord]:
        return self._index.get(mime_type)

    def __getitem__(self, mime_type: str) -> AssociationRecord:
        return self._index[mime_type]

    def __contains__(self, mime_type: object) -> bool:
        return mime_type in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"AssociationStore({len(self._records)} mime types)"


def build_store(paths: Sequence[str]) -> AssociationStore:
    """Read every source, then merge; any unreadable source aborts the whole build."""
    texts = [(path, read_source(path)) for path in paths]
    pairs: List[Tuple[str, List[str]]] = []
    for path, text in texts:
        found = list(parse_text(text))
        logger.debug("Parsed %d association lines from %s", len(found), path)
        pairs.extend(found)
    store = AssociationStore.from_pairs(pairs)
    logger.info("Loaded %d mime types from %d source(s)", len(store), len(paths))
    return store
