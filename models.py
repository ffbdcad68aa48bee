from dataclasses import dataclass
import enum
from typing import Any, Dict, Optional, Tuple

# Largest unsigned 32-bit list position; list widgets report it when nothing is selected.
INVALID_INDEX = 0xFFFFFFFF


class Mode(enum.Enum):
    SEARCHING = "searching"
    SELECTING = "selecting"
    SETTING = "setting"


@dataclass(frozen=True)
class AssociationRecord:
    mime_type: str
    handlers: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mime_type": self.mime_type,
            "handlers": list(self.handlers),
        }


@dataclass(frozen=True)
class SearchQueryChanged:
    text: str


@dataclass(frozen=True)
class ItemSelected:
    index: int


@dataclass(frozen=True)
class DefaultRequested:
    app_id: str


@dataclass(frozen=True)
class AppState:
    query: str = ""
    results: Tuple[str, ...] = ()
    selected_index: int = 0
    selected_mime: Optional[str] = None
    mode: Mode = Mode.SEARCHING

    @property
    def no_match(self) -> bool:
        return self.selected_index == INVALID_INDEX


@dataclass(frozen=True)
class HandlerRow:
    app_id: str
    is_default: bool = False


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything the window needs to render one state, computed without side effects."""

    mode: Mode
    prompt: str
    no_match: bool = False
    candidates: Tuple[str, ...] = ()
    selected_mime: Optional[str] = None
    default_handler: Optional[str] = None
    # None leaves the handler panel as it was (searching does not touch it).
    handlers: Optional[Tuple[HandlerRow, ...]] = None
