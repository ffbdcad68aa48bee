from dataclasses import replace
from typing import Optional, Union

from associations import AssociationStore
from gateway import DefaultHandlerGateway
from logger import get_logger
from models import (
    INVALID_INDEX,
    AppState,
    DefaultRequested,
    HandlerRow,
    ItemSelected,
    Mode,
    SearchQueryChanged,
    ViewSnapshot,
)
from search import index_or_invalid, search

logger = get_logger(__name__)

Event = Union[SearchQueryChanged, ItemSelected, DefaultRequested]

PROMPT_EMPTY = "Search for a mime, or directly select one from the dropdown menu."
PROMPT_SEARCHED = "You searched: {query}"
PROMPT_NO_MATCH = "Your search doesn't match any mime."


def initial_state(store: AssociationStore) -> AppState:
    return AppState(results=search(store, ""))


def handle(state: AppState, event: Event, store: AssociationStore, gateway: DefaultHandlerGateway) -> AppState:
    if isinstance(event, SearchQueryChanged):
        logger.debug("[%s] Searched for: %s", Mode.SEARCHING.value, event.text)
        return replace(state, mode=Mode.SEARCHING, query=event.text, results=search(store, event.text))
    if isinstance(event, ItemSelected):
        index = index_or_invalid(state.results, event.index)
        if index == INVALID_INDEX:
            logger.debug("[%s] The search didn't find anything.", Mode.SELECTING.value)
            return replace(state, mode=Mode.SELECTING, selected_index=INVALID_INDEX, selected_mime=None)
        mime = state.results[index]
        logger.debug("[%s] Selected item: %s", Mode.SELECTING.value, mime)
        return replace(state, mode=Mode.SELECTING, selected_index=index, selected_mime=mime)
    if isinstance(event, DefaultRequested):
        if state.selected_mime is None:
            logger.warning("Ignoring default request for %s: no mime type selected", event.app_id)
        else:
            gateway.set(state.selected_mime, event.app_id)
        return replace(state, mode=Mode.SETTING)
    raise TypeError(f"Unsupported event: {event!r}")


def _prompt(state: AppState) -> str:
    if state.no_match:
        return PROMPT_NO_MATCH
    if not state.query:
        return PROMPT_EMPTY
    return PROMPT_SEARCHED.format(query=state.query)


def project(state: AppState, store: AssociationStore, gateway: DefaultHandlerGateway) -> ViewSnapshot:
    snapshot = ViewSnapshot(
        mode=state.mode,
        prompt=_prompt(state),
        no_match=state.no_match,
        candidates=state.results,
        selected_mime=state.selected_mime,
    )
    if state.mode == Mode.SEARCHING:
        return snapshot
    record = store.get(state.selected_mime) if state.selected_mime is not None else None
    if record is None:
        return replace(snapshot, handlers=())
    default: Optional[str] = gateway.query(state.selected_mime)
    current = default.strip() if default else ""
    rows = tuple(HandlerRow(app_id=app, is_default=bool(current) and app.strip() == current) for app in record.handlers)
    return replace(snapshot, default_handler=default, handlers=rows)


class Controller:
    """Owns the interaction state; the window feeds it events and renders what it returns."""

    def __init__(self, store: AssociationStore, gateway: DefaultHandlerGateway) -> None:
        self.store = store
        self.gateway = gateway
        self.state = initial_state(store)

    def dispatch(self, event: Event) -> ViewSnapshot:
        self.state = handle(self.state, event, self.store, self.gateway)
        return self.view()

    def view(self) -> ViewSnapshot:
        return project(self.state, self.store, self.gateway)
