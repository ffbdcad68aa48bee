import os
import sys
from typing import List, Optional

import tkinter as tk
from tkinter import filedialog, messagebox

from associations import AssociationStore, build_store
from controller import Controller
from discovery import discover_sources
from errors import ConfigReadError
from gateway import DefaultHandlerGateway, XdgMimeGateway
from import_export import export_store
from logger import get_logger, setup_logging
from main_view import MainView
from models import DefaultRequested, ItemSelected, SearchQueryChanged, ViewSnapshot
from search import first_index
from settings import StoredSettings, default_settings_path, load_settings, save_settings

logger = get_logger(__name__)


class MainController:
    def __init__(
        self,
        root: tk.Tk,
        store: AssociationStore,
        settings: StoredSettings,
        settings_path: str,
        gateway: Optional[DefaultHandlerGateway] = None,
        sources: Optional[List[str]] = None,
    ) -> None:
        self.root = root
        self.root.title("xdg mimer")
        self.settings = settings
        self.settings_path = settings_path
        self.sources: List[str] = list(sources or [])
        self.gateway: DefaultHandlerGateway = gateway or XdgMimeGateway(
            command=settings.registry_command, timeout=settings.registry_timeout
        )
        self.controller = Controller(store, self.gateway)

        # Default window size and minimum resize bounds.
        self.root.geometry(settings.geometry or "800x600")
        self.root.minsize(480, 360)

        self.view = MainView(
            self.root,
            callbacks={
                "on_search_change": self.on_search_change,
                "on_mime_select": self.on_mime_select,
                "on_set_default": self.on_set_default,
                "on_export": self.export,
                "on_reload": self.reload_sources,
                "on_close": self.on_close,
            },
        )
        self._render(self.controller.view())

    @property
    def store(self) -> AssociationStore:
        return self.controller.store

    def _render(self, snapshot: ViewSnapshot) -> None:
        self.view.render(snapshot)
        self.view.set_export_enabled(len(self.store) > 0)
        self.view.set_status(f"{len(snapshot.candidates)} of {len(self.store)} mime types shown")

    def on_search_change(self, text: str) -> None:
        self._render(self.controller.dispatch(SearchQueryChanged(text)))
        # A list widget whose model changed selects its first row, or nothing when empty.
        index = first_index(self.controller.state.results)
        self.view.select_index(index)
        self._render(self.controller.dispatch(ItemSelected(index)))

    def on_mime_select(self, index: int) -> None:
        self._render(self.controller.dispatch(ItemSelected(index)))

    def on_set_default(self, app_id: str) -> None:
        self._render(self.controller.dispatch(DefaultRequested(app_id)))

    def export(self) -> None:
        if not len(self.store):
            messagebox.showinfo("Nothing to export", "There are no associations to export.")
            return
        file_path = filedialog.asksaveasfilename(
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx"), ("CSV files", "*.csv"), ("JSON files", "*.json"), ("All files", "*.*")],
            title="Export mime associations",
        )
        if not file_path:
            return
        try:
            export_store(file_path, self.store)
        except (OSError, RuntimeError) as exc:
            messagebox.showerror("Export failed", str(exc))

    def reload_sources(self) -> None:
        sources = discover_sources(self.settings.extra_sources)
        try:
            store = build_store(sources)
        except ConfigReadError as exc:
            logger.error("%s", exc)
            messagebox.showerror("Reload failed", str(exc))
            return
        self.sources = sources
        self.controller = Controller(store, self.gateway)
        self.view.set_search("")

    def on_close(self) -> None:
        self.settings.geometry = self.root.winfo_geometry()
        save_settings(self.settings_path, self.settings)
        self.root.destroy()


def main() -> None:
    settings_path = os.getenv("XDG_MIMER_SETTINGS") or default_settings_path()
    settings = load_settings(settings_path)
    if settings.log_level:
        setup_logging(settings.log_level)
    else:
        setup_logging()
    sources = discover_sources(settings.extra_sources)
    try:
        store = build_store(sources)
    except ConfigReadError as exc:
        logger.error("%s", exc)
        try:
            root = tk.Tk()
            root.withdraw()
            messagebox.showerror("xdg mimer", str(exc))
            root.destroy()
        except tk.TclError:
            pass
        sys.exit(1)
    root = tk.Tk()
    MainController(root, store, settings, settings_path, sources=sources)
    root.mainloop()


if __name__ == "__main__":
    main()
