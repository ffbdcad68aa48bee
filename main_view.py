import tkinter as tk
from tkinter import ttk
from typing import Callable, Sequence

from models import INVALID_INDEX, HandlerRow, ViewSnapshot


class MainView:
    def __init__(self, root: tk.Tk, callbacks: dict) -> None:
        self.root = root
        self.callbacks = callbacks
        self._candidates: Sequence[str] = ()

        self._build_menubar()

        main = ttk.Frame(root, padding=25)
        main.grid(row=0, column=0, sticky="nsew")
        root.rowconfigure(0, weight=1)
        root.columnconfigure(0, weight=1)
        main.columnconfigure(0, weight=1)

        top = ttk.Frame(main)
        top.grid(row=0, column=0, sticky="ew", pady=(0, 40))
        top.columnconfigure(0, weight=1)

        self.prompt_var = tk.StringVar(value="Search for a mime, or select one.")
        self.prompt = ttk.Label(top, textvariable=self.prompt_var, anchor=tk.CENTER)
        self.prompt.grid(row=0, column=0, sticky="ew", pady=25)

        self.search_var = tk.StringVar()
        self.search_var.trace_add("write", lambda *_: self._dispatch("on_search_change")(self.search_var.get()))
        self.search_entry = ttk.Entry(top, textvariable=self.search_var)
        self.search_entry.grid(row=1, column=0, sticky="ew", pady=(0, 10))

        self.mime_var = tk.StringVar()
        self.mime_select = ttk.Combobox(top, textvariable=self.mime_var, values=[], state="readonly")
        self.mime_select.grid(row=2, column=0, sticky="ew")
        self.mime_select.bind("<<ComboboxSelected>>", self._on_mime_selected)

        self.handler_frame = ttk.Frame(main, padding=(100, 0, 100, 0))
        self.handler_frame.grid(row=1, column=0, sticky="nsew")
        self.handler_frame.columnconfigure(0, weight=1)
        main.rowconfigure(1, weight=1)

        self.status_var = tk.StringVar(value="0 mime types loaded")
        self.status = ttk.Label(main, textvariable=self.status_var, anchor=tk.W)
        self.status.grid(row=2, column=0, sticky="ew", pady=(8, 0))

        self.root.protocol("WM_DELETE_WINDOW", self._dispatch("on_close"))

    def _dispatch(self, name: str) -> Callable:
        return self.callbacks.get(name, lambda *args, **kwargs: None)

    def _build_menubar(self) -> None:
        menubar = tk.Menu(self.root)
        file_menu = tk.Menu(menubar, tearoff=0)
        self.export_label = "Export..."
        self.reload_label = "Reload Sources"
        file_menu.add_command(label=self.export_label, command=self._dispatch("on_export"))
        file_menu.add_command(label=self.reload_label, command=self._dispatch("on_reload"))
        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self._dispatch("on_close"))
        menubar.add_cascade(label="File", menu=file_menu)
        self.file_menu = file_menu
        self.root.config(menu=menubar)

    def _on_mime_selected(self, _event: tk.Event) -> None:
        index = self.mime_select.current()
        self._dispatch("on_mime_select")(INVALID_INDEX if index < 0 else index)

    def set_status(self, text: str) -> None:
        self.status_var.set(text)

    def set_search(self, value: str) -> None:
        self.search_var.set(value)

    def set_export_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self.file_menu.entryconfig(self.export_label, state=state)

    def select_index(self, index: int) -> None:
        # Programmatic selection does not fire <<ComboboxSelected>>.
        if index == INVALID_INDEX or index >= len(self._candidates):
            self.mime_select.set("")
        else:
            self.mime_select.current(index)

    def render(self, snapshot: ViewSnapshot) -> None:
        self.prompt_var.set(snapshot.prompt)
        if tuple(snapshot.candidates) != tuple(self._candidates):
            self._candidates = tuple(snapshot.candidates)
            self.mime_select.configure(values=list(self._candidates))
        if snapshot.handlers is not None:
            self._populate_handlers(snapshot.selected_mime or "", snapshot.handlers)

    def _populate_handlers(self, mime: str, rows: Sequence[HandlerRow]) -> None:
        for child in self.handler_frame.winfo_children():
            child.destroy()
        if not mime:
            return
        title = ttk.Label(
            self.handler_frame,
            text=f'Available applications for "{mime}"',
            font=("TkDefaultFont", 11, "bold"),
        )
        title.grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 20))
        for idx, row in enumerate(rows, start=1):
            label = ttk.Label(self.handler_frame, text=row.app_id, anchor=tk.W)
            label.grid(row=idx, column=0, sticky="ew", pady=10)
            if row.is_default:
                button = ttk.Button(self.handler_frame, text="Default", state=tk.DISABLED)
            else:
                button = ttk.Button(
                    self.handler_frame,
                    text="Set as Default",
                    command=lambda app=row.app_id: self._dispatch("on_set_default")(app),
                )
            button.grid(row=idx, column=1, sticky="e", pady=10)
