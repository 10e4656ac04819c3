#!/usr/bin/env python3
"""Tasknest TUI — personal task list powered by Textual."""

from __future__ import annotations

import logging
import sys

from rich.markup import escape
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    LoadingIndicator,
    Static,
)

from tasknest import (
    COLOR_PALETTE,
    FILTER_ALL,
    FILTER_COMPLETED,
    FILTER_INCOMPLETE,
    FILTER_UNCATEGORIZED,
    LANGUAGE_OPTIONS,
    THEME_PREFERENCES,
    UNCATEGORIZED_COLOR,
    AppState,
    FileKeyValueStore,
    ValidationError,
    category_filter,
    language_label,
    load_config,
    log_path,
    store_dir,
    translate,
    workspace_root,
)
from tasknest.logging_setup import setup_logging
from tasknest.view import CATEGORY_PREFIX

logger = logging.getLogger("tasknest.cli")


CSS = """
#loading {
    height: 1fr;
}

#main-layout {
    height: 1fr;
    display: none;
}

#filter-bar {
    height: auto;
    padding: 0 1;
    background: $primary-background;
}

#subtitle {
    color: $text-muted;
    padding: 0 1;
}

#tasks-table {
    height: 1fr;
}

#empty-list {
    color: $text-muted;
    padding: 1 2;
}

#settings-bar {
    height: auto;
    padding: 0 1;
    color: $text-muted;
}

.entry-row {
    height: auto;
}

.entry-row Input {
    width: 1fr;
}

.entry-row Static {
    width: auto;
    padding: 1 1;
}

ConfirmScreen {
    align: center middle;
}

#confirm-dialog {
    width: 60;
    height: auto;
    border: thick $error;
    background: $surface;
    padding: 1 2;
}

#confirm-title {
    text-style: bold;
}

#confirm-buttons {
    height: auto;
    align-horizontal: right;
    margin-top: 1;
}
"""


# ── Screens ────────────────────────────────────────────────────


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no gate in front of destructive actions."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, title: str, body: str, cancel: str, confirm: str) -> None:
        super().__init__()
        self._title = title
        self._body = body
        self._cancel = cancel
        self._confirm = confirm

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(self._title, id="confirm-title"),
            Static(self._body),
            Horizontal(
                Button(self._cancel, id="cancel"),
                Button(self._confirm, id="confirm", variant="error"),
                id="confirm-buttons",
            ),
            id="confirm-dialog",
        )

    @on(Button.Pressed)
    def _on_button(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")

    def action_cancel(self) -> None:
        self.dismiss(False)


# ── Main app ───────────────────────────────────────────────────


class TasknestApp(App):
    """Tasknest — tasks, categories and filters in the terminal."""

    TITLE = "Tasknest"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("a", "focus_task_input", "Add"),
        Binding("g", "cycle_new_task_category", "Add to"),
        Binding("space", "toggle_task", "Done"),
        Binding("x", "delete_task", "Delete"),
        Binding("c", "cycle_task_category", "Category"),
        Binding("f", "next_filter", "Filter"),
        Binding("n", "focus_category_input", "New Cat."),
        Binding("k", "cycle_category_color", "Color"),
        Binding("D", "delete_category", "Del Cat."),
        Binding("t", "cycle_theme", "Theme"),
        Binding("l", "cycle_language", "Lang"),
        Binding("escape", "blur_focus", "Back"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, state: AppState) -> None:
        super().__init__()
        self.app_state = state
        # Picked in the entry rows, independent of the active filter.
        self._new_task_category: str | None = None
        self._new_category_color = COLOR_PALETTE[0]

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Hide state-changing bindings until the startup load has finished."""
        if action in ("blur_focus", "quit"):
            return True
        return True if self.app_state.ready else None

    def compose(self) -> ComposeResult:
        yield Header()
        yield LoadingIndicator(id="loading")
        yield Vertical(
            Static(id="filter-bar"),
            Static(id="subtitle"),
            DataTable(id="tasks-table", cursor_type="row", zebra_stripes=True),
            Static(id="empty-list"),
            Horizontal(Static(id="task-target"), Input(id="task-input"), classes="entry-row"),
            Horizontal(Static(id="category-color"), Input(id="category-input"), classes="entry-row"),
            Static(id="settings-bar"),
            id="main-layout",
        )
        yield Footer()

    async def on_mount(self) -> None:
        await self.app_state.load()
        self.app_state.subscribe(self._render_state)
        self.query_one("#loading").display = False
        self.query_one("#main-layout").display = True
        table = self.query_one("#tasks-table", DataTable)
        table.add_columns("", "Title", "Category")
        self._render_state()
        table.focus()

    # ---- rendering ----

    def _t(self, key: str, **params) -> str:
        return translate(key, self.app_state.settings.active_locale, **params)

    def _render_state(self) -> None:
        settings = self.app_state.settings
        self.theme = "textual-dark" if settings.active_palette.is_dark else "textual-light"
        self.sub_title = self._t("header_title")

        counts = self.app_state.counts()
        entries = [
            (FILTER_ALL, self._t("filter_all"), None),
            (FILTER_INCOMPLETE, self._t("filter_open"), None),
            (FILTER_COMPLETED, self._t("filter_completed"), None),
            (FILTER_UNCATEGORIZED, self._t("uncategorized"), UNCATEGORIZED_COLOR),
        ]
        for c in self.app_state.categories.categories:
            entries.append((category_filter(c.id), c.name, c.color))

        parts = []
        for key, label, color in entries:
            swatch = f"[{color}]■[/] " if color else ""
            text = f"{swatch}{escape(label)} {counts.get(key, 0)}"
            parts.append(f"[reverse] {text} [/]" if key == self.app_state.filter else f" {text} ")
        self.query_one("#filter-bar", Static).update(" ".join(parts))

        visible = self.app_state.visible_tasks()
        self.query_one("#subtitle", Static).update(self._t("header_subtitle", count=len(visible)))

        table = self.query_one("#tasks-table", DataTable)
        cursor = table.cursor_row
        table.clear()
        for task in visible:
            category = self.app_state.category_for(task)
            table.add_row(
                "✔" if task.completed else "·",
                f"[strike]{escape(task.title)}[/]" if task.completed else escape(task.title),
                f"[{category.color}]■[/] {escape(category.name)}",
                key=task.id,
            )
        if visible:
            table.move_cursor(row=min(cursor, len(visible) - 1))
        empty = self.query_one("#empty-list", Static)
        empty.display = not visible
        empty.update(self._t("empty_list"))

        self.query_one("#task-input", Input).placeholder = self._t("input_placeholder")
        self.query_one("#category-input", Input).placeholder = self._t("category_name_placeholder")
        self._render_entry_rows()
        self.query_one("#settings-bar", Static).update(
            f"{self._t('theme_title')}: {self._t('theme_' + settings.theme_preference)}   "
            f"{self._t('language_title')}: {language_label(settings.language_preference, settings.active_locale)}"
        )

    def _render_entry_rows(self) -> None:
        target = None
        if self._new_task_category is not None:
            target = self.app_state.categories.find(self._new_task_category)
        if target is None:
            self._new_task_category = None  # never picked, or deleted since
            color, name = UNCATEGORIZED_COLOR, self._t("uncategorized")
        else:
            color, name = target.color, target.name
        self.query_one("#task-target", Static).update(f"{self._t('add_to')}: [{color}]■[/] {escape(name)}")
        self.query_one("#category-color", Static).update(
            f"{self._t('category_color')}: [{self._new_category_color}]■[/]"
        )

    def _selected_task_id(self) -> str | None:
        table = self.query_one("#tasks-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _col_key = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    def _selected_category_id(self) -> str | None:
        """Category of the active filter, or None for the built-in filters."""
        current = self.app_state.filter
        if current == FILTER_UNCATEGORIZED or not current.startswith(CATEGORY_PREFIX):
            return None
        return current[len(CATEGORY_PREFIX):]

    # ---- inputs ----

    @on(Input.Submitted, "#task-input")
    def _on_task_submitted(self, event: Input.Submitted) -> None:
        category_id = self._new_task_category
        if category_id is not None and self.app_state.categories.find(category_id) is None:
            category_id = None
        try:
            self.app_state.add_task(event.value, category_id)
        except ValidationError:
            self.notify(self._t("error_task_empty"), title=self._t("error_title"), severity="error")
            return
        event.input.value = ""
        self._new_task_category = None
        self._render_entry_rows()

    @on(Input.Submitted, "#category-input")
    def _on_category_submitted(self, event: Input.Submitted) -> None:
        try:
            self.app_state.add_category(event.value, self._new_category_color)
        except ValidationError:
            self.notify(self._t("error_category_empty"), title=self._t("error_title"), severity="error")
            return
        event.input.value = ""
        self._new_category_color = COLOR_PALETTE[0]
        self._render_entry_rows()

    # ---- actions ----

    def action_focus_task_input(self) -> None:
        self.query_one("#task-input", Input).focus()

    def action_focus_category_input(self) -> None:
        self.query_one("#category-input", Input).focus()

    def action_blur_focus(self) -> None:
        self.query_one("#tasks-table", DataTable).focus()

    def action_toggle_task(self) -> None:
        task_id = self._selected_task_id()
        if task_id is not None:
            self.app_state.toggle_task(task_id)

    def action_delete_task(self) -> None:
        task_id = self._selected_task_id()
        if task_id is not None:
            self.app_state.remove_task(task_id)

    def action_cycle_task_category(self) -> None:
        task_id = self._selected_task_id()
        task = self.app_state.tasks.find(task_id) if task_id else None
        if task is None:
            return
        options: list[str | None] = [None] + [c.id for c in self.app_state.categories.categories]
        try:
            nxt = options[(options.index(task.category) + 1) % len(options)]
        except ValueError:
            nxt = None  # dangling id
        self.app_state.reassign_task(task.id, nxt)

    def action_cycle_new_task_category(self) -> None:
        options: list[str | None] = [None] + [c.id for c in self.app_state.categories.categories]
        try:
            self._new_task_category = options[(options.index(self._new_task_category) + 1) % len(options)]
        except ValueError:
            self._new_task_category = None
        self._render_entry_rows()

    def action_cycle_category_color(self) -> None:
        idx = COLOR_PALETTE.index(self._new_category_color)
        self._new_category_color = COLOR_PALETTE[(idx + 1) % len(COLOR_PALETTE)]
        self._render_entry_rows()

    def action_next_filter(self) -> None:
        filters = [FILTER_ALL, FILTER_INCOMPLETE, FILTER_COMPLETED, FILTER_UNCATEGORIZED]
        filters += [category_filter(c.id) for c in self.app_state.categories.categories]
        try:
            nxt = filters[(filters.index(self.app_state.filter) + 1) % len(filters)]
        except ValueError:
            nxt = FILTER_ALL
        self.app_state.select_filter(nxt)

    def action_delete_category(self) -> None:
        category_id = self._selected_category_id()
        if category_id is None or self.app_state.categories.find(category_id) is None:
            return

        def _confirmed(ok: bool | None) -> None:
            if ok:
                self.app_state.remove_category(category_id)

        self.push_screen(
            ConfirmScreen(
                self._t("delete_category_title"),
                self._t("delete_category_body"),
                self._t("cancel"),
                self._t("delete"),
            ),
            _confirmed,
        )

    def action_cycle_theme(self) -> None:
        current = self.app_state.settings.theme_preference
        idx = THEME_PREFERENCES.index(current) if current in THEME_PREFERENCES else -1
        self.app_state.set_theme_preference(THEME_PREFERENCES[(idx + 1) % len(THEME_PREFERENCES)])

    def action_cycle_language(self) -> None:
        codes = [code for code, _label in LANGUAGE_OPTIONS]
        current = self.app_state.settings.language_preference
        idx = codes.index(current) if current in codes else -1
        self.app_state.set_language_preference(codes[(idx + 1) % len(codes)])

    async def action_quit(self) -> None:
        """Every exit binding lands here, so queued writes reach the store first."""
        await self.app_state.flush()
        self.exit()


def main() -> None:
    root = workspace_root()
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Workspace not usable: {root} ({e})")
        print("Set TASKNEST_ROOT to a writable directory.")
        sys.exit(1)

    config = load_config(root)
    setup_logging(log_file=log_path(root, config), file_level=config.log_level)
    logger.info("Starting Tasknest root=%s", root)

    state = AppState(FileKeyValueStore(store_dir(root, config)))
    TasknestApp(state).run()


if __name__ == "__main__":
    main()
