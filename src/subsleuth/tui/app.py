from __future__ import annotations

from typing import Sequence

from loguru import logger
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Static, TabbedContent, TabPane

from subsleuth.domain.models import DisplayRow

TAB_IDS = ("info", "subscriptions")
SUBSCRIPTIONS_TAB = TAB_IDS.index("subscriptions")

# Top and bottom border of #table, counted inside its height.
TABLE_BORDER_LINES = 2

COLUMNS = (
    ("User", 12),
    ("Status", 10),
    ("Online", 7),
    ("Offline", 7),
    ("URL", 30),
    ("Created", 30),
)

INFO_TEXT = (
    "Hello!\n\n"
    "This program displays a table of Twitch EventSubs.\n"
    "You can add a new one with 'a' or select one to delete and press 'd'."
)


class SubSleuthApp(App[None]):
    """Two tabs: a static info page and the subscriptions table."""

    TITLE = "SubSleuth"

    CSS = """
    Screen { padding: 1 2; }

    #info-text {
        padding: 2 0;
        content-align: center middle;
        text-align: center;
    }

    #table {
        border: solid $accent;
    }
    """

    BINDINGS = [
        Binding("q,ctrl+c", "quit", "Quit", priority=True),
        Binding("right,l,n,tab", "next_tab", "Next tab", priority=True),
        Binding("left,h,p,shift+tab", "previous_tab", "Previous tab", priority=True),
        Binding("a", "add", "Add"),
        Binding("d", "delete", "Delete"),
    ]

    active_tab: reactive[int] = reactive(0, init=False)

    def __init__(
        self, rows: Sequence[DisplayRow], visible_rows: int | None = None
    ) -> None:
        super().__init__()
        self.rows = list(rows)
        self.visible_rows = visible_rows

    def compose(self) -> ComposeResult:
        with TabbedContent(initial=TAB_IDS[0]):
            with TabPane("SubSleuth", id=TAB_IDS[0]):
                yield Static(INFO_TEXT, id="info-text")
            with TabPane("Subscriptions", id=TAB_IDS[1]):
                table: DataTable[str] = DataTable(id="table", cursor_type="row")
                for title, width in COLUMNS:
                    table.add_column(title, width=width)
                yield table
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        for row in self.rows:
            table.add_row(*row.cells())
        data_rows = self.visible_rows or max(1, self.size.height // 3)
        table.styles.height = data_rows + table.header_height + TABLE_BORDER_LINES
        logger.debug("table populated with {} rows", table.row_count)

    def watch_active_tab(self, tab: int) -> None:
        self.query_one(TabbedContent).active = TAB_IDS[tab]
        if tab == SUBSCRIPTIONS_TAB:
            self.query_one(DataTable).focus()

    def on_tabbed_content_tab_activated(
        self, event: TabbedContent.TabActivated
    ) -> None:
        self.active_tab = TAB_IDS.index(event.pane.id or TAB_IDS[0])

    def action_next_tab(self) -> None:
        self.active_tab = (self.active_tab + 1) % len(TAB_IDS)

    def action_previous_tab(self) -> None:
        self.active_tab = (self.active_tab - 1 + len(TAB_IDS)) % len(TAB_IDS)

    def selected_row(self) -> DisplayRow | None:
        table = self.query_one(DataTable)
        if not table.row_count:
            return None
        return self.rows[table.cursor_row]

    # TODO: create subscriptions through `twitch api post eventsub/subscriptions`
    def action_add(self) -> None:
        if self.active_tab != SUBSCRIPTIONS_TAB:
            return
        self._acknowledge("Adding subscriptions is not implemented yet")

    # TODO: delete subscriptions through `twitch api delete eventsub/subscriptions`
    def action_delete(self) -> None:
        if self.active_tab != SUBSCRIPTIONS_TAB:
            return
        row = self.selected_row()
        if row is None:
            return
        self._acknowledge(
            f"Deleting webhook of {row.display_name} "
            f"(broadcaster id {row.broadcaster_id}) is not implemented yet"
        )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        if self.active_tab != SUBSCRIPTIONS_TAB:
            return
        row = self.rows[event.cursor_row]
        self._acknowledge(
            f"Selected webhook of {row.display_name} "
            f"(broadcaster id {row.broadcaster_id})"
        )

    def _acknowledge(self, message: str) -> None:
        logger.info(message)
        self.notify(message)
