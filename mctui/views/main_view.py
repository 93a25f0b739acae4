"""
Rendering of a ViewSnapshot with rich.

Nothing in here changes state; every function builds renderables from the
snapshot it is given.
"""

from rich.align import Align
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mctui.models.instance import Instance
from mctui.models.view_state import Mode, ViewSnapshot

TITLE = "⛏  Minecraft Instance Manager"
HIGHLIGHT_STYLE = "bold yellow on rgb(50,50,80)"
HIGHLIGHT_SYMBOL = ">> "
# Lines used by one list entry (name + info line)
ITEM_HEIGHT = 2
HEADER_HEIGHT = 3
FOOTER_HEIGHT = 3
DETAILS_WIDTH = 48


def render(snapshot: ViewSnapshot, running: set[str], height: int) -> Layout:
    """
    Build the whole screen.

    :param snapshot: the state to draw
    :param running: names of instances that currently look running
    :param height: terminal height in lines, used to scroll the list
    """
    layout = Layout()
    layout.split_column(
        Layout(render_header(), name="header", size=HEADER_HEIGHT),
        Layout(name="body"),
        Layout(render_footer(snapshot), name="footer", size=FOOTER_HEIGHT),
    )
    list_height = max(ITEM_HEIGHT, height - HEADER_HEIGHT - FOOTER_HEIGHT - 2)
    instances = Layout(render_instances(snapshot, running, list_height), name="instances")
    if snapshot.details_visible:
        layout["body"].split_row(
            instances,
            Layout(render_details(snapshot.selected, running), name="details", size=DETAILS_WIDTH),
        )
    else:
        layout["body"].update(instances)
    return layout


def render_header() -> Panel:
    return Panel(
        Align.center(Text(TITLE, style="bold cyan")),
        border_style="cyan",
    )


def visible_window(selected: int | None, count: int, rows: int) -> tuple[int, int]:
    """
    The [start, end) slice of the list that fits in rows entries and
    contains the selected entry.
    """
    rows = max(1, rows)
    if count <= rows:
        return 0, count
    index = selected or 0
    start = min(max(0, index - rows + 1), count - rows)
    return start, start + rows


def info_line(instance: Instance) -> str:
    parts = []
    if instance.mc_version is not None:
        parts.append(f"Minecraft {instance.mc_version}")
    if instance.time_played is not None:
        parts.append(f"Playtime: {instance.time_played}")
    if instance.last_played is not None:
        parts.append(f"Last played: {instance.last_played}")
    return " • ".join(parts)


def render_instances(snapshot: ViewSnapshot, running: set[str], height: int) -> Panel:
    title = f" Select Instance ({len(snapshot.visible)}/{snapshot.total}) "
    subtitle = f" Sort: {snapshot.sort_mode.label} "

    if not snapshot.visible:
        if snapshot.total == 0:
            message = "No Minecraft instances found"
        else:
            message = f"No instances match '{snapshot.query}'"
        return Panel(
            Align.center(Text(message, style="yellow"), vertical="middle"),
            title=" Instances ",
            subtitle=subtitle,
            border_style="white",
        )

    start, end = visible_window(snapshot.selected_index, len(snapshot.visible), height // ITEM_HEIGHT)
    lines: list[RenderableType] = []
    for index in range(start, end):
        instance = snapshot.visible[index]
        selected = index == snapshot.selected_index
        name = Text()
        name.append(HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL))
        name.append("▶ ", style="bold green")
        name.append(instance.name, style="bold white")
        if instance.name in running:
            name.append("  ● running", style="bold green")
        info = Text(f"{' ' * len(HIGHLIGHT_SYMBOL)}  {info_line(instance)}", style="bright_black")
        if selected:
            name.stylize(HIGHLIGHT_STYLE)
            info.stylize(HIGHLIGHT_STYLE)
        lines.append(name)
        lines.append(info)

    return Panel(Group(*lines), title=title, subtitle=subtitle, border_style="cyan")


def _optional(value: object | None, unknown: str = "Unknown") -> str:
    return unknown if value is None else str(value)


def render_details(instance: Instance | None, running: set[str]) -> Panel:
    if instance is None:
        return Panel(Text("Nothing selected", style="bright_black"), title=" Details ", border_style="white")

    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column(overflow="fold")
    table.add_row("Name", instance.name)
    table.add_row("Version", _optional(instance.mc_version))
    table.add_row("Playtime", _optional(instance.time_played, "Never"))
    table.add_row("Last played", _optional(instance.last_played, "Never"))
    table.add_row("Mods", _optional(instance.mod_count, "None"))
    table.add_row(
        "Status",
        Text("Running", style="bold green") if instance.name in running else Text("Not running"),
    )
    table.add_row("Path", instance.path)
    return Panel(table, title=" Details ", border_style="cyan")


NORMAL_HELP = [
    ("↑↓/jk", "yellow", "Navigate"),
    ("Enter", "green", "Launch"),
    ("/", "cyan", "Search"),
    ("s", "cyan", "Sort"),
    ("d", "cyan", "Details"),
    ("o", "cyan", "Open folder"),
    ("q/Esc", "red", "Quit"),
]

SEARCH_HELP = [
    ("↑↓", "yellow", "Navigate"),
    ("Enter", "green", "Launch"),
    ("Esc", "red", "Cancel search"),
]


def render_footer(snapshot: ViewSnapshot) -> Panel:
    text = Text()
    if snapshot.mode is Mode.SEARCH:
        text.append("Search: ", style="bold cyan")
        text.append(snapshot.query)
        text.append("█", style="blink")
        text.append("   ")
        help_entries = SEARCH_HELP
    else:
        help_entries = NORMAL_HELP
    for key, color, label in help_entries:
        text.append(key, style=f"bold {color}")
        text.append(f" {label}  ")
    return Panel(Align.center(text), border_style="white")
