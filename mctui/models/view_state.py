from dataclasses import dataclass, field, replace
from enum import Enum

from mctui.models.instance import Instance
from mctui.models.selection import SelectionCursor
from mctui.sort.instance_sorting import sort_instances
from mctui.utils.constants import SortMode
from mctui.utils.search import filter_instances


class Mode(Enum):
    NORMAL = "Normal"
    SEARCH = "Search"


# Input events, one per key press


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class NavigateDown:
    pass


@dataclass(frozen=True)
class NavigateUp:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class OpenFolder:
    pass


@dataclass(frozen=True)
class CycleSort:
    pass


@dataclass(frozen=True)
class EnterSearch:
    pass


@dataclass(frozen=True)
class ExitSearch:
    pass


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class ToggleDetails:
    pass


Event = (
    Quit
    | NavigateDown
    | NavigateUp
    | Confirm
    | OpenFolder
    | CycleSort
    | EnterSearch
    | ExitSearch
    | InsertChar
    | Backspace
    | ToggleDetails
)


# Side effects requested by a state transition, run by the event loop


@dataclass(frozen=True)
class OpenPath:
    path: str


Effect = OpenPath


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything the renderer needs to draw one frame."""

    visible: tuple[Instance, ...]
    selected_index: int | None
    selected: Instance | None
    sort_mode: SortMode
    mode: Mode
    query: str
    details_visible: bool
    total: int


@dataclass(frozen=True)
class ViewState:
    """
    The complete application state of one session.

    instances is the authoritative collection in the current sort order.
    visible is derived from (instances, query) and must only be produced
    through with_query/with_instances so the two never disagree.
    """

    instances: tuple[Instance, ...] = ()
    visible: tuple[Instance, ...] = ()
    cursor: SelectionCursor = field(default_factory=SelectionCursor)
    sort_mode: SortMode = SortMode.NAME
    mode: Mode = Mode.NORMAL
    query: str = ""
    details_visible: bool = False
    should_quit: bool = False
    should_launch: bool = False
    launch_target: Instance | None = None

    @classmethod
    def initial(
        cls,
        instances: list[Instance],
        sort_mode: SortMode = SortMode.NAME,
        details_visible: bool = False,
    ) -> "ViewState":
        ordered = tuple(sort_instances(instances, sort_mode))
        return cls(
            instances=ordered,
            visible=ordered,
            cursor=SelectionCursor.first(len(ordered)),
            sort_mode=sort_mode,
            details_visible=details_visible,
        )

    @property
    def selected(self) -> Instance | None:
        if self.cursor.index is None or self.cursor.index >= len(self.visible):
            return None
        return self.visible[self.cursor.index]

    def with_query(self, query: str, mode: Mode | None = None) -> "ViewState":
        """Set the query (and optionally the mode), recompute the visible list and revalidate the cursor."""
        visible = tuple(filter_instances(self.instances, query))
        return replace(
            self,
            visible=visible,
            cursor=self.cursor.revalidate(len(visible)),
            mode=self.mode if mode is None else mode,
            query=query,
        )

    def with_sort_mode(self, sort_mode: SortMode) -> "ViewState":
        """Reorder the full collection, recompute the visible list and select the first item."""
        instances = tuple(sort_instances(self.instances, sort_mode))
        visible = tuple(filter_instances(instances, self.query))
        return replace(
            self,
            instances=instances,
            visible=visible,
            cursor=self.cursor.reset(len(visible)),
            sort_mode=sort_mode,
        )

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            visible=self.visible,
            selected_index=self.cursor.index,
            selected=self.selected,
            sort_mode=self.sort_mode,
            mode=self.mode,
            query=self.query,
            details_visible=self.details_visible,
            total=len(self.instances),
        )
