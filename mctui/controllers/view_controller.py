"""
The view-state machine.

update() maps (state, event) to (new state, effects) without touching the
terminal, the filesystem or any process. The event loop in
app_controller.py performs the returned effects.

Each mode has its own handler table. An event with no handler in the
current mode leaves the state unchanged; this is how sort, open folder and
details are unavailable while searching (their keys are search text there).
"""

from dataclasses import replace
from typing import Callable

from loguru import logger

from mctui.models.view_state import (
    Backspace,
    Confirm,
    CycleSort,
    Effect,
    EnterSearch,
    Event,
    ExitSearch,
    InsertChar,
    Mode,
    NavigateDown,
    NavigateUp,
    OpenFolder,
    OpenPath,
    Quit,
    ToggleDetails,
    ViewState,
)

Transition = tuple[ViewState, list[Effect]]
Handler = Callable[[ViewState, Event], Transition]


def _quit(state: ViewState, event: Event) -> Transition:
    return replace(state, should_quit=True), []


def _navigate_down(state: ViewState, event: Event) -> Transition:
    return replace(state, cursor=state.cursor.advance(len(state.visible))), []


def _navigate_up(state: ViewState, event: Event) -> Transition:
    return replace(state, cursor=state.cursor.retreat(len(state.visible))), []


def _confirm(state: ViewState, event: Event) -> Transition:
    # launch_target stays None when nothing is selected, the launch is then skipped
    target = state.selected
    if state.mode is Mode.SEARCH:
        # The target is taken before leaving search, which resets the list
        state = state.with_query("", Mode.NORMAL)
    if target is None:
        logger.info("USER ACTION: confirmed with no instance selected")
    else:
        logger.info(f"USER ACTION: selected instance {target.name} for launch")
    return (
        replace(state, should_quit=True, should_launch=True, launch_target=target),
        [],
    )


def _open_folder(state: ViewState, event: Event) -> Transition:
    selected = state.selected
    if selected is None:
        return state, []
    return state, [OpenPath(selected.path)]


def _cycle_sort(state: ViewState, event: Event) -> Transition:
    return state.with_sort_mode(state.sort_mode.next()), []


def _enter_search(state: ViewState, event: Event) -> Transition:
    return state.with_query("", Mode.SEARCH), []


def _exit_search(state: ViewState, event: Event) -> Transition:
    return state.with_query("", Mode.NORMAL), []


def _insert_char(state: ViewState, event: Event) -> Transition:
    assert isinstance(event, InsertChar)
    return state.with_query(state.query + event.char), []


def _backspace(state: ViewState, event: Event) -> Transition:
    return state.with_query(state.query[:-1]), []


def _toggle_details(state: ViewState, event: Event) -> Transition:
    return replace(state, details_visible=not state.details_visible), []


NORMAL_HANDLERS: dict[type, Handler] = {
    Quit: _quit,
    NavigateDown: _navigate_down,
    NavigateUp: _navigate_up,
    Confirm: _confirm,
    OpenFolder: _open_folder,
    CycleSort: _cycle_sort,
    EnterSearch: _enter_search,
    ToggleDetails: _toggle_details,
}

SEARCH_HANDLERS: dict[type, Handler] = {
    Quit: _quit,
    NavigateDown: _navigate_down,
    NavigateUp: _navigate_up,
    Confirm: _confirm,
    ExitSearch: _exit_search,
    InsertChar: _insert_char,
    Backspace: _backspace,
}

HANDLERS: dict[Mode, dict[type, Handler]] = {
    Mode.NORMAL: NORMAL_HANDLERS,
    Mode.SEARCH: SEARCH_HANDLERS,
}


def update(state: ViewState, event: Event) -> Transition:
    """
    Apply one input event to the state.

    :param state: the current state, left untouched
    :param event: the event to apply
    :return: the new state and the side effects the caller has to perform
    """
    if state.should_quit:
        return state, []
    handler = HANDLERS[state.mode].get(type(event))
    if handler is None:
        return state, []
    return handler(state, event)
