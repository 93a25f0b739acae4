from typing import Callable

from loguru import logger
from rich.console import Console
from rich.live import Live

from mctui.controllers.instance_controller import InstanceController
from mctui.controllers.settings_controller import SettingsController
from mctui.controllers.view_controller import update
from mctui.models.view_state import Effect, OpenPath, Quit, ViewState
from mctui.utils.generic import (
    get_running_instance_names,
    launch_instance,
    platform_specific_open,
    wait_for_instance_process,
)
from mctui.views.keys import key_to_event, read_key, split_keys
from mctui.views.main_view import render


class AppController:
    """
    Drives one session: load instances, run the interactive loop, then launch.

    The loop is single-threaded: draw, block on one key, apply it, repeat.
    Launching happens in launch_selected(), which must only be called after
    run_interactive() has returned and the terminal is restored.
    """

    def __init__(
        self,
        settings_controller: SettingsController,
        console: Console | None = None,
        read_key: Callable[[], str] = read_key,
    ) -> None:
        self.settings_controller = settings_controller
        self.console = console or Console()
        self.read_key = read_key

    def load_state(self) -> ViewState:
        instances = InstanceController(
            self.settings_controller.instances_folder
        ).load_instances()
        settings = self.settings_controller.settings
        return ViewState.initial(
            instances,
            sort_mode=settings.default_sort,
            details_visible=settings.show_details,
        )

    def running_instances(self, state: ViewState) -> set[str]:
        return get_running_instance_names(
            (instance.name for instance in state.visible),
            self.settings_controller.launcher_process_match,
        )

    def perform(self, effect: Effect) -> None:
        if isinstance(effect, OpenPath):
            platform_specific_open(effect.path)

    def step(self, state: ViewState, key: str) -> ViewState:
        """
        Apply what one read returned and perform the effects it asks for.

        key may hold more than one key press (Esc followed by another key),
        each is applied in the mode the previous one left.
        """
        for single_key in split_keys(key):
            event = key_to_event(single_key, state.mode)
            if event is None:
                continue
            logger.debug(f"Key {single_key!r} in {state.mode.value} mode -> {event}")
            state, effects = update(state, event)
            for effect in effects:
                self.perform(effect)
        return state

    def run_interactive(self, state: ViewState) -> ViewState:
        """
        Show the instance list on the alternate screen until the user quits or picks an instance.

        The terminal is restored when this returns, also on errors.
        """
        with Live(
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
        ) as live:
            while not state.should_quit:
                live.update(
                    render(
                        state.snapshot(),
                        self.running_instances(state),
                        self.console.size.height,
                    ),
                    refresh=True,
                )
                try:
                    key = self.read_key()
                except (KeyboardInterrupt, EOFError):
                    state, _ = update(state, Quit())
                    continue
                state = self.step(state, key)
        return state

    def launch_selected(self, state: ViewState) -> None:
        """
        Start the launch script for the chosen instance, then give it time to detach.

        :raises LaunchError: if the script could not be started
        """
        if not state.should_launch or state.launch_target is None:
            return
        name = state.launch_target.name
        launch_instance(self.settings_controller.launch_script, name)
        wait_for_instance_process(
            name,
            self.settings_controller.launcher_process_match,
            self.settings_controller.launch_detach_timeout,
        )

    def run(self) -> ViewState:
        state = self.run_interactive(self.load_state())
        self.launch_selected(state)
        return state
