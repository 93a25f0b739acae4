"""
Main CLI entry point for minecraft-tui.

Without options the interactive instance picker is started. The chosen
instance is launched after the picker has closed and the terminal is restored.
"""

import traceback
from pathlib import Path
from typing import Optional

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from mctui.controllers.app_controller import AppController
from mctui.controllers.instance_controller import InstanceController
from mctui.controllers.settings_controller import SettingsController
from mctui.utils.constants import APP_NAME
from mctui.utils.exception import HomeDirectoryNotFound, LaunchError
from mctui.utils.log import setup_logging


def print_instances(settings_controller: SettingsController, console: Console) -> None:
    instances = InstanceController(settings_controller.instances_folder).load_instances()
    if not instances:
        console.print("No Minecraft instances found", style="yellow")
        return

    table = Table(title=f"Instances in {settings_controller.instances_folder}")
    table.add_column("Name", style="bold")
    table.add_column("Version")
    table.add_column("Playtime", justify="right")
    table.add_column("Last played")
    table.add_column("Mods", justify="right")
    for instance in instances:
        table.add_row(
            instance.name,
            instance.mc_version or "",
            instance.time_played or "",
            instance.last_played or "",
            "" if instance.mod_count is None else str(instance.mod_count),
        )
    console.print(table)


@click.command("mctui")
@click.version_option(package_name=APP_NAME, prog_name=APP_NAME)
@click.option(
    "--instances-folder",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="MCTUI_INSTANCES_FOLDER",
    help="Folder containing the PrismLauncher instances. Overrides settings.json.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging (same as a DEBUG file in the data folder).",
)
@click.option(
    "--list",
    "list_only",
    is_flag=True,
    help="Print the discovered instances and exit without starting the picker.",
)
def cli(instances_folder: Optional[Path], debug: bool, list_only: bool) -> None:
    """minecraft-tui - pick and launch a PrismLauncher Minecraft instance

    \b
    Keys:
      ↑↓/jk  navigate      Enter  launch       /  search
      s      cycle sort    d      details      o  open folder
      q/Esc  quit
    """
    setup_logging(debug)

    try:
        settings_controller = SettingsController.from_settings_file(instances_folder)
        console = Console()
        if list_only:
            print_instances(settings_controller, console)
            return
        AppController(settings_controller, console=console).run()
    except (HomeDirectoryNotFound, LaunchError) as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.error(
            f"The application has failed with an uncaught exception:\n{traceback.format_exc()}"
        )
        raise click.ClickException(f"{e.__class__.__name__}: {e}") from e
    finally:
        logger.info("Exiting application!")
