import importlib
import sys
from pathlib import Path
from typing import Callable, Iterator
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from loguru import logger

import mctui.cli.main
from mctui.cli.main import cli
from mctui.controllers.settings_controller import SettingsController
from mctui.models.settings import Settings
from mctui.utils.exception import LaunchError
from mctui.utils.log import formatter


@pytest.fixture(autouse=True)
def isolated_settings() -> Iterator[None]:
    handler_ids: list[int] = []

    def stderr_logging(debug: bool = False) -> None:
        # Same sink as setup_logging adds, bound to the runner's stderr
        handler_ids.append(logger.add(sys.stderr, level="WARNING", format=formatter))

    def from_settings_file(override: Path | None = None) -> SettingsController:
        return SettingsController(Settings(), instances_folder_override=override)

    with patch("mctui.cli.main.setup_logging", side_effect=stderr_logging), patch(
        "mctui.cli.main.SettingsController.from_settings_file",
        side_effect=from_settings_file,
    ):
        yield
    for handler_id in handler_ids:
        logger.remove(handler_id)


def test_list(instances_folder: Path, write_instance: Callable[..., Path]) -> None:
    write_instance("a", config="[General]\nname=Alpha\ntotalTimePlayed=61\n")
    write_instance("b", config="[General]\nname=Beta\n")

    result = CliRunner().invoke(cli, ["--list", "--instances-folder", str(instances_folder)])

    assert result.exit_code == 0, result.output
    assert "Alpha" in result.output
    assert "Beta" in result.output
    assert "1m" in result.output
    assert result.output.index("Alpha") < result.output.index("Beta")


def test_list_without_instances(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["--list", "--instances-folder", str(tmp_path / "none")])
    assert result.exit_code == 0
    assert "No Minecraft instances found" in result.output


def test_instances_folder_from_environment(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    write_instance("a", config="[General]\nname=FromEnv\n")
    result = CliRunner().invoke(
        cli, ["--list"], env={"MCTUI_INSTANCES_FOLDER": str(instances_folder)}
    )
    assert result.exit_code == 0
    assert "FromEnv" in result.output


def test_missing_home_is_reported(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["--list"], env={"HOME": ""})
    assert result.exit_code == 1
    assert "HOME" in result.output


def test_launch_error_is_reported(instances_folder: Path) -> None:
    with patch(
        "mctui.cli.main.AppController.run",
        side_effect=LaunchError("Unable to run /opt/launch.sh"),
    ):
        result = CliRunner().invoke(cli, ["--instances-folder", str(instances_folder)])
    assert result.exit_code == 1
    assert "Unable to run /opt/launch.sh" in result.output


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "minecraft-tui" in result.output


def test_skipped_instances_are_not_reported(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    write_instance("broken", config="[General\nname=Broken\n")
    write_instance("nameless", config="[General]\nInstanceType=OneSix\n")
    write_instance("binary", config=None)
    (instances_folder / "binary" / "instance.cfg").write_bytes(b"\xff\xfe\x00garbage")
    write_instance("good", config="[General]\nname=Good\n")

    result = CliRunner().invoke(cli, ["--list", "--instances-folder", str(instances_folder)])

    assert result.exit_code == 0
    assert "Good" in result.stdout
    assert "Broken" not in result.stdout
    assert result.stderr == ""


def test_import_does_not_touch_app_folders() -> None:
    with patch(
        "mctui.utils.app_info.AppInfo.__init__",
        side_effect=AssertionError("AppInfo created on import"),
    ):
        importlib.reload(mctui.cli.main)
