from pathlib import Path

import msgspec
from loguru import logger

from mctui.utils.constants import DEFAULT_LAUNCHER_PROCESS_MATCH, SortMode


class Settings(msgspec.Struct):
    """
    User settings, stored as settings.json in the application data folder.

    Empty path settings mean "use the PrismLauncher default below $HOME".
    Nothing about the interactive session (selection, query, ...) is stored here.
    """

    # Folder holding one subfolder per instance
    instances_folder: str = ""
    # Executable run with the instance name as its only argument
    launch_script: str = ""
    # Substring identifying the launcher in process command lines
    launcher_process_match: str = DEFAULT_LAUNCHER_PROCESS_MATCH
    # Seconds to wait for the launched instance to show up before exiting
    launch_detach_timeout: float = 1.0
    default_sort: SortMode = SortMode.NAME
    show_details: bool = False

    @classmethod
    def load(cls, settings_file: Path) -> "Settings":
        """
        Read settings from settings_file.

        A missing file is created with the defaults so it can be edited.
        A malformed file is logged and the defaults are used; it is not overwritten.
        """
        try:
            settings = msgspec.json.decode(settings_file.read_bytes(), type=cls)
        except FileNotFoundError:
            logger.info(f"No settings file found, writing defaults to {settings_file}")
            settings = cls()
            try:
                settings.save(settings_file)
            except OSError as e:
                logger.warning(f"Unable to write default settings to {settings_file}: {e}")
            return settings
        except (OSError, msgspec.DecodeError) as e:
            logger.error(f"Unable to read settings from {settings_file}, using defaults: {e}")
            return cls()

        logger.debug(f"Loaded settings from {settings_file}: {settings}")
        return settings

    def save(self, settings_file: Path) -> None:
        settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings_file.write_bytes(msgspec.json.format(msgspec.json.encode(self), indent=4))
