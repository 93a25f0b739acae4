from pathlib import Path

from mctui.models.settings import Settings
from mctui.utils.app_info import AppInfo
from mctui.utils.generic import default_instances_folder, default_launch_script


class SettingsController:
    """
    Resolves the effective configuration from the settings file and command line overrides.
    """

    def __init__(self, model: Settings, instances_folder_override: Path | None = None) -> None:
        self.settings = model
        self._instances_folder_override = instances_folder_override

    @classmethod
    def from_settings_file(
        cls, instances_folder_override: Path | None = None
    ) -> "SettingsController":
        return cls(
            Settings.load(AppInfo().app_settings_file),
            instances_folder_override=instances_folder_override,
        )

    @property
    def instances_folder(self) -> Path:
        """
        :raises HomeDirectoryNotFound: if no folder is configured and HOME is unset
        """
        if self._instances_folder_override is not None:
            return self._instances_folder_override
        if self.settings.instances_folder:
            return Path(self.settings.instances_folder).expanduser()
        return default_instances_folder()

    @property
    def launch_script(self) -> Path:
        """
        :raises HomeDirectoryNotFound: if no script is configured and HOME is unset
        """
        if self.settings.launch_script:
            return Path(self.settings.launch_script).expanduser()
        return default_launch_script()

    @property
    def launcher_process_match(self) -> str:
        return self.settings.launcher_process_match

    @property
    def launch_detach_timeout(self) -> float:
        return max(0.0, self.settings.launch_detach_timeout)
