from enum import Enum


class SortMode(str, Enum):
    """
    Orderings of the instance list. The declaration order is the cycle order.
    """

    NAME = "name"
    LAST_PLAYED = "last_played"
    PLAYTIME = "playtime"

    @property
    def label(self) -> str:
        return SORT_MODE_LABELS[self]

    def next(self) -> "SortMode":
        members = list(SortMode)
        return members[(members.index(self) + 1) % len(members)]


SORT_MODE_LABELS = {
    SortMode.NAME: "Name",
    SortMode.LAST_PLAYED: "Last Played",
    SortMode.PLAYTIME: "Playtime",
}

APP_NAME = "minecraft-tui"

PRISM_FLATPAK_ID = "org.prismlauncher.PrismLauncher"
# Relative to $HOME
PRISM_INSTANCES_FOLDER = f".var/app/{PRISM_FLATPAK_ID}/data/PrismLauncher/instances"
# Relative to $HOME
DEFAULT_LAUNCH_SCRIPT = "scripts/launch-minecraft.sh"
DEFAULT_LAUNCHER_PROCESS_MATCH = "PrismLauncher"

INSTANCE_CONFIG_FILE = "instance.cfg"
INSTANCE_CONFIG_SECTION = "General"
INSTANCE_CONFIG_NAME_KEY = "name"
INSTANCE_CONFIG_LAST_LAUNCH_KEY = "lastLaunchTime"
INSTANCE_CONFIG_TIME_PLAYED_KEY = "totalTimePlayed"

PACK_MANIFEST_FILE = "mmc-pack.json"
MINECRAFT_COMPONENT_UID = "net.minecraft"

# Checked in order, PrismLauncher uses ".minecraft" and older MultiMC "minecraft"
GAME_FOLDER_NAMES = (".minecraft", "minecraft")
MODS_FOLDER_NAME = "mods"
MOD_FILE_EXTENSION = ".jar"

RELATIVE_TIME_FUTURE = "Recently"
RELATIVE_TIME_NOW = "Just now"
