"""
Reading of PrismLauncher instance folders into Instance records.

An instance folder is expected to look like this::

    <instance>/
        instance.cfg        required, INI with a [General] group
        mmc-pack.json       optional, component list with versions
        .minecraft/mods/    optional, *.jar mod files

Only instance.cfg decides whether a folder is an instance. Everything else
degrades to "unknown" when missing or broken.
"""

import configparser
from pathlib import Path

import msgspec
from loguru import logger

from mctui.models.instance import Instance
from mctui.models.pack_manifest import PackManifest
from mctui.utils.constants import (
    GAME_FOLDER_NAMES,
    INSTANCE_CONFIG_FILE,
    INSTANCE_CONFIG_LAST_LAUNCH_KEY,
    INSTANCE_CONFIG_NAME_KEY,
    INSTANCE_CONFIG_SECTION,
    INSTANCE_CONFIG_TIME_PLAYED_KEY,
    MINECRAFT_COMPONENT_UID,
    MOD_FILE_EXTENSION,
    MODS_FOLDER_NAME,
    PACK_MANIFEST_FILE,
)
from mctui.utils.exception import InvalidInstanceConfig
from mctui.utils.generic import format_duration, get_relative_time, scanpath


def read_instance_config(config_path: Path) -> dict[str, str]:
    """
    Read the [General] group of an instance.cfg.

    Values are taken raw: no interpolation, keys keep their case.
    A file without any section header is treated as if all of its
    keys were under [General].

    :raises InvalidInstanceConfig: if the file is unreadable, malformed or has no [General] group
    """
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInstanceConfig(f"Unable to read {config_path}: {e}") from e

    parser = _new_config_parser()
    try:
        parser.read_string(text, source=str(config_path))
    except configparser.MissingSectionHeaderError:
        parser = _new_config_parser()
        try:
            parser.read_string(
                f"[{INSTANCE_CONFIG_SECTION}]\n{text}", source=str(config_path)
            )
        except configparser.Error as e:
            raise InvalidInstanceConfig(f"Malformed {config_path}: {e}") from e
    except configparser.Error as e:
        raise InvalidInstanceConfig(f"Malformed {config_path}: {e}") from e

    if not parser.has_section(INSTANCE_CONFIG_SECTION):
        raise InvalidInstanceConfig(
            f"{config_path} has no [{INSTANCE_CONFIG_SECTION}] group"
        )
    return dict(parser.items(INSTANCE_CONFIG_SECTION))


def _new_config_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    return parser


def parse_optional_int(value: str | None) -> int | None:
    """
    Parse a non-negative integer config value, None if absent or malformed.
    """
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number if number >= 0 else None


def read_game_version(instance_path: Path) -> str | None:
    """
    Get the Minecraft version listed in the instance's mmc-pack.json.

    Any problem with the manifest (missing, unreadable, not matching the
    expected shape, no net.minecraft component) means the version is unknown.
    """
    manifest_path = instance_path / PACK_MANIFEST_FILE
    try:
        manifest = msgspec.json.decode(manifest_path.read_bytes(), type=PackManifest)
    except FileNotFoundError:
        return None
    except (OSError, msgspec.DecodeError) as e:
        # msgspec.ValidationError is a subclass of DecodeError
        logger.debug(f"Ignoring unusable {manifest_path}: {e}")
        return None
    return manifest.component_version(MINECRAFT_COMPONENT_UID)


def get_mods_folder(instance_path: Path) -> Path | None:
    for game_folder in GAME_FOLDER_NAMES:
        mods_folder = instance_path / game_folder / MODS_FOLDER_NAME
        if mods_folder.is_dir():
            return mods_folder
    return None


def count_mods(instance_path: Path) -> int | None:
    """
    Count the .jar files directly inside the instance's mods folder.

    Disabled mods (".jar.disabled") are not counted. None if the instance
    has no mods folder.
    """
    mods_folder = get_mods_folder(instance_path)
    if mods_folder is None:
        return None
    return sum(
        1
        for entry in scanpath(mods_folder)
        if entry.is_file() and entry.name.lower().endswith(MOD_FILE_EXTENSION)
    )


def parse_instance(instance_path: Path, current_ms: int | None = None) -> Instance | None:
    """
    Build an Instance from one instance folder.

    Returns None when the folder is not a usable instance: no instance.cfg,
    an unreadable or malformed one, or a missing/empty name. This is never an
    error for the caller.

    :param instance_path: the candidate instance folder
    :param current_ms: "now" in epoch milliseconds for the relative last played string
    """
    config_path = instance_path / INSTANCE_CONFIG_FILE
    if not config_path.is_file():
        return None

    try:
        config = read_instance_config(config_path)
    except InvalidInstanceConfig as e:
        logger.info(f"Skipping instance folder {instance_path}: {e}")
        return None

    name = config.get(INSTANCE_CONFIG_NAME_KEY)
    if not name:
        logger.info(f"Skipping instance folder {instance_path}: no name in {config_path}")
        return None

    last_played_ts = parse_optional_int(config.get(INSTANCE_CONFIG_LAST_LAUNCH_KEY))
    time_played_secs = parse_optional_int(config.get(INSTANCE_CONFIG_TIME_PLAYED_KEY))

    return Instance(
        name=name,
        path=str(instance_path.absolute()),
        last_played_ts=last_played_ts,
        last_played=(
            get_relative_time(last_played_ts, current_ms)
            if last_played_ts is not None
            else None
        ),
        time_played_secs=time_played_secs,
        time_played=(
            format_duration(time_played_secs) if time_played_secs is not None else None
        ),
        mc_version=read_game_version(instance_path),
        mod_count=count_mods(instance_path),
    )
