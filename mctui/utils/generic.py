import os
import subprocess
import sys
import time
from pathlib import Path
from typing import Generator, Iterable

import psutil
from loguru import logger

from mctui.utils.constants import (
    DEFAULT_LAUNCH_SCRIPT,
    PRISM_INSTANCES_FOLDER,
    RELATIVE_TIME_FUTURE,
    RELATIVE_TIME_NOW,
)
from mctui.utils.exception import HomeDirectoryNotFound, LaunchError


def get_home_folder() -> Path:
    """
    Get the user's home folder from the HOME environment variable.

    :raises HomeDirectoryNotFound: if HOME is unset or empty
    """
    home = os.environ.get("HOME")
    if not home:
        raise HomeDirectoryNotFound("The HOME environment variable is not set")
    return Path(home)


def default_instances_folder() -> Path:
    """
    The PrismLauncher (Flatpak) instances folder of the current user.
    """
    return get_home_folder() / PRISM_INSTANCES_FOLDER


def default_launch_script() -> Path:
    return get_home_folder() / DEFAULT_LAUNCH_SCRIPT


def scanpath(path: Path | str) -> Generator[os.DirEntry[str], None, None]:
    try:
        with os.scandir(path) as it:
            yield from it
    except OSError as e:
        logger.info(f"os.scandir failed for directory {path}: {e}")


def directories(path: Path | str) -> list[Path]:
    """
    Immediate subdirectories of path. An unreadable path yields an empty list.
    """
    try:
        return [Path(entry.path) for entry in scanpath(path) if entry.is_dir()]
    except OSError as e:
        logger.info(f"Error reading directory {path}: {e}")
        return []


def now_ms() -> int:
    return int(time.time() * 1000)


def get_relative_time(timestamp_ms: int, current_ms: int | None = None) -> str:
    """
    Convert an epoch-millisecond timestamp to a relative time string (e.g. "2 days ago").

    Only the coarsest non-zero unit among days, hours and minutes is reported.
    A timestamp in the future (clock skew) has no meaningful elapsed time
    and yields "Recently".

    Args:
        timestamp_ms (int): Epoch timestamp in milliseconds.
        current_ms (int | None): Current time in epoch milliseconds, defaults to now.

    Returns:
        str: Human-readable relative time string.
    """
    if current_ms is None:
        current_ms = now_ms()

    elapsed_ms = current_ms - timestamp_ms
    if elapsed_ms < 0:
        return RELATIVE_TIME_FUTURE

    elapsed = elapsed_ms // 1000
    days = elapsed // 86400
    if days > 0:
        return f"{days} days ago"
    hours = elapsed // 3600
    if hours > 0:
        return f"{hours} hours ago"
    minutes = elapsed // 60
    if minutes > 0:
        return f"{minutes} minutes ago"
    return RELATIVE_TIME_NOW


def format_duration(seconds: int) -> str:
    """Format a number of seconds as "1h 5m", "5m" or "42s"."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    elif minutes > 0:
        return f"{minutes}m"
    else:
        return f"{seconds}s"


def launch_process(executable_path: str, args: list[str]) -> tuple[int, list[str]]:
    """
    Start an independent process in its own session, not waiting for it.

    :return: the pid and the full argument list used
    """
    popen_args = [executable_path]
    popen_args.extend(args)

    if sys.platform == "win32":
        p = subprocess.Popen(
            popen_args,
            creationflags=subprocess.CREATE_NEW_PROCESS_GROUP,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    else:
        # not Windows, so assume POSIX; if not, we'll get a usable exception
        p = subprocess.Popen(
            popen_args,
            start_new_session=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    return p.pid, popen_args


def launch_instance(launch_script: Path, instance_name: str) -> int:
    """
    Run the launch script with the instance name as its sole argument.

    The script is expected to detach the launcher itself, so this
    returns as soon as the script has been started.

    :raises LaunchError: if the script could not be started
    """
    logger.info(f"USER ACTION: launching instance {instance_name} with {launch_script}")
    try:
        pid, popen_args = launch_process(str(launch_script), [instance_name])
    except OSError as e:
        raise LaunchError(f"Failed to run launch script {launch_script}: {e}") from e
    logger.info(f"Started launch script with PID {pid} using args {popen_args}")
    return pid


def platform_specific_open(path: str | Path) -> None:
    """
    Function to open a folder in the platform-specific file-explorer app.

    Failures are logged and otherwise ignored.

    :param path: path to open
    :type path: str | Path
    """
    logger.info(f"USER ACTION: opening {path}")
    path = str(path)
    try:
        if sys.platform == "darwin":
            subprocess.Popen(
                ["open", path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        elif sys.platform == "win32":
            os.startfile(path)  # type: ignore[attr-defined]
        elif sys.platform.startswith("linux"):
            subprocess.Popen(
                ["xdg-open", path],
                env=dict(os.environ, LD_LIBRARY_PATH=""),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        else:
            logger.info("Attempting to open directory on an unknown system")
    except OSError as e:
        logger.info(f"Failed to open {path}: {e}")


def get_running_instance_names(
    instance_names: Iterable[str], launcher_match: str
) -> set[str]:
    """
    Snapshot which of the given instances currently have a running process.

    An instance counts as running when some process command line contains
    both launcher_match and the instance name. This is a best-effort
    indicator: it depends on how the launcher names its child processes.

    :return: the subset of instance_names that look running
    """
    names = set(instance_names)
    running: set[str] = set()
    if not names:
        return running
    try:
        for process in psutil.process_iter(attrs=["cmdline"]):
            try:
                cmdline = process.info["cmdline"]
                if not cmdline:
                    continue
                joined = " ".join(cmdline)
                if launcher_match not in joined:
                    continue
                running.update(name for name in names if name in joined)
            except (psutil.AccessDenied, psutil.NoSuchProcess):
                continue
    except Exception as e:
        logger.debug(f"Error checking for running instances: {e}")
        return set()
    return running


def is_instance_running(instance_name: str, launcher_match: str) -> bool:
    return instance_name in get_running_instance_names([instance_name], launcher_match)


def wait_for_instance_process(
    instance_name: str,
    launcher_match: str,
    timeout: float,
    interval: float = 0.25,
) -> bool:
    """
    Give a freshly spawned launcher time to detach before this program exits.

    Polls the process list until a process for the instance shows up or
    timeout seconds have passed. There is no acknowledgment from the
    launcher, so a False result is not an error.

    :return: True if a matching process was seen
    """
    deadline = time.monotonic() + timeout
    while True:
        if is_instance_running(instance_name, launcher_match):
            logger.debug(f"Found running process for instance {instance_name}")
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug(
                f"No process for instance {instance_name} after {timeout}s, exiting anyway"
            )
            return False
        time.sleep(min(interval, remaining))
