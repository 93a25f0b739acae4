import sys

import loguru
from loguru import logger

from mctui.utils.app_info import AppInfo
from mctui.utils.obfuscate_message import obfuscate_message


def formatter(record: "loguru.Record") -> str:
    """Custom formatter for loguru logger"""
    format_string = (
        "[{level}]"
        "[{time:YYYY-MM-DD HH:mm:ss}]"
        "[{process.id}]"
        "[{module}]"
        "[{function}][{line}]"
        " : "
    )

    record["extra"]["obfuscated_message"] = obfuscate_message(record["message"])
    return format_string + "{extra[obfuscated_message]}\n{exception}"


def setup_logging(debug: bool = False) -> None:
    """
    Log to <user log folder>/minecraft-tui.log, keeping the previous run as .old.log.

    Warnings and errors also go to stderr. The interactive screen covers
    stderr while it is shown, they become visible once it is closed.
    """
    app_info = AppInfo()
    debug = debug or (app_info.debug_file.exists() and app_info.debug_file.is_file())

    # We have log_file (foo.log) and old_log_file (foo.old.log). If old_log_file exists,
    # remove it. If log_file exists, rename it to old_log_file.
    log_file = app_info.user_log_folder / (app_info.app_name + ".log")
    old_log_file = app_info.user_log_folder / (app_info.app_name + ".old.log")
    if old_log_file.exists() and old_log_file.is_file():
        old_log_file.unlink()
    if log_file.exists() and log_file.is_file():
        log_file.rename(old_log_file)

    # Remove the default stderr logger
    logger.remove()

    logger.add(log_file, level="DEBUG" if debug else "INFO", format=formatter)
    logger.add(sys.stderr, level="WARNING", format=formatter, colorize=False)

    logger.info(f"Initializing {app_info.app_name} {app_info.app_version}")
