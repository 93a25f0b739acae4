"""
This module is to be used with loguru to remove potentially sensitive information such as the user's name.
"""

import os
import re
from pathlib import Path

# Home folder layouts whose second component is the user name
HOME_PATH_PATTERNS = [
    (re.compile(r"([A-Z]:\\Users\\)[^\\]+\\"), r"\1...\\"),
    (re.compile(r"/home/[^/]+/"), r"/home/.../"),
    (re.compile(r"/Users/[^/]+/"), r"/Users/.../"),
]


def obfuscate_message(message: str, anonymize_path: bool = True) -> str:
    """
    Obfuscate the message such that it does not reveal user information.

    Instance paths always live below the user's home folder, so most
    log lines contain one.

    Args:
        message: The message to obfuscate.
        anonymize_path: Whether to anonymize the path in the message.

    Returns:
        The obfuscated message.
    """
    if anonymize_path:
        message = _anonymize_home(message)
        message = _anonymize_path(message)

    return message


def _anonymize_home(message: str) -> str:
    """
    Replace the current $HOME with "~".

    Covers home folders outside the usual layouts (for example
    /data/users/<user>). Homes directly below the root, such as /root,
    are left alone, there is no user name in them.
    """
    home = os.environ.get("HOME", "").rstrip("/")
    if len(Path(home).parts) < 3:
        return message
    return re.sub(re.escape(home) + r"(?=/|\s|$)", "~", message)


def _anonymize_path(message: str) -> str:
    """
    Replace the user name in home folder paths.

    Handles Linux (/home/<user>/), macOS (/Users/<user>/) and Windows
    (C:\\Users\\<user>\\) paths. The message may not contain a path at all.
    """
    for pattern, replacement in HOME_PATH_PATTERNS:
        message = pattern.sub(replacement, message)

    return message
