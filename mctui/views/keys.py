import codecs
import os
import select
import sys

import readchar

from mctui.models.view_state import (
    Backspace,
    Confirm,
    CycleSort,
    EnterSearch,
    Event,
    ExitSearch,
    InsertChar,
    Mode,
    NavigateDown,
    NavigateUp,
    OpenFolder,
    Quit,
    ToggleDetails,
)

ENTER_KEYS = {readchar.key.ENTER, readchar.key.CR, readchar.key.LF}
BACKSPACE_KEYS = {readchar.key.BACKSPACE, "\x08"}

NORMAL_KEYS: dict[str, Event] = {
    "q": Quit(),
    readchar.key.ESC: Quit(),
    readchar.key.CTRL_C: Quit(),
    readchar.key.DOWN: NavigateDown(),
    "j": NavigateDown(),
    readchar.key.UP: NavigateUp(),
    "k": NavigateUp(),
    "o": OpenFolder(),
    "s": CycleSort(),
    "/": EnterSearch(),
    "d": ToggleDetails(),
}

SEARCH_KEYS: dict[str, Event] = {
    readchar.key.ESC: ExitSearch(),
    readchar.key.CTRL_C: Quit(),
    readchar.key.DOWN: NavigateDown(),
    readchar.key.UP: NavigateUp(),
}


# Seconds to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05


def read_key() -> str:
    """
    Block until one key press and return it in readchar's key format.

    On a POSIX terminal a lone Esc is returned once no further byte follows
    within ESCAPE_TIMEOUT, instead of waiting for the next key press.
    Elsewhere readchar.readkey() is used.

    :raises KeyboardInterrupt: on Ctrl-C
    :raises EOFError: if stdin is closed
    """
    if sys.platform == "win32" or not sys.stdin.isatty():
        return readchar.readkey()

    import termios
    import tty

    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        key = _read_char(fd)
        if key == readchar.key.ESC:
            key = _read_escape_sequence(fd)
        return key
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def _read_char(fd: int) -> str:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = os.read(fd, 1)
        if not data:
            raise EOFError("stdin closed")
        char = decoder.decode(data)
        if char:
            return char


def _read_escape_sequence(fd: int) -> str:
    sequence = readchar.key.ESC
    while not escape_sequence_complete(sequence):
        if not select.select([fd], [], [], ESCAPE_TIMEOUT)[0]:
            break
        sequence += _read_char(fd)
    return sequence


def escape_sequence_complete(sequence: str) -> bool:
    """
    Whether sequence (starting with ESC) is a whole key.

    ESC + "[" starts a CSI sequence ending in a byte from "@" to "~",
    ESC + "O" is followed by exactly one character. ESC followed by
    anything else is two separate keys, see split_keys().
    """
    if len(sequence) < 2:
        return False
    if sequence[1] not in "[O":
        return True
    if len(sequence) == 2:
        return False
    if sequence[1] == "O":
        return True
    return "@" <= sequence[-1] <= "~"


def split_keys(key: str) -> list[str]:
    """
    Split what one read returned into single key presses.

    readchar.readkey() waits for a second character after a lone Esc and
    returns both. Esc followed by anything that does not start an escape
    sequence ("[" or "O") is Esc and a separate key.
    """
    if len(key) == 2 and key[0] == readchar.key.ESC and key[1] not in "[O":
        return [readchar.key.ESC, key[1]]
    return [key]


def key_to_event(key: str, mode: Mode) -> Event | None:
    """
    Translate one key press into an event for the given mode.

    While searching every printable key is query text, so single letter
    commands only exist in normal mode. Unbound keys give None.
    """
    if key in ENTER_KEYS:
        return Confirm()
    if mode is Mode.SEARCH:
        if key in BACKSPACE_KEYS:
            return Backspace()
        if key in SEARCH_KEYS:
            return SEARCH_KEYS[key]
        if len(key) == 1 and key.isprintable():
            return InsertChar(key)
        return None
    return NORMAL_KEYS.get(key)
