import sys
from types import TracebackType
from typing import Type

from loguru import logger

from mctui.cli.main import cli


def handle_exception(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
) -> None:
    """
    This function is called (through excepthook) when an exception escapes
    the command. The error is logged to the log file before Python prints it.
    """

    # Ignore KeyboardInterrupt exceptions, for when running through the terminal
    if not issubclass(exc_type, KeyboardInterrupt):
        logger.opt(exception=(exc_type, exc_value, exc_traceback)).error(
            "The application has failed with an uncaught exception"
        )
    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> None:
    # Uncaught exceptions are handled through the function above
    sys.excepthook = handle_exception
    cli()


if __name__ == "__main__":
    main()
