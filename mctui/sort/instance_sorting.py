from typing import Callable, Sequence

from loguru import logger

from mctui.models.instance import Instance
from mctui.utils.constants import SortMode


def _name_key(instance: Instance) -> str:
    return instance.name


def _last_played_key(instance: Instance) -> tuple[bool, int]:
    # Never played instances go after every played one
    if instance.last_played_ts is None:
        return True, 0
    return False, -instance.last_played_ts


def _playtime_key(instance: Instance) -> tuple[bool, int]:
    if instance.time_played_secs is None:
        return True, 0
    return False, -instance.time_played_secs


SORT_KEYS: dict[SortMode, Callable[[Instance], object]] = {
    SortMode.NAME: _name_key,
    SortMode.LAST_PLAYED: _last_played_key,
    SortMode.PLAYTIME: _playtime_key,
}


def sort_instances(instances: Sequence[Instance], mode: SortMode) -> list[Instance]:
    """
    Order instances by the given sort mode.

    Name is ascending, Last Played and Playtime are descending with unknown
    values last. The sort is stable, so ties keep their previous relative order.

    Args:
        instances (Sequence[Instance]): The full instance collection.
        mode (SortMode): The ordering to apply.
    Returns:
        list[Instance]: A new list in the requested order.
    """
    logger.debug(f"Sorting {len(instances)} instances by {mode.label}")
    return sorted(instances, key=SORT_KEYS[mode])  # type: ignore[arg-type]
