from pathlib import Path

from loguru import logger

from mctui.models.instance import Instance
from mctui.sort.instance_sorting import sort_instances
from mctui.utils.constants import SortMode
from mctui.utils.generic import directories, now_ms
from mctui.utils.metadata import parse_instance


class InstanceController:
    """Controller for discovering the instances below one instances folder."""

    def __init__(self, instances_folder: Path) -> None:
        """Initialize controller with the folder holding one subfolder per instance."""
        self.instances_folder = instances_folder

    def load_instances(self, current_ms: int | None = None) -> list[Instance]:
        """
        Parse every immediate subfolder of the instances folder.

        Folders that are not instances are skipped. A missing instances folder
        is a normal first-run / not-installed state and yields an empty list.
        The result is ordered by name.

        :param current_ms: "now" in epoch milliseconds, shared by every instance of this load
        """
        if not self.instances_folder.is_dir():
            logger.info(
                f"Instances folder does not exist, no instances loaded: {self.instances_folder}"
            )
            return []

        if current_ms is None:
            current_ms = now_ms()

        instances: list[Instance] = []
        for folder in directories(self.instances_folder):
            instance = parse_instance(folder, current_ms)
            if instance is None:
                logger.debug(f"Not an instance folder: {folder}")
                continue
            instances.append(instance)

        logger.info(f"Loaded {len(instances)} instances from {self.instances_folder}")
        return sort_instances(instances, SortMode.NAME)
