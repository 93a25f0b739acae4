from pathlib import Path
from typing import Callable

from mctui.controllers.instance_controller import InstanceController

NOW_MS = 1_704_067_200_000


def test_missing_instances_folder(tmp_path: Path) -> None:
    controller = InstanceController(tmp_path / "does-not-exist")
    assert controller.load_instances(NOW_MS) == []


def test_empty_instances_folder(instances_folder: Path) -> None:
    assert InstanceController(instances_folder).load_instances(NOW_MS) == []


def test_non_instance_entries_are_skipped(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    write_instance("Survival")
    write_instance(".LAUNCHER_TEMP", config=None)
    write_instance("_MMC_TEMP", config=None)
    write_instance("nameless", config="[General]\nInstanceType=OneSix\n")
    (instances_folder / "instgroups.json").write_text("{}", encoding="utf-8")

    instances = InstanceController(instances_folder).load_instances(NOW_MS)
    assert [instance.name for instance in instances] == ["Survival"]


def test_instances_are_ordered_by_name(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    write_instance("3", config="[General]\nname=Gamma\n")
    write_instance("1", config="[General]\nname=Beta\n")
    write_instance("2", config="[General]\nname=Alpha\n")

    instances = InstanceController(instances_folder).load_instances(NOW_MS)
    assert [instance.name for instance in instances] == ["Alpha", "Beta", "Gamma"]


def test_end_to_end_instance_fields(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    path = write_instance(
        "beta",
        config=(
            "[General]\n"
            "name=Beta\n"
            f"lastLaunchTime={NOW_MS - 2 * 86400 * 1000}\n"
            "totalTimePlayed=3661\n"
        ),
        pack='{"components": [{"uid": "net.minecraft", "version": "1.21"}]}',
        mods=["a.jar", "b.jar"],
    )

    (instance,) = InstanceController(instances_folder).load_instances(NOW_MS)
    assert instance.name == "Beta"
    assert instance.path == str(path.absolute())
    assert instance.last_played == "2 days ago"
    assert instance.time_played == "1h 1m"
    assert instance.mc_version == "1.21"
    assert instance.mod_count == 2


def test_duplicate_names_are_kept(
    instances_folder: Path, write_instance: Callable[..., Path]
) -> None:
    write_instance("a", config="[General]\nname=Same\n")
    write_instance("b", config="[General]\nname=Same\n")
    instances = InstanceController(instances_folder).load_instances(NOW_MS)
    assert len(instances) == 2
    assert {instance.path for instance in instances} == {
        str((instances_folder / "a").absolute()),
        str((instances_folder / "b").absolute()),
    }
