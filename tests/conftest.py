from pathlib import Path
from typing import Callable, Optional

import pytest

from mctui.models.instance import Instance

# Fixed "now" for everything time dependent: 2024-01-01 00:00:00 UTC
NOW_MS = 1_704_067_200_000

WriteInstance = Callable[..., Path]
MakeInstance = Callable[..., Instance]


@pytest.fixture
def instances_folder(tmp_path: Path) -> Path:
    """An empty PrismLauncher style instances folder."""
    folder = tmp_path / "instances"
    folder.mkdir()
    return folder


@pytest.fixture
def write_instance(instances_folder: Path) -> WriteInstance:
    """
    Factory fixture creating one instance folder below instances_folder.

    Only the files for the given arguments are written, pass
    config=None to create a folder without instance.cfg.
    """

    def _write(
        folder_name: str,
        config: Optional[str] = "[General]\nname={folder_name}\n",
        pack: Optional[str] = None,
        mods: Optional[list[str]] = None,
        game_folder: str = ".minecraft",
    ) -> Path:
        path = instances_folder / folder_name
        path.mkdir()
        if config is not None:
            (path / "instance.cfg").write_text(
                config.replace("{folder_name}", folder_name), encoding="utf-8"
            )
        if pack is not None:
            (path / "mmc-pack.json").write_text(pack, encoding="utf-8")
        if mods is not None:
            mods_folder = path / game_folder / "mods"
            mods_folder.mkdir(parents=True)
            for mod in mods:
                (mods_folder / mod).write_bytes(b"PK")
        return path

    return _write


def _make_instance(
    name: str,
    last_played_ts: Optional[int] = None,
    time_played_secs: Optional[int] = None,
) -> Instance:
    return Instance(
        name=name,
        path=f"/instances/{name}",
        last_played_ts=last_played_ts,
        time_played_secs=time_played_secs,
    )


@pytest.fixture
def make_instance() -> MakeInstance:
    """Build Instance values directly, without touching the filesystem."""
    return _make_instance


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def scenario_instances() -> list[Instance]:
    """
    Alpha was never played, Beta played 3661s and last 2 days ago,
    Gamma played 30s and last 30 minutes ago.
    """
    return [
        _make_instance("Alpha"),
        _make_instance("Beta", NOW_MS - 2 * 86400 * 1000, 3661),
        _make_instance("Gamma", NOW_MS - 30 * 60 * 1000, 30),
    ]
