import msgspec


class Instance(msgspec.Struct, frozen=True):
    """
    Data model for one PrismLauncher Minecraft instance.

    Display strings (last_played, time_played) are derived once when the
    instance is loaded and are not refreshed afterwards, so last_played goes
    stale in a long-running session. The raw values are kept next to them.
    """

    name: str
    path: str
    last_played_ts: int | None = None
    last_played: str | None = None
    time_played_secs: int | None = None
    time_played: str | None = None
    mc_version: str | None = None
    mod_count: int | None = None
