import msgspec


class PackComponent(msgspec.Struct):
    """One entry of the components list in mmc-pack.json."""

    uid: str
    version: str | None = None


class PackManifest(msgspec.Struct):
    """
    The parts of mmc-pack.json that are read. Unknown keys
    (formatVersion, cachedName, dependencyOnly, ...) are ignored.
    """

    components: list[PackComponent] = msgspec.field(default_factory=list)

    def component_version(self, uid: str) -> str | None:
        for component in self.components:
            if component.uid == uid:
                return component.version
        return None
