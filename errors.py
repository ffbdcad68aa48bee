class MimerError(Exception):
    pass


class ConfigReadError(MimerError):
    """An association source could not be read while building the store."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read association source {path}: {reason}")
        self.path = path
        self.reason = reason


class ExternalToolError(MimerError):
    """The default-handler registry command failed or produced unusable output."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"{command}: {reason}")
        self.command = command
        self.reason = reason
