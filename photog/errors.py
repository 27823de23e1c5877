"""Exceptions raised while loading a source tree or building a website."""


class PhotogError(Exception):
    """Base class for every fatal build error."""


class ConfigError(PhotogError):
    """A photog.ini could not be parsed, or the album tree is misconfigured."""


class CollaboratorError(PhotogError):
    """An external image-processing command failed."""

    def __init__(self, command: list[str], returncode: int | None, reason: str = ""):
        self.command = command
        self.returncode = returncode
        if returncode is None:
            msg = f"Cannot run '{command[0]}': {reason}"
        else:
            msg = f"Command failed with exit status {returncode}: {' '.join(command)}"
        super().__init__(msg)


class TemplateError(PhotogError):
    """The index template could not be loaded or rendered."""


class LockError(PhotogError):
    """Another build holds the destination lock."""
