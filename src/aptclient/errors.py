"""Exceptions raised by aptclient."""


class AptError(Exception):
    """Base class of all errors raised by this library."""

    def __repr__(self):
        return f"<{type(self).__module__}.{type(self).__name__} {self.args}>"

    @property
    def message(self) -> str:
        """Return the message passed as an argument."""
        return self.args[0] if self.args else ""


class CommandError(AptError):
    """An external package tool could not be run or exited with an error."""

    def __init__(self, message: str, cmd: list[str] | None = None, returncode: int | None = None, output: bytes = b""):
        super().__init__(message)
        self.cmd = cmd or []
        self.returncode = returncode
        self.output = output


class InvalidPackageError(AptError, ValueError):
    """A package operation received a missing or nameless package."""


class AptConfigError(AptError):
    """Reading or rewriting the APT source lists failed."""


class RepositoryExistsError(AptError):
    """The repository is already configured."""


class RepositoryNotFoundError(AptError):
    """No configured repository matches the one requested."""
