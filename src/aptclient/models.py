"""Data models for packages and APT source list entries."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class PackageStatus(str, Enum):
    """Well-known package status strings.

    INSTALLED and friends are reported by dpkg-query's ${db:Status-Status};
    UPGRADABLE is assigned to entries coming from `apt list --upgradable`.
    """

    INSTALLED = "installed"
    UPGRADABLE = "upgradable"
    CONFIG_FILES = "config-files"
    HALF_INSTALLED = "half-installed"
    HALF_CONFIGURED = "half-configured"
    UNPACKED = "unpacked"
    TRIGGERS_AWAITED = "triggers-awaited"
    TRIGGERS_PENDING = "triggers-pending"
    NOT_INSTALLED = "not-installed"


class Package(BaseModel):
    """A package known to the APT system."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: str
    architecture: str
    version: str
    installed_size_kb: NonNegativeInt = 0
    short_description: str = ""


class Repository(BaseModel):
    """A `deb` or `deb-src` entry from an APT source list."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    source_repo: bool = False
    options: str = ""
    uri: str
    distribution: str
    components: str
    comment: str = ""

    # file the entry was read from, only used to target rewrites
    config_file: Path | None = Field(default=None, exclude=True, repr=False)

    def equals(self, other: "Repository") -> bool:
        """Check if other describes the same repository.

        Two repositories are equivalent if all metadata matches with the
        exception of enabled, comment and config_file.
        """
        return (
            self.components == other.components
            and self.distribution == other.distribution
            and self.uri == other.uri
            and self.source_repo == other.source_repo
            and self.options == other.options
        )

    def apt_config_line(self) -> str:
        """Return the line to put in a source list to configure this repository."""
        line = "" if self.enabled else "# "
        line += "deb-src " if self.source_repo else "deb "
        if self.options.strip():
            line += f"[{self.options}] "
        line += f"{self.uri} {self.distribution} {self.components}"
        if self.comment.strip():
            line += f" # {self.comment}"
        return line


class RepositoryList(list[Repository]):
    """Repositories in source list order, searchable by equivalence."""

    def find(self, repo: Repository) -> Repository | None:
        """Return the first repository equivalent to repo, or None."""
        for candidate in self:
            if repo.equals(candidate):
                return candidate
        return None

    def contains(self, repo: Repository) -> bool:
        return self.find(repo) is not None
