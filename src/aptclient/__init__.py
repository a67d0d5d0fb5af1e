import logging

from rich.logging import RichHandler

from aptclient.commands import CommandResult, run_command
from aptclient.errors import (
    AptConfigError,
    AptError,
    CommandError,
    InvalidPackageError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from aptclient.models import Package, PackageStatus, Repository, RepositoryList
from aptclient.packages import (
    check_for_updates,
    install,
    list_packages,
    list_upgradable,
    package_info,
    remove,
    search,
    upgrade,
    upgrade_all,
)
from aptclient.reconcile import add_repository, edit_repository, remove_repository
from aptclient.sources import parse_apt_config_folder, parse_apt_config_line

logging.getLogger(__name__).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to the terminal through rich, for applications using aptclient."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


__all__ = [
    "AptConfigError",
    "AptError",
    "CommandError",
    "CommandResult",
    "InvalidPackageError",
    "Package",
    "PackageStatus",
    "Repository",
    "RepositoryExistsError",
    "RepositoryList",
    "RepositoryNotFoundError",
    "add_repository",
    "check_for_updates",
    "configure_logging",
    "edit_repository",
    "install",
    "list_packages",
    "list_upgradable",
    "package_info",
    "parse_apt_config_folder",
    "parse_apt_config_line",
    "remove",
    "remove_repository",
    "run_command",
    "search",
    "upgrade",
    "upgrade_all",
]
