"""Add, remove and edit repositories in an APT config folder.

Each operation scans the whole folder, locates the target entry and then
rewrites only the single file that holds it.
"""

import logging
import os
from pathlib import Path

from aptclient.constants import APT_CONFIG_DIR, BACKUP_SUFFIX, MANAGED_LIST, NEW_SUFFIX, SOURCES_LIST_D
from aptclient.errors import AptConfigError, RepositoryExistsError, RepositoryNotFoundError
from aptclient.models import Repository
from aptclient.sources import parse_apt_config_folder, parse_apt_config_line, read_config_lines

logger = logging.getLogger(__name__)


def managed_list_path(folder: Path | str = APT_CONFIG_DIR) -> Path:
    """Path of the file that receives repositories added by add_repository()."""
    return Path(folder) / SOURCES_LIST_D / MANAGED_LIST


def add_repository(repo: Repository, folder: Path | str = APT_CONFIG_DIR) -> Path:
    """Add a repository to the APT config folder.

    The entry is appended to sources.list.d/managed.list, which is created if needed.

    Returns:
        The file the entry was written to

    Raises:
        RepositoryExistsError: If an equivalent repository is already configured
        AptConfigError: If the folder can't be scanned or the file can't be written
    """
    repos = parse_apt_config_folder(folder)
    if repos.contains(repo):
        raise RepositoryExistsError(f"The repository is already configured: {repo.apt_config_line()}")

    managed_path = managed_list_path(folder)
    try:
        prefix = ""
        if managed_path.is_file():
            existing = managed_path.read_bytes()
            if existing and not existing.endswith(b"\n"):
                prefix = "\n"
        with managed_path.open("a", encoding="utf-8") as f:
            f.write(f"{prefix}{repo.apt_config_line()}\n")
    except OSError as e:
        raise AptConfigError(f"Writing repo data to config file {managed_path}: {e}") from e

    logger.debug(f"Added '{repo.apt_config_line()}' to {managed_path}")
    return managed_path


def _locate(repo: Repository, folder: Path | str, missing_msg: str) -> Path:
    found = parse_apt_config_folder(folder).find(repo)
    if found is None or found.config_file is None:
        raise RepositoryNotFoundError(f"{missing_msg}: {repo.apt_config_line()}")
    return found.config_file


def remove_repository(repo: Repository, folder: Path | str = APT_CONFIG_DIR) -> Path:
    """Remove a repository from the source list file that configures it.

    Every line of that file equivalent to repo is dropped, all the others are
    kept verbatim.

    Returns:
        The rewritten file

    Raises:
        RepositoryNotFoundError: If no equivalent repository is configured
        AptConfigError: If reading or rewriting the file fails
    """
    config_file = _locate(repo, folder, "Repository already removed")

    new_lines = []
    for line in read_config_lines(config_file):
        parsed = parse_apt_config_line(line)
        if parsed is not None and parsed.equals(repo):
            continue
        new_lines.append(line + "\n")

    replace_file(config_file, "".join(new_lines))
    logger.debug(f"Removed '{repo.apt_config_line()}' from {config_file}")
    return config_file


def edit_repository(old: Repository, new: Repository, folder: Path | str = APT_CONFIG_DIR) -> Path:
    """Replace the configuration of a repository with a new one, in place.

    Returns:
        The rewritten file

    Raises:
        RepositoryNotFoundError: If no repository equivalent to old is configured
        AptConfigError: If reading or rewriting the file fails
    """
    config_file = _locate(old, folder, "Repository doesn't exist")

    new_lines = []
    for line in read_config_lines(config_file):
        parsed = parse_apt_config_line(line)
        if parsed is not None and parsed.equals(old):
            new_lines.append(new.apt_config_line() + "\n")
            continue
        new_lines.append(line + "\n")

    replace_file(config_file, "".join(new_lines))
    logger.debug(f"Replaced '{old.apt_config_line()}' with '{new.apt_config_line()}' in {config_file}")
    return config_file


def replace_file(path: Path | str, content: str) -> None:
    """Replace the content of path without ever leaving it truncated.

    The new content goes to <path>.new, the original is moved to <path>.save
    and then <path>.new takes its place. If that last step fails the backup
    is moved back.

    Raises:
        AptConfigError: If any step fails
    """
    path = Path(path)
    new_path = path.with_name(path.name + NEW_SUFFIX)
    backup_path = path.with_name(path.name + BACKUP_SUFFIX)

    try:
        new_path.write_text(content, encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        new_path.unlink(missing_ok=True)
        raise AptConfigError(f"Creating replacement file for {path}: {e}") from e

    try:
        try:
            os.replace(path, backup_path)
        except OSError as e:
            raise AptConfigError(f"Making backup copy of {path}: {e}") from e

        try:
            os.replace(new_path, path)
        except OSError as e:
            try:
                os.replace(backup_path, path)
            except OSError as restore_err:
                logger.debug(f"Restoring {path} from {backup_path} failed: {restore_err}")
            raise AptConfigError(f"Renaming {new_path} to {path}: {e}") from e
    finally:
        new_path.unlink(missing_ok=True)
