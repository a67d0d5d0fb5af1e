"""Parser for one-line-style APT source lists (sources.list and sources.list.d/*.list)."""

import logging
import re
from pathlib import Path

from aptclient.constants import LIST_SUFFIX, SOURCES_LIST, SOURCES_LIST_D
from aptclient.errors import AptConfigError
from aptclient.models import Repository, RepositoryList
from aptclient.utils import file_exists, split_lines

logger = logging.getLogger(__name__)

# [# ]deb|deb-src [[options]] uri distribution components [# comment]
APT_CONFIG_LINE_RE = re.compile(r"^(# )?(deb|deb-src)(?: \[(.*)\])? ([^ ]+) ([^ ]+) ([^#\n]+)(?: +# *(.*))?$")


def parse_apt_config_line(line: str) -> Repository | None:
    """Parse a single source list line.

    Args:
        line: The line to parse, without its line terminator

    Returns:
        The Repository described by the line, or None if the line is not a
        (possibly commented out) deb/deb-src entry
    """
    match = APT_CONFIG_LINE_RE.match(line)
    if match is None:
        return None
    disabled, kind, options, uri, distribution, components, comment = match.groups()
    return Repository(
        enabled=disabled is None,
        source_repo=kind == "deb-src",
        options=options or "",
        uri=uri,
        distribution=distribution,
        components=components.rstrip(),
        comment=comment or "",
    )


def read_config_lines(path: Path) -> list[str]:
    # undecodable bytes survive as surrogates so rewrites reproduce them unchanged
    try:
        data = path.read_bytes()
    except OSError as e:
        raise AptConfigError(f"Reading {path}: {e}") from e
    return split_lines(data.decode("utf-8", errors="surrogateescape"))


def parse_apt_config_file(path: Path | str) -> RepositoryList:
    """Parse every repository entry in a source list file, in line order."""
    path = Path(path)
    repos = RepositoryList()
    for line in read_config_lines(path):
        repo = parse_apt_config_line(line)
        if repo is not None:
            repos.append(repo.model_copy(update={"config_file": path}))
    logger.debug(f"Parsed {len(repos)} repositories from {path}")
    return repos


def list_source_files(folder: Path | str) -> list[Path]:
    """Return the source list files APT reads below folder, in scan order.

    sources.list comes first, then the *.list files of sources.list.d sorted by name.
    """
    folder = Path(folder)
    sources: list[Path] = []

    sources_file = folder / SOURCES_LIST
    if file_exists(sources_file):
        sources.append(sources_file)

    sources_dir = folder / SOURCES_LIST_D
    try:
        entries = sorted(sources_dir.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise AptConfigError(f"Reading {sources_dir} folder: {e}") from e
    sources.extend(entry for entry in entries if entry.name.endswith(LIST_SUFFIX))
    return sources


def parse_apt_config_folder(folder: Path | str) -> RepositoryList:
    """Scan an APT config folder (usually /etc/apt) for configured repositories.

    Both sources.list and every *.list file inside sources.list.d are read.
    Any unreadable file aborts the whole scan.

    Args:
        folder: The APT configuration folder

    Returns:
        All repositories, in file scan order then line order

    Raises:
        AptConfigError: If sources.list.d or one of the files can't be read
    """
    repos = RepositoryList()
    for source in list_source_files(folder):
        try:
            repos.extend(parse_apt_config_file(source))
        except AptConfigError as e:
            raise AptConfigError(f"Parsing {source}: {e}") from e
    return repos
