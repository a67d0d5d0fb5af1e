from os import getenv
from pathlib import Path

# root of the APT configuration, overridable for chroots and tests
APT_CONFIG_DIR = Path(getenv("APTCLIENT_CONFIG_DIR", "/etc/apt"))

SOURCES_LIST = "sources.list"
SOURCES_LIST_D = "sources.list.d"
LIST_SUFFIX = ".list"

# programmatically added repositories always land in this file inside sources.list.d
MANAGED_LIST = getenv("APTCLIENT_MANAGED_LIST", "managed.list")

# suffixes used while rewriting a list file
NEW_SUFFIX = ".new"
BACKUP_SUFFIX = ".save"

DPKG_QUERY_FORMAT = "${Package}\t${Architecture}\t${db:Status-Status}\t${Version}\t${Installed-Size}\t${binary:Summary}\n"

# dpkg-query exits non-zero with this message when a pattern matches nothing
NO_PACKAGES_FOUND = b"no packages found matching"
