"""Query and change the packages installed through dpkg and APT."""

import logging
import re

from debian import deb822

from aptclient.commands import CommandResult, noninteractive_env, run_command
from aptclient.constants import DPKG_QUERY_FORMAT, NO_PACKAGES_FOUND
from aptclient.errors import InvalidPackageError
from aptclient.models import Package, PackageStatus
from aptclient.utils import safe_int, split_lines

logger = logging.getLogger(__name__)

# name[/origin] version arch [upgradable from: old-version]
UPGRADABLE_LINE_RE = re.compile(r"^([^ ]+) ([^ ]+) ([^ ]+)( \[upgradable from: [^\[\]]*\])?")


def _to_text(out: bytes | str) -> str:
    return out.decode("utf-8", errors="replace") if isinstance(out, bytes) else out


def parse_dpkg_query_output(out: bytes | str) -> list[Package]:
    """Parse the tab separated records printed by dpkg-query.

    Args:
        out: Output of dpkg-query run with DPKG_QUERY_FORMAT

    Returns:
        One Package per line, in input order
    """
    packages: list[Package] = []
    for line in split_lines(_to_text(out)):
        if not line:
            continue
        fields = line.split("\t")
        # pad short records so the optional trailing columns fall back to defaults
        fields += [""] * (6 - len(fields))
        packages.append(
            Package(
                name=fields[0],
                architecture=fields[1],
                status=fields[2],
                version=fields[3],
                installed_size_kb=safe_int(fields[4]),
                short_description=fields[5],
            )
        )
    return packages


def search(pattern: str) -> list[Package]:
    """List the packages known to dpkg whose name matches pattern."""
    result = run_command(["dpkg-query", "-W", f"-f={DPKG_QUERY_FORMAT}", pattern])
    if not result.success:
        if NO_PACKAGES_FOUND in result.output:
            logger.debug(f"No packages found matching '{pattern}'")
            return []
        result.check(f"running dpkg-query for '{pattern}'")
    return parse_dpkg_query_output(result.output)


def list_packages() -> list[Package]:
    """List every package known to dpkg along with its status."""
    return search("*")


def parse_list_upgradable_output(out: bytes | str) -> list[Package]:
    """Parse the output of `apt list --upgradable`.

    Lines that don't look like a package entry (e.g. "Listing...") are skipped.
    """
    packages: list[Package] = []
    for line in split_lines(_to_text(out)):
        match = UPGRADABLE_LINE_RE.match(line)
        if match is None:
            continue
        # "libgweather-common/zesty-updates,zesty-updates" -> "libgweather-common"
        name = match.group(1).split("/")[0]
        packages.append(
            Package(
                name=name,
                status=PackageStatus.UPGRADABLE.value,
                version=match.group(2),
                architecture=match.group(3),
            )
        )
    return packages


def list_upgradable() -> list[Package]:
    """Return the upgradable packages with the version an upgrade_all() would install."""
    result = run_command(["apt", "list", "--upgradable"], combine_output=False)
    result.check("running apt list")
    return parse_list_upgradable_output(result.output)


def check_for_updates() -> CommandResult:
    """Run `apt-get update` to refresh the package catalog.

    The result is returned as is, even for a non-zero exit status, so the
    caller can show apt's own diagnostics.
    """
    return run_command(["apt-get", "update", "-q"])


def package_info(name: str) -> dict[str, str]:
    """Return the dpkg status stanza of an installed package."""
    if not name:
        raise InvalidPackageError("package_info: invalid package with empty name")
    result = run_command(["dpkg-query", "-s", name], combine_output=False)
    result.check(f"running dpkg-query for '{name}'")
    stanza = next(deb822.Deb822.iter_paragraphs(_to_text(result.output)), None)
    return dict(stanza) if stanza is not None else {}


def _package_names(action: str, packages: tuple[Package | str | None, ...]) -> list[str]:
    names = []
    for pkg in packages:
        name = pkg.name if isinstance(pkg, Package) else pkg
        if not name:
            raise InvalidPackageError(f"{action}: invalid package with empty name")
        names.append(name)
    return names


def _apt_get(verb: str, names: list[str]) -> CommandResult:
    result = run_command(["apt-get", verb, "-y", *names], env=noninteractive_env())
    return result.check(f"running apt-get {verb}")


def upgrade(*packages: Package | str) -> CommandResult:
    """Upgrade a set of packages."""
    return _apt_get("upgrade", _package_names("upgrade", packages))


def upgrade_all() -> CommandResult:
    """Upgrade all upgradable packages."""
    return _apt_get("upgrade", [])


def install(*packages: Package | str) -> CommandResult:
    """Install a set of packages."""
    return _apt_get("install", _package_names("install", packages))


def remove(*packages: Package | str) -> CommandResult:
    """Remove a set of packages."""
    return _apt_get("remove", _package_names("remove", packages))
