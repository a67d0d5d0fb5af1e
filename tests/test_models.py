from pathlib import Path

import pytest
from pydantic import ValidationError

from aptclient.models import Package, PackageStatus, Repository, RepositoryList


def make_repo(**kwargs) -> Repository:
    values = dict(uri="http://archive.ubuntu.com/ubuntu/", distribution="focal", components="main restricted")
    values.update(kwargs)
    return Repository(**values)


class TestPackage:
    def test_defaults(self):
        pkg = Package(name="nano", status="installed", architecture="amd64", version="4.8-1ubuntu1")
        assert pkg.installed_size_kb == 0
        assert pkg.short_description == ""

    def test_is_immutable(self):
        pkg = Package(name="nano", status="installed", architecture="amd64", version="4.8-1ubuntu1")
        with pytest.raises(ValidationError):
            pkg.name = "vim"

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            Package(name="nano", status="installed", architecture="amd64", version="1", installed_size_kb=-1)

    def test_status_enum_values_are_strings(self):
        assert PackageStatus.UPGRADABLE == "upgradable"
        assert PackageStatus("config-files") is PackageStatus.CONFIG_FILES


class TestRepositoryEquals:
    def test_ignores_enabled_and_comment(self):
        repo = make_repo()
        assert repo.equals(make_repo(enabled=False, comment="disabled on upgrade"))

    def test_ignores_config_file(self):
        assert make_repo().equals(make_repo(config_file=Path("/etc/apt/sources.list")))

    @pytest.mark.parametrize(
        "change",
        [
            {"uri": "http://ports.ubuntu.com/"},
            {"distribution": "jammy"},
            {"components": "main"},
            {"source_repo": True},
            {"options": "arch=amd64"},
        ],
    )
    def test_identity_fields(self, change):
        assert not make_repo().equals(make_repo(**change))

    def test_config_file_not_serialized(self):
        repo = make_repo(config_file=Path("/etc/apt/sources.list"))
        assert "config_file" not in repo.model_dump()


class TestAptConfigLine:
    def test_enabled_binary(self):
        assert make_repo().apt_config_line() == "deb http://archive.ubuntu.com/ubuntu/ focal main restricted"

    def test_disabled_source_with_options_and_comment(self):
        repo = make_repo(enabled=False, source_repo=True, options="arch=amd64", comment="sources")
        assert (
            repo.apt_config_line()
            == "# deb-src [arch=amd64] http://archive.ubuntu.com/ubuntu/ focal main restricted # sources"
        )

    def test_blank_options_and_comment_are_omitted(self):
        repo = make_repo(options="  ", comment=" ")
        assert repo.apt_config_line() == "deb http://archive.ubuntu.com/ubuntu/ focal main restricted"


class TestRepositoryList:
    def test_find_returns_first_equivalent(self):
        first = make_repo(config_file=Path("a.list"))
        second = make_repo(config_file=Path("b.list"), enabled=False)
        repos = RepositoryList([make_repo(distribution="jammy"), first, second])
        assert repos.find(make_repo()) is first

    def test_find_missing(self):
        repos = RepositoryList([make_repo()])
        assert repos.find(make_repo(components="universe")) is None
        assert not repos.contains(make_repo(components="universe"))

    def test_contains(self):
        assert RepositoryList([make_repo()]).contains(make_repo(comment="anything"))

    def test_empty(self):
        repos = RepositoryList()
        assert repos == []
        assert not repos.contains(make_repo())
