from pathlib import Path

import pytest

from aptclient import packages
from aptclient.commands import CommandResult

DATA_DIR = Path(__file__).parent / "data"

SOURCES_LIST = """\
# See http://help.ubuntu.com/community/UpgradeNotes for how to upgrade to
# newer versions of the distribution.
deb http://archive.ubuntu.com/ubuntu/ focal main restricted
# deb-src http://archive.ubuntu.com/ubuntu/ focal main restricted

deb http://archive.ubuntu.com/ubuntu/ focal-updates main restricted universe # updates
deb [arch=amd64] https://download.docker.com/linux/ubuntu focal stable
"""

VSCODE_LIST = """\
### THIS FILE IS AUTOMATICALLY CONFIGURED ###
deb [arch=amd64,arm64,armhf] http://packages.microsoft.com/repos/code stable main
"""


class FakeRunner:
    """Stands in for run_command, answering every call with the same canned result."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []
        self.returncode = 0
        self.output = b""
        self.stderr = b""

    def __call__(self, args, *, combine_output=True, env=None):
        self.calls.append(list(args))
        self.envs.append(env)
        return CommandResult(args=args, returncode=self.returncode, output=self.output, stderr=self.stderr)


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def fake_run(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr(packages, "run_command", runner)
    return runner


@pytest.fixture
def apt_folder(tmp_path) -> Path:
    """An /etc/apt lookalike with a sources.list and one file in sources.list.d."""
    folder = tmp_path / "apt"
    (folder / "sources.list.d").mkdir(parents=True)
    (folder / "sources.list").write_text(SOURCES_LIST)
    (folder / "sources.list.d" / "vscode.list").write_text(VSCODE_LIST)
    # leftovers that must not be scanned
    (folder / "sources.list.d" / "vscode.list.save").write_text(VSCODE_LIST)
    (folder / "sources.list.d" / "README").write_text("deb http://example.com/ubuntu focal main\n")
    return folder


@pytest.fixture
def empty_apt_folder(tmp_path) -> Path:
    folder = tmp_path / "apt"
    (folder / "sources.list.d").mkdir(parents=True)
    return folder
