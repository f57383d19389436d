import platform

from iavlproof import version
from iavlproof.version import VersionInfo, get_version_info


def test_str_layout():
    info = VersionInfo("1.2.0", "abcdef", "main", "runtime line")
    assert str(info) == "iavl: 1.2.0\ngit commit: abcdef\ngit branch: main\nruntime line"


def test_get_version_info_uses_module_constants():
    info = get_version_info()
    assert info.iavl == version.VERSION
    assert info.git_commit == version.COMMIT
    assert info.branch == version.BRANCH


def test_runtime_mentions_interpreter_version():
    info = get_version_info()
    assert platform.python_version() in info.runtime
    assert info.runtime.endswith("\n")
    assert str(info).endswith(info.runtime)