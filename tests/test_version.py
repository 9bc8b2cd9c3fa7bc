"""Tests for routegen.version."""

from __future__ import annotations

import routegen
from routegen.version import BuildInfo, get_build_info


class TestBuildInfo:
    def test_short_without_commit(self) -> None:
        assert BuildInfo(version="0.1.0").short() == "v0.1.0"

    def test_short_with_commit(self) -> None:
        assert BuildInfo(version="0.1.0", commit="1a2b3c4").short() == "v0.1.0-1a2b3c4"

    def test_str(self) -> None:
        info = BuildInfo(version="0.1.0", commit="1a2b3c4", python_version="3.12.1", platform="linux/x86_64")
        assert str(info) == (
            "routegen 0.1.0 (commit: 1a2b3c4, python: 3.12.1, platform: linux/x86_64)"
        )


class TestGetBuildInfo:
    def test_reports_running_interpreter(self) -> None:
        import platform

        info = get_build_info()
        assert info.python_version == platform.python_version()
        assert info.platform
        assert info.version

    def test_version_matches_package(self) -> None:
        assert get_build_info().version.startswith(routegen.__version__)
