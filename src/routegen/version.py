"""Build and version metadata.

The version comes from the installed distribution when available.  For
installs made straight from a git checkout, the commit recorded by the
installer in ``direct_url.json`` is reported as well.
"""

from __future__ import annotations

import json
import platform
import sys
from dataclasses import dataclass
from importlib import metadata

DISTRIBUTION = "routegen"


@dataclass(frozen=True, slots=True)
class BuildInfo:
    """Version information embedded in generated registries."""

    version: str
    commit: str = "unknown"
    python_version: str = ""
    platform: str = ""

    def short(self) -> str:
        """``v0.1.0`` or ``v0.1.0-1a2b3c4`` when the commit is known."""
        if self.commit == "unknown":
            return f"v{self.version}"
        return f"v{self.version}-{self.commit}"

    def __str__(self) -> str:
        return (
            f"routegen {self.version} (commit: {self.commit}, "
            f"python: {self.python_version}, platform: {self.platform})"
        )


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def _installed_commit() -> str:
    try:
        raw = metadata.distribution(DISTRIBUTION).read_text("direct_url.json")
    except metadata.PackageNotFoundError:
        return "unknown"
    if not raw:
        return "unknown"
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return "unknown"
    commit = data.get("vcs_info", {}).get("commit_id", "")
    return commit[:7] if commit else "unknown"


def get_build_info() -> BuildInfo:
    """Collect build information for the running generator."""
    from routegen import __version__

    return BuildInfo(
        version=_installed_version() or __version__,
        commit=_installed_commit(),
        python_version=platform.python_version(),
        platform=f"{sys.platform}/{platform.machine()}",
    )
