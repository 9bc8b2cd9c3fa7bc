"""File watcher — regenerate the registry when template modules change.

Watches the scan root with watchfiles.  Every relevant change (a file
created, modified or deleted whose name ends in a watched extension) runs
the full pipeline once, in the watching thread, in the order the changes
were reported.  Changes under the output directory are ignored so writing
the registry never retriggers a run.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

from routegen.config import DEFAULT_WATCH_EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from routegen.config import GeneratorConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A relevant file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def parse_extensions(value: str) -> tuple[str, ...]:
    """Parse a comma-separated extension list (``".py,.yaml, yml"``)."""
    extensions: list[str] = []
    for raw in value.split(","):
        ext = raw.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        extensions.append(ext)
    return tuple(extensions)


def is_watched(path: Path, extensions: Sequence[str], *, ignore: Path | None = None) -> bool:
    """Whether a change to *path* should trigger a regeneration."""
    if ignore is not None and path.resolve().is_relative_to(ignore.resolve()):
        return False
    return any(path.name.endswith(ext) for ext in extensions)


class RegistryWatcher:
    """Re-run generation on relevant changes below the scan root.

    Args:
        config: Generator configuration; ``scan_path`` is watched and
            ``output_dir`` ignored.
        on_change: Called once per relevant change.
        extensions: File-name endings that count as relevant.

    """

    def __init__(
        self,
        config: GeneratorConfig,
        on_change: Callable[[ChangeEvent], None],
        *,
        extensions: Sequence[str] = DEFAULT_WATCH_EXTENSIONS,
    ) -> None:
        self._config = config
        self._on_change = on_change
        self._extensions = tuple(extensions)
        self._stop_event = threading.Event()

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def stop(self) -> None:
        """Signal the watch loop to return after the current batch."""
        self._stop_event.set()

    def changes(self) -> Iterator[ChangeEvent]:
        """Yield relevant changes until :meth:`stop` is called."""
        from watchfiles import watch

        for raw_changes in watch(
            self._config.scan_path,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            yield from self.relevant(raw_changes)

    def relevant(self, raw_changes: set[tuple[Change, str]]) -> list[ChangeEvent]:
        """Filter a watchfiles batch down to relevant changes, sorted by path."""
        events: list[ChangeEvent] = []
        for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
            path = Path(path_str)
            if not is_watched(path, self._extensions, ignore=self._config.output_dir):
                continue
            kind = _CHANGE_KIND_MAP.get(change_type, "modified")
            events.append(ChangeEvent(path=path, kind=kind))
        return events

    def run(self) -> None:
        """Block, calling ``on_change`` for each relevant change, until stopped."""
        self._stop_event.clear()
        for event in self.changes():
            self._on_change(event)
