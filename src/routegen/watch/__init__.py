"""Watch mode: regenerate the registry on template changes."""

from routegen.watch.watcher import ChangeEvent, RegistryWatcher, is_watched, parse_extensions

__all__ = [
    "ChangeEvent",
    "RegistryWatcher",
    "is_watched",
    "parse_extensions",
]
