"""Derive URL route patterns from a template's directory.

Routes come purely from the file-system layout below the scan root:

    app/page_templ.py                 Page    -> /
    app/layout_templ.py               Layout  -> /layout
    app/navbar_templ.py               NavBar  -> /nav_bar
    app/userSettings/page_templ.py    Page    -> /user_settings
    app/users/id_/page_templ.py       Page    -> /users/{id}
    app/users/id_/error_templ.py      Error   -> /users/{id}/error

A directory name ending in ``_`` is a dynamic URL parameter.
"""

from pathlib import PurePath

# Trailing character marking a directory as a dynamic URL parameter
DYNAMIC_MARKER = "_"

RESERVED_NAMES: frozenset[str] = frozenset({"Page", "Layout", "Error"})

_ROOT_ROUTES: dict[str, str] = {
    "Page": "/",
    "Layout": "/layout",
    "Error": "/error",
}


def to_snake_case(name: str) -> str:
    """Convert CamelCase/PascalCase to lower snake_case.

    ``UserSettings`` -> ``user_settings``, ``apiV2`` -> ``api_v2``.
    Characters other than ASCII letters pass through unchanged.
    """
    out: list[str] = []
    for i, ch in enumerate(name):
        if "A" <= ch <= "Z":
            if i > 0:
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def is_dynamic_segment(segment: str) -> bool:
    """Whether *segment* names a dynamic URL parameter (``id_``)."""
    return segment.endswith(DYNAMIC_MARKER)


def transform_segment(segment: str) -> str:
    """Turn one directory name into a URL path segment.

    ``id_`` -> ``{id}`` (no case conversion), ``UserSettings`` -> ``user_settings``.
    """
    if is_dynamic_segment(segment):
        return "{" + segment[: -len(DYNAMIC_MARKER)] + "}"
    return to_snake_case(segment)


def path_segments(directory: PurePath | str) -> list[str]:
    """Split *directory* into non-empty POSIX segments."""
    return [p for p in PurePath(directory).as_posix().split("/") if p and p != "."]


def root_anchor(segments: list[str], root_name: str) -> int:
    """Index of the rightmost segment equal to *root_name*, or ``-1``."""
    for i in range(len(segments) - 1, -1, -1):
        if segments[i] == root_name:
            return i
    return -1


def relative_segments(directory: PurePath | str, root_name: str) -> list[str]:
    """Return the directory segments after the rightmost *root_name* segment.

    Anchoring on the rightmost occurrence makes the result independent of
    the working directory the generator was started from.  When *root_name*
    does not occur at all every segment is returned.
    """
    parts = path_segments(directory)
    anchor = root_anchor(parts, root_name)
    if anchor == -1:
        return parts
    return parts[anchor + 1 :]


def route_suffix(function_name: str) -> str:
    """Suffix appended to a directory route for *function_name*."""
    if function_name == "Page":
        return ""
    if function_name == "Layout":
        return "/layout"
    if function_name == "Error":
        return "/error"
    return "/" + to_snake_case(function_name)


def create_route_pattern(file_path: PurePath | str, function_name: str, root_name: str) -> str:
    """Derive the route pattern for *function_name* declared in *file_path*."""
    segments = relative_segments(PurePath(file_path).parent, root_name)

    if not segments:
        return _ROOT_ROUTES.get(function_name, "/" + to_snake_case(function_name))

    cleaned = [transform_segment(seg) for seg in segments if seg and seg != root_name]
    base = "/" + "/".join(cleaned) if cleaned else ""
    route = base + route_suffix(function_name)
    # A directory chain made only of root-name segments collapses to root
    return route or "/"
