"""Event model for generator observability.

Defines the events recorded while scanning template modules and writing
the registry.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias


# ---------------------------------------------------------------------------
# Scan events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileScanned:
    """A template module was scanned.

    Attributes:
        path: Path to the template module.
        functions_found: Module-level functions declared in the file.
        templates_included: Functions that made it into the registry.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    functions_found: int
    templates_included: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FunctionSkipped:
    """A declared function was left out of the registry.

    Attributes:
        path: Path to the template module.
        function_name: Name of the skipped function.
        reason: ``naming`` for rule violations (reported as warnings),
            ``parameters`` for parametrized non-reserved functions.
        detail: Human-readable explanation.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    function_name: str
    reason: Literal["naming", "parameters"]
    detail: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Emission events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RegistryWritten:
    """The registry module was written.

    Attributes:
        path: Output file path.
        templates: Number of registered template functions.
        imports: Number of distinct import groups.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    templates: int
    imports: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationProfile:
    """Per-stage timing for one generator run.

    Attributes:
        trigger_path: File change that triggered the run (``""`` for a
            manual run).
        templates: Number of registered template functions.
        warnings: Number of naming warnings.
        scan_ms: Symbol loading and scanning.
        validate_ms: Post-scan invariant checks.
        allocate_ms: Import alias allocation.
        emit_ms: Rendering and writing the registry.
        total_ms: End-to-end run time.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger_path: str
    templates: int
    warnings: int
    scan_ms: float
    validate_ms: float
    allocate_ms: float
    emit_ms: float
    total_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

GeneratorEvent: TypeAlias = FileScanned | FunctionSkipped | RegistryWritten | GenerationProfile


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
