"""Routegen — a template registry generator.

Scans a tree of compiled template modules (``*_templ.py``), checks their
naming conventions, derives URL routes from the directory layout and writes
a single importable ``registry.py`` that maps keys and routes to template
functions.

Quick start::

    import routegen

    config = routegen.GeneratorConfig(scan_path="web/app", module_name="myproject")
    result = routegen.run_generation(config)

Or from the command line::

    routegen --scan-path web/app --module-name myproject
    routegen --scan-path web/app --module-name myproject --watch

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "GeneratorConfig",
    "RegistryWatcher",
    "__version__",
    "load_config",
    "run_generation",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routegen`` fast while providing a clean top-level API.
    """
    if name == "GeneratorConfig":
        from routegen.config import GeneratorConfig

        return GeneratorConfig

    if name == "load_config":
        from routegen.config_loader import load_config

        return load_config

    if name == "run_generation":
        from routegen.pipeline import run_generation

        return run_generation

    if name == "RegistryWatcher":
        from routegen.watch import RegistryWatcher

        return RegistryWatcher

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
