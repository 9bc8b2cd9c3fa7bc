"""Template discovery — scanning, naming rules, routes and packages.

Public API::

    from routegen.scan import Scanner, scan_templates

    result = scan_templates(config, AstSymbolSource(config.scan_path))
    for entry in result.entries:
        print(entry.route_pattern, entry.function_name)
"""

from routegen.scan.dataservice import DataServiceInfo, detect_data_service
from routegen.scan.naming import validate_function_naming, validate_template_path
from routegen.scan.packages import (
    PackageInfo,
    create_human_name,
    resolve_package,
    sanitize_package_name,
)
from routegen.scan.routes import create_route_pattern, to_snake_case
from routegen.scan.scanner import (
    Scanner,
    ScanResult,
    TemplateEntry,
    filter_package,
    random_template_key,
    scan_package,
    scan_templates,
    stable_template_key,
)

__all__ = [
    "DataServiceInfo",
    "PackageInfo",
    "ScanResult",
    "Scanner",
    "TemplateEntry",
    "create_human_name",
    "create_route_pattern",
    "detect_data_service",
    "filter_package",
    "random_template_key",
    "resolve_package",
    "sanitize_package_name",
    "scan_package",
    "scan_templates",
    "stable_template_key",
    "to_snake_case",
    "validate_function_naming",
    "validate_template_path",
]
