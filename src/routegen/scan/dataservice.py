"""Data service detection for reserved template functions.

A ``Page``/``Layout``/``Error`` function whose first parameter looks like a
data holder is associated with a data service the router can inject:

    Page(data: myproject.dataservices.UserData)
        -> dataservices.UserDataService

``detect_data_service`` only infers a plausible association from names.
It does not check that the service exists or satisfies any contract.
Callers that know better can inject their own detector into the scanner.
"""

from dataclasses import dataclass

from routegen.symbols import Parameter

# Type-name suffixes that mark a parameter as loaded data
DATA_HOLDER_SUFFIXES: tuple[str, ...] = ("Data", "Model", "Entity")

# Module path fragments signalling a data-service area
DATA_SERVICE_MARKERS: tuple[str, ...] = ("dataservices", "data")

SERVICE_SUFFIX = "DataService"


@dataclass(frozen=True, slots=True)
class DataServiceInfo:
    """Data dependency inferred for a template function.

    Attributes:
        requires_data_service: Whether the router should resolve data first.
        interface: Inferred service interface, e.g. ``dataservices.UserDataService``.
        parameter_type: Resolved type of the data parameter.

    """

    requires_data_service: bool
    interface: str
    parameter_type: str


def service_interface_name(type_name: str) -> str:
    """``UserData`` / ``UserModel`` / ``UserEntity`` -> ``UserDataService``."""
    for suffix in DATA_HOLDER_SUFFIXES:
        if type_name.endswith(suffix):
            return type_name[: -len(suffix)] + SERVICE_SUFFIX
    return type_name + SERVICE_SUFFIX


def _service_package(type_module: str) -> str:
    parts = [p for p in type_module.split(".") if p]
    if not parts:
        return ""
    for part in parts:
        if any(marker in part for marker in DATA_SERVICE_MARKERS):
            return part
    return parts[-1]


def detect_data_service(parameter: Parameter) -> DataServiceInfo | None:
    """Infer a data service from the first parameter of a reserved function.

    Returns *None* when the parameter carries no annotation or the
    inferred association does not look like a data service.
    """
    type_name = parameter.type_name
    if not type_name:
        return None

    module = parameter.type_module
    looks_like_data = type_name.endswith(DATA_HOLDER_SUFFIXES) or any(
        marker in module for marker in DATA_SERVICE_MARKERS
    )
    if not looks_like_data:
        return None

    interface = service_interface_name(type_name)
    package = _service_package(module)
    return DataServiceInfo(
        requires_data_service=True,
        interface=f"{package}.{interface}" if package else interface,
        parameter_type=parameter.annotation,
    )
