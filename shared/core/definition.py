"""Per-service definition consumed by the shared application factory."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.core.container import CommonContainer
    from shared.core.flask_app import App


def _no_blueprints(app: "App") -> None:
    pass


@dataclass(frozen=True)
class ServiceDefinition:
    """Identity and hooks of one service built on the shared library.

    Attributes:
        name: Service name reported by probes, status routes and logs
        version: Service version
        default_port: Port used when PORT is absent or unparseable
        requests_metric: Name of the request counter series
        requests_help: HELP text of the request counter
        uptime_metric: Name of the uptime gauge series
        uptime_help: HELP text of the uptime gauge
        container_class: Container class, CommonContainer or a subclass
        register_blueprints: Hook registering the service's own routes
        wire_packages: Packages whose routes receive container injection
    """

    name: str
    version: str
    default_port: int
    requests_metric: str
    requests_help: str
    uptime_metric: str
    uptime_help: str
    container_class: type["CommonContainer"] | None = None
    register_blueprints: Callable[["App"], None] = _no_blueprints
    wire_packages: tuple[str, ...] = field(default_factory=tuple)
