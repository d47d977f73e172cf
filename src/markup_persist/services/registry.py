"""
Service Registry
Explicit services context threaded through every persist call
"""

from typing import Any, Dict, Optional

from ..core.errors import ResolutionError
from ..core.logging_config import get_logger
from .types import ServiceKind

logger = get_logger(__name__)


class ServiceRegistry:
    """
    Registry of the collaborators a persist call consumes.
    Tag prefixes and property metadata are required; events are optional.
    """

    def __init__(self, services: Optional[Dict[ServiceKind, Any]] = None):
        self.services: Dict[ServiceKind, Any] = {}
        for kind, service in (services or {}).items():
            self.register(kind, service)

    def register(self, kind: ServiceKind, service: Any) -> None:
        """
        Register a service provider.

        Args:
            kind: Which collaborator the provider implements
            service: Provider instance
        """
        if kind in self.services:
            logger.warning("service_replaced", kind=kind.value)

        self.services[kind] = service
        logger.debug("service_registered", kind=kind.value, provider=type(service).__name__)

    def unregister(self, kind: ServiceKind) -> None:
        """Unregister a service"""
        if self.services.pop(kind, None) is not None:
            logger.debug("service_unregistered", kind=kind.value)

    def get(self, kind: ServiceKind) -> Optional[Any]:
        """Get a provider, or None when absent"""
        return self.services.get(kind)

    def require(self, kind: ServiceKind) -> Any:
        """
        Get a provider that must be present.

        Raises:
            ResolutionError: If no provider is registered for ``kind``
        """
        service = self.services.get(kind)
        if service is None:
            logger.error("service_missing", kind=kind.value)
            raise ResolutionError(f"Could not obtain {kind.value} service")
        return service

    def __contains__(self, kind: ServiceKind) -> bool:
        return kind in self.services

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics"""
        return {
            "total_services": len(self.services),
            "kinds": [kind.value for kind in self.services],
            "providers": {kind.value: type(s).__name__ for kind, s in self.services.items()},
        }
