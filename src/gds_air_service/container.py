"""
Dependency injection container for GDS air service components
"""

from typing import Any, Dict, Optional
import structlog

from .clients import GDSAPIClient, TerminalClient
from .config import config
from .interfaces import GDSAPIInterface, TerminalFactory, TerminalInterface
from .services import AirService

logger = structlog.get_logger()


def create_terminal() -> TerminalInterface:
    """Open a fresh terminal client; every terminal sub-workflow owns one session"""
    return TerminalClient()


class ServiceContainer:
    """
    Dependency injection container for managing service instances and their dependencies
    """

    def __init__(
        self,
        gds_client: Optional[GDSAPIInterface] = None,
        terminal_factory: Optional[TerminalFactory] = None,
    ):
        self._services: Dict[str, Any] = {}
        self._gds_client = gds_client
        self._terminal_factory = terminal_factory
        self._initialized = False

    async def initialize(self):
        """Initialize all services and their dependencies"""
        if self._initialized:
            return

        logger.info("Initializing service container")

        try:
            gds_client = self._gds_client or GDSAPIClient()
            terminal_factory = self._terminal_factory or create_terminal

            self._services['gds_client'] = gds_client
            self._services['terminal_factory'] = terminal_factory
            self._services['air_service'] = AirService(gds_client, terminal_factory, config.workflow)

            self._initialized = True
            logger.info("Service container initialized successfully", gds_base_url=config.gds_api.base_url)

        except Exception as e:
            logger.error("Failed to initialize service container", error=str(e))
            raise

    def get_service(self, service_name: str) -> Any:
        """Get a service by name"""
        if not self._initialized:
            raise RuntimeError("Container not initialized. Call initialize() first.")

        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found in container")

        return self._services[service_name]

    def get_air_service(self) -> AirService:
        """Get the air booking workflows"""
        return self.get_service('air_service')

    def get_gds_client(self) -> GDSAPIInterface:
        """Get the GDS API client"""
        return self.get_service('gds_client')

    async def cleanup(self):
        """Cleanup all services"""
        if not self._initialized:
            return

        logger.info("Cleaning up service container")

        try:
            await self._services['gds_client'].close()
        except Exception as e:
            logger.error("Error during service container cleanup", error=str(e))
        finally:
            self._services.clear()
            self._initialized = False

    def is_initialized(self) -> bool:
        """Check if container is initialized"""
        return self._initialized


# Global container instance
container = ServiceContainer()
