"""Dependency injection container.

The entry point creates a container, resolves the QueryService and
hands it to whatever presents the results. The container owns the
single directory/network pair built at load time; there is no
module-level instance.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, configure_logging, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(QueryService)

        # Testing
        container = Container()
        container.register(RecordSourcePort, lambda: FakeSource())
        source = container.resolve(RecordSourcePort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        The next resolve() reloads the data file.
        """
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.
        """
        from .adapters.records import JSONRecordRepository
        from .adapters.rendering import FoliumNetworkRenderer
        from .ports.records import RecordSourcePort
        from .ports.rendering import MapRendererPort
        from .services import QueryService

        config = config or get_config()
        configure_logging(config.observability)
        container = cls(config=config)

        container.register(
            RecordSourcePort,
            lambda: JSONRecordRepository(config.data),
        )
        container.register(
            MapRendererPort,
            lambda: FoliumNetworkRenderer(zoom_start=config.map.zoom_start),
        )

        def create_query_service() -> QueryService:
            records = container.resolve(RecordSourcePort).load()
            return QueryService.from_records(
                records,
                map_base_url=config.map.base_url,
                map_renderer=container.resolve(MapRendererPort),
            )

        container.register(QueryService, create_query_service)

        return container
