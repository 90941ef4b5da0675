"""
Base service class providing common functionality for all services.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from utils.errors import ServiceError
from utils.logging import get_logger
from utils.tasks import spawn
from utils.types import InitializationState


class BaseService(ABC):
    """
    Abstract base class for the loader's services.

    Provides logging and a one-shot initialization lifecycle: the first call
    to ``initialize()`` schedules ``_initialize_impl`` as a task and every
    later call returns that same task.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = get_logger(f"services.{name}")
        self._state = InitializationState.NOT_STARTED
        self._init_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> InitializationState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is InitializationState.COMPLETE

    def initialize(self) -> asyncio.Task[None]:
        """
        Start initialization once and return its handle.

        Must be called from a running event loop. The returned task resolves
        when initialization completes and raises if it failed; it is the
        same object on every call.
        """
        if self._init_task is None:
            self._state = InitializationState.IN_PROGRESS
            self._init_task = spawn(self._run_initialize(), name=f"{self.name}-initialize")
        return self._init_task

    async def _run_initialize(self) -> None:
        self.logger.info(f"Initializing {self.name} service")
        try:
            await self._initialize_impl()
        except BaseException:
            # Failure is logged by the task's done callback
            self._state = InitializationState.FAILED
            raise
        self._state = InitializationState.COMPLETE
        self.logger.info(f"{self.name} service initialized successfully")

    async def shutdown(self) -> None:
        """Shutdown the service and cleanup resources."""
        if self._state is InitializationState.NOT_STARTED:
            return

        self.logger.info(f"Shutting down {self.name} service")
        try:
            await self._shutdown_impl()
        except Exception as e:
            self.logger.exception(
                "Error during %s service shutdown", self.name, exc_info=e
            )

    @abstractmethod
    async def _initialize_impl(self) -> None:
        """Subclass-specific initialization logic."""
        pass

    async def _shutdown_impl(self) -> None:
        """Subclass-specific shutdown logic. Override if needed."""
        pass

    def _ensure_initialized(self) -> None:
        """Raise an error if the service is not initialized."""
        if not self.is_initialized:
            raise ServiceError(f"{self.name} service is not initialized")

    async def health_check(self) -> dict[str, Any]:
        """
        Return health status of this service.

        Returns:
            Dict containing health information
        """
        status = {
            InitializationState.COMPLETE: "healthy",
            InitializationState.FAILED: "failed",
        }.get(self._state, "not_initialized")
        return {
            "service": self.name,
            "initialized": self.is_initialized,
            "state": self._state.value,
            "status": status,
        }
