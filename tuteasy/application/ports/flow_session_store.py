from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase


class FlowSessionStorePort(ABC):
    @abstractmethod
    def create(self, flow: "BookingFlowUseCase") -> str:
        """Store a new flow and return its session id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> "BookingFlowUseCase | None":
        raise NotImplementedError

    @abstractmethod
    def discard(self, session_id: str) -> None:
        raise NotImplementedError
