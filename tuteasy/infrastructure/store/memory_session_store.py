from __future__ import annotations

import uuid

from tuteasy.application.ports.flow_session_store import FlowSessionStorePort
from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase


class MemoryFlowSessionStore(FlowSessionStorePort):
    def __init__(self, max_sessions: int = 1000) -> None:
        self._flows: dict[str, BookingFlowUseCase] = {}
        self._max_sessions = max_sessions

    def create(self, flow: BookingFlowUseCase) -> str:
        session_id = uuid.uuid4().hex
        self._flows[session_id] = flow
        if len(self._flows) > self._max_sessions:
            # dicts keep insertion order; drop the oldest session
            oldest = next(iter(self._flows))
            del self._flows[oldest]
        return session_id

    def get(self, session_id: str) -> BookingFlowUseCase | None:
        return self._flows.get(session_id)

    def discard(self, session_id: str) -> None:
        self._flows.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._flows)
