from collections.abc import Awaitable, Callable
from datetime import date
from functools import lru_cache
import logging

from tuteasy.application.ports.auth_context import AuthContextPort
from tuteasy.application.ports.availability import AvailabilityProviderPort
from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.application.ports.flow_session_store import FlowSessionStorePort
from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase
from tuteasy.application.use_cases.confirm_booking import ConfirmBookingUseCase
from tuteasy.application.use_cases.user_bookings import UserBookingsUseCase
from tuteasy.core.config import settings
from tuteasy.infrastructure.api.api_client import TutEasyApiClient
from tuteasy.infrastructure.auth.static_auth import StaticAuthContext
from tuteasy.infrastructure.availability.http_availability import HttpAvailabilityProvider
from tuteasy.infrastructure.availability.mock_availability import DEMO_TUTOR, MockAvailabilityProvider
from tuteasy.infrastructure.bookings.http_booking_store import HttpBookingStore
from tuteasy.infrastructure.bookings.mock_booking_store import MockBookingStore
from tuteasy.infrastructure.store.memory_session_store import MemoryFlowSessionStore

FlowFactory = Callable[[str, int | None, str | None, str | None], Awaitable[BookingFlowUseCase]]

logger = logging.getLogger(__name__)


@lru_cache
def get_auth_context() -> AuthContextPort:
    return StaticAuthContext(settings.TUTEASY_API_TOKEN)


@lru_cache
def get_api_client() -> TutEasyApiClient:
    return TutEasyApiClient(
        base_url=settings.TUTEASY_API_URL,
        auth=get_auth_context(),
        timeout=settings.TUTEASY_API_TIMEOUT_SECONDS,
    )


@lru_cache
def get_mock_booking_store() -> MockBookingStore:
    return MockBookingStore(hourly_rates={DEMO_TUTOR.id: DEMO_TUTOR.hourly_rate})


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.uses_mock_collaborators:
        logger.info("Using MockBookingStore (ENV=%s)", settings.ENV)
        return get_mock_booking_store()
    return HttpBookingStore(get_api_client())


@lru_cache
def get_availability_provider() -> AvailabilityProviderPort:
    if settings.uses_mock_collaborators:
        logger.info("Using MockAvailabilityProvider (ENV=%s)", settings.ENV)
        return MockAvailabilityProvider(
            booking_store=get_mock_booking_store(),
            delay_seconds=settings.MOCK_SLOT_DELAY_SECONDS,
        )
    return HttpAvailabilityProvider(get_api_client())


@lru_cache
def get_user_bookings_use_case() -> UserBookingsUseCase:
    return UserBookingsUseCase(store=get_booking_store())


@lru_cache
def get_flow_session_store() -> FlowSessionStorePort:
    return MemoryFlowSessionStore()


def build_flow_factory(
    availability: AvailabilityProviderPort,
    store: BookingStorePort,
    user_bookings: UserBookingsUseCase,
    default_duration: int = 60,
    horizon_days: int | None = None,
    clock: Callable[[], date] = date.today,
) -> FlowFactory:
    async def create_flow(
        tutor_id: str,
        duration_minutes: int | None = None,
        subject: str | None = None,
        notes: str | None = None,
    ) -> BookingFlowUseCase:
        flow = BookingFlowUseCase(
            tutor_id=tutor_id,
            availability=availability,
            # one orchestrator per flow, so the in-flight guard is per session
            confirm_booking=ConfirmBookingUseCase(store=store, user_bookings=user_bookings),
            duration_minutes=duration_minutes or default_duration,
            subject=subject,
            notes=notes,
            horizon_days=horizon_days,
            clock=clock,
        )
        await flow.load()
        return flow

    return create_flow


def get_flow_factory() -> FlowFactory:
    return build_flow_factory(
        availability=get_availability_provider(),
        store=get_booking_store(),
        user_bookings=get_user_bookings_use_case(),
        default_duration=settings.DEFAULT_LESSON_DURATION_MINUTES,
        horizon_days=settings.BOOKING_HORIZON_DAYS,
    )
