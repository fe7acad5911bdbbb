from fastapi import FastAPI

from tuteasy.api.v1.booking_sessions import router as booking_sessions_router
from tuteasy.api.v1.bookings import router as bookings_router
from tuteasy.core.config import settings
from tuteasy.core.log import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="TutEasy Lesson Booking", version="1.0.0")

app.include_router(booking_sessions_router, tags=["booking"])
app.include_router(bookings_router, tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
