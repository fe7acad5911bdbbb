from fastapi import APIRouter, Depends, HTTPException, Query, status

from tuteasy.api.v1.presenters import present_booking
from tuteasy.api.v1.schemas import BookingSchema
from tuteasy.application.exceptions import NetworkError
from tuteasy.application.use_cases.user_bookings import UserBookingsUseCase
from tuteasy.wiring.dependencies import get_user_bookings_use_case

router = APIRouter(prefix="/v1/bookings")


@router.get("", response_model=list[BookingSchema])
async def list_bookings(
    refresh: bool = Query(False),
    uc: UserBookingsUseCase = Depends(get_user_bookings_use_case),
):
    try:
        bookings = await uc.list_bookings(refresh=refresh)
    except NetworkError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return [present_booking(b) for b in bookings]


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking(booking_id: str, uc: UserBookingsUseCase = Depends(get_user_bookings_use_case)):
    try:
        await uc.cancel(booking_id)
    except NetworkError as e:
        raise HTTPException(status_code=502, detail=e.message)
