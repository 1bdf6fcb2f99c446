# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Public waitlist endpoints — signup and counter.
Thin HTTP layer — delegates ALL logic to SignupService.
"""

from fastapi import APIRouter, Depends

from launchlist.core.dependencies import get_signup_service
from launchlist.schemas import CountResponse, ErrorResponse, SignupRequest, SignupResponse
from launchlist.services.signup_service import SignupService

router = APIRouter(prefix="/api/v1", tags=["Waitlist"])


@router.post("/signups", response_model=SignupResponse, status_code=201,
             summary="Join the waitlist",
             responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse},
                        503: {"model": ErrorResponse}})
def create_signup(
    payload: SignupRequest,
    service: SignupService = Depends(get_signup_service),
):
    """Validate, normalise and store one email with optional attribution."""
    confirmation = service.submit(payload.email, payload.source, payload.referrer)
    return SignupResponse(**confirmation.model_dump())


@router.get("/count", response_model=CountResponse,
            summary="Current waitlist size",
            responses={503: {"model": ErrorResponse}})
def get_count(service: SignupService = Depends(get_signup_service)):
    return CountResponse(count=service.count())
