"""
API v1 routes.

Defines REST endpoints for organisation onboarding.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_registration_service
from src.api.models import (
    DisplayNameResponse,
    ErrorResponse,
    OrganisationView,
    RegisterRequest,
    RegisterResponse,
    UserView,
)
from src.domain.exceptions import DuplicateRecordError
from src.domain.models import RegistrationMessage
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

# Validation outcomes that mean "already taken" rather than "bad input"
_CONFLICT_MESSAGES = {
    RegistrationMessage.USER_EXISTS.value,
    RegistrationMessage.ORGANISATION_EXISTS.value,
}


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or passwords do not match"},
        409: {"model": ErrorResponse, "description": "User or organisation already exists"},
    },
    summary="Register a new user and organisation",
    description="Create a user, a new organisation and the organisation's owners team. "
    "The registering user becomes the only member of the owners team.",
)
async def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user together with a new organisation.

    - **email**, **display_name**, **password**: required
    - **confirm_password**: must equal password
    - **organisation_name**: required, must not already exist
    """
    try:
        result = service.register(request_data.to_domain())
    except DuplicateRecordError:
        # Lost a race with a concurrent registration after the pre-checks passed
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration failed",
        ) from None

    if not result.success:
        status_code = (
            status.HTTP_409_CONFLICT
            if result.message in _CONFLICT_MESSAGES
            else status.HTTP_400_BAD_REQUEST
        )
        raise HTTPException(status_code=status_code, detail=result.message)

    return RegisterResponse(
        success=True,
        message=result.message,
        user=UserView.model_validate(result.user),
        organisation=OrganisationView.model_validate(result.organisation),
    )


@router.get(
    "/display-names/{name}",
    response_model=DisplayNameResponse,
    summary="Check whether a display name is taken",
    description="A name is taken if a user or an organisation already uses it.",
)
async def display_name_exists(
    name: str,
    service: RegistrationService = Depends(get_registration_service),
) -> DisplayNameResponse:
    return DisplayNameResponse(name=name, exists=service.check_display_name_exists(name))
