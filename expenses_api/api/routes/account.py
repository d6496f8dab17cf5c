# expenses_api/api/routes/account.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from expenses_api.api.deps import get_account_service, get_current_user
from expenses_api.crud.user import normalize_email
from expenses_api.models.user import User
from expenses_api.schemas.account import (
    AuthResult,
    LoginRequest,
    RegisterRequest,
    UserProfileUpdate,
    UserRead,
)
from expenses_api.services.account import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Account", tags=["Account"])


@router.get(
    "/IsEmailAlreadyTaken",
    response_model=bool,
    summary="Checks if an email is already registered.",
)
async def is_email_already_taken(
    email: str = Query(..., min_length=1),
    service: AccountService = Depends(get_account_service),
):
    logger.info(f"Checking if email {email} is already taken...")
    return not await service.is_email_available(email)


@router.post(
    "/Login",
    response_model=AuthResult,
    summary="Performs a user login.",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": AuthResult}},
)
async def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_account_service),
):
    logger.info(f"Attempting to log in user with email: {payload.email}...")
    result = await service.login(payload.email, payload.password)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=result.model_dump(by_alias=True),
        )
    return result


@router.post(
    "/Register",
    response_model=AuthResult,
    status_code=status.HTTP_201_CREATED,
    summary="Registers a new user.",
    responses={status.HTTP_400_BAD_REQUEST: {"model": AuthResult}},
)
async def register(
    payload: RegisterRequest,
    service: AccountService = Depends(get_account_service),
):
    logger.info(f"Registering a new user with email: {payload.email}...")
    result = await service.register(payload.email, payload.password)
    if not result.success:
        logger.warning(f"User registration failed: {result.message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(by_alias=True),
        )
    return result


@router.get(
    "/UserProfile",
    response_model=UserRead,
    summary="Obtain the caller's profile by email.",
)
async def get_user_profile(
    email: str = Query(..., min_length=1),
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    logger.info(f"Getting the profile of user: {email}")
    # Only the caller's own profile is visible
    profile = None
    if normalize_email(email) == user.email:
        profile = await service.get_profile(email)

    if profile is None:
        logger.warning(f"User with Email: {email} does not exist.")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with Email:{email} not found!",
        )
    return profile


@router.put(
    "/UpdateUserProfile/{user_id}",
    response_model=UserRead,
    summary="Updates user profile by user ID.",
)
async def update_user_profile(
    user_id: int,
    payload: UserProfileUpdate,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    logger.info(f"Updating user profile for user with ID: {user_id}...")
    updated = None
    if user_id == user.id:
        updated = await service.update_profile(
            user_id, payload.email, payload.first_name, payload.last_name
        )

    if updated is None:
        logger.warning("User does not exist in the database!")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found in database!",
        )
    logger.info(f"User profile for user with ID {user_id} updated successfully.")
    return updated
