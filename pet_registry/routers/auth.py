"""Authentication routes using fastapi-users."""
from fastapi import APIRouter, Depends, Request

from pet_registry.config import Settings
from pet_registry.dependencies import auth_backend, fastapi_users
from pet_registry.schemas.user import UserRead, UserCreate, UserUpdate
from pet_registry.middleware.rate_limiter import rate_limiter


# Initialize settings
settings = Settings()

rate_limiter.configure(
    max_requests=settings.auth_rate_limit_requests,
    window_seconds=settings.auth_rate_limit_window_seconds,
)


async def limit_credential_attempts(request: Request) -> None:
    """Throttle login and registration. Logout is never limited."""
    if request.url.path.endswith("/logout"):
        return
    await rate_limiter(request)


# Create router for authentication endpoints
router = APIRouter()

# Include auth router for JWT login/logout
router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/jwt",
    tags=["auth"],
    dependencies=[Depends(limit_credential_attempts)],
)

# Include register router
router.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    tags=["auth"],
    dependencies=[Depends(limit_credential_attempts)],
)

# Include users router (for /users/me endpoint)
router.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate),
    prefix="/users",
    tags=["users"],
)
