from functools import lru_cache

from fastapi.security import HTTPBearer

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import JWTValidator
from shared_kernel.auth.observability import DefaultJWTValidatorProbe

# Bearer scheme for Swagger UI; a missing header yields an anonymous request
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator.

    Uses lru_cache to ensure a single JWTValidator instance is reused across
    requests.

    Returns:
        JWTValidator instance configured from auth settings.
    """
    settings = get_auth_settings()
    return JWTValidator(
        secret=settings.jwt_secret.get_secret_value(),
        probe=DefaultJWTValidatorProbe(),
        algorithm=settings.jwt_algorithm,
        audience=settings.jwt_audience,
    )


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance.

    Returns:
        DefaultAuthenticationProbe instance for observability
    """
    return DefaultAuthenticationProbe()
