"""JWT validation for bearer tokens signed with a shared secret.

Tokens are issued elsewhere; this module only verifies them and extracts
the subject.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims."""

    sub: str
    email: str | None = None


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""

    pass


class JWTValidator:
    """Validates HMAC-signed JWT tokens.

    Verifies signature and expiry, and the audience when one is configured.
    """

    def __init__(
        self,
        secret: str,
        probe: JWTValidatorProbe,
        algorithm: str = "HS256",
        audience: str | None = None,
    ):
        """Initialize the JWT validator.

        Args:
            secret: Shared signing secret.
            probe: Observability probe for logging events.
            algorithm: Accepted signing algorithm (default: HS256).
            audience: Expected audience claim value, None to skip the check.
        """
        self._secret = secret
        self._probe = probe
        self._algorithm = algorithm
        self._audience = audience

    async def validate_token(self, token: str) -> TokenClaims:
        """Verify a bearer token and return its claims.

        Args:
            token: The encoded JWT.

        Returns:
            TokenClaims with the subject and optional email.

        Raises:
            InvalidTokenError: If the token is malformed, expired, signed with
                another key or algorithm, for another audience, or has no
                subject.
        """
        try:
            claims = jwt.decode(
                token=token,
                key=self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                options={"verify_aud": self._audience is not None},
            )
        except ExpiredSignatureError as e:
            self._probe.token_expired()
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            if "audience" in str(e).lower():
                raise self._reject("Invalid audience claim") from e
            raise self._reject(f"Invalid token claims: {e}") from e
        except JWTError as e:
            if "signature" in str(e).lower():
                raise self._reject("Invalid token signature") from e
            raise self._reject(f"Invalid token: {e}") from e

        subject = claims.get("sub")
        if not subject:
            raise self._reject("Missing required claim: sub")

        email = claims.get("email")
        self._probe.token_validated(user_id=str(subject))
        return TokenClaims(
            sub=str(subject),
            email=str(email) if email is not None else None,
        )

    def _reject(self, reason: str) -> InvalidTokenError:
        self._probe.token_rejected(reason=reason)
        return InvalidTokenError(reason)
