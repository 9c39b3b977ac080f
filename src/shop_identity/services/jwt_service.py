"""JWT token service.

Provides bearer token creation and verification. Verification is purely
cryptographic and never touches storage.
"""

from datetime import datetime, timedelta, timezone

import jwt

from shop_identity.exceptions import ExpiredTokenError, InvalidTokenError
from shop_identity.schemas import TokenPayload


class JWTService:
    """Service for JWT token creation and verification.

    The signing key is injected once by the composition root and kept for
    the lifetime of the process.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue(1, "user@example.com", "Ada", "Lovelace")
    >>> service.verify(token).user_id
    1
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
        algorithm: str = ALGORITHM,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until a token expires (default 24)
        algorithm
            HMAC algorithm used for signing (default HS256)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_expire = timedelta(hours=access_token_expire_hours)

    @property
    def default_ttl(self) -> timedelta:
        return self._access_expire

    def issue(  # noqa: PLR0913
        self,
        user_id: int,
        email: str,
        first_name: str,
        last_name: str,
        ttl: timedelta | None = None,
    ) -> str:
        """Create a signed bearer token.

        Parameters
        ----------
        user_id
            The user's surrogate id
        email, first_name, last_name
            Identity claims embedded in the token
        ttl
            Custom lifetime (optional, defaults to the configured one)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (ttl if ttl is not None else self._access_expire)

        payload = {
            "sub": str(user_id),
            "email": email,
            "firstName": first_name,
            "lastName": last_name,
            "type": self.TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenPayload:
        """Verify and decode a bearer token.

        Raises
        ------
        ExpiredTokenError
            If the token is past its ``exp`` claim
        InvalidTokenError
            If the signature is invalid or the payload is malformed
        """
        if not token:
            msg = "Missing token"
            raise InvalidTokenError(msg)
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )

            if payload.get("type", self.TOKEN_TYPE) != self.TOKEN_TYPE:
                msg = "Not an access token"
                raise InvalidTokenError(msg)

            issued_at = payload.get("iat")
            return TokenPayload(
                user_id=int(payload["sub"]),
                email=payload["email"],
                first_name=payload["firstName"],
                last_name=payload["lastName"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                issued_at=(
                    datetime.fromtimestamp(issued_at, tz=timezone.utc)
                    if issued_at is not None
                    else None
                ),
            )

        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError from e
        except jwt.InvalidTokenError as e:
            msg = f"Invalid token: {e}"
            raise InvalidTokenError(msg) from e
        except (KeyError, ValueError, TypeError) as e:
            msg = f"Malformed token payload: {e}"
            raise InvalidTokenError(msg) from e
