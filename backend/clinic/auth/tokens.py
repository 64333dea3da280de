from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import ValidationError

from ..core.exceptions import Unauthenticated
from ..models.AuthToken import TokenClaims
from ..models.Role import Role


class TokenService:
    """
    Issues and verifies the signed identity tokens handed out at login.

    Tokens are stateless: nothing is stored server-side and a token stays
    valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(days=1)):
        if not secret:
            raise ValueError("JWT_SECRET is not defined")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, subject_id: str, email: str, role: Role) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": subject_id,
            "email": email,
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_delta).timestamp()),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        # jose checks the signature and "exp" for us
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthenticated()

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            raise Unauthenticated()
