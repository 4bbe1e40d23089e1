"""Password hashing and bearer-token issuance for the TaskBri API."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from taskbri.errors import InvalidCredential
from taskbri.models.user import User

TOKEN_EXPIRES = timedelta(days=7)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class CredentialService:
    """Wraps the hash and token primitives behind one injectable object."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires: timedelta = TOKEN_EXPIRES):
        self.secret = secret
        self.algorithm = algorithm
        self.expires = expires

    def hash(self, plaintext: str) -> str:
        return pwd_context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return pwd_context.verify(plaintext, digest)
        except (ValueError, TypeError):
            # Digest not produced by any configured scheme
            return False

    def issue_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "exp": now + self.expires,
            "iat": now,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> Optional[str]:
        """
        Return the user id bound to a token.

        A missing token is anonymous (None). A token that verifies but carries
        no subject is also None. Expired or tampered tokens raise
        InvalidCredential.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise InvalidCredential("Token has expired")
        except JWTError as e:
            raise InvalidCredential(f"Invalid token: {str(e)}")

        return payload.get("sub")
