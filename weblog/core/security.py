from passlib.context import CryptContext
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from weblog.core.config import Settings, get_settings
from weblog.core.errors import Unauthenticated
from weblog.db.session import get_db
from weblog.db.models.user import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# auto_error=False so a missing header goes through our own 401 message
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)


def hash_password(password: str):
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class TokenIssuer:
    """Issues and decodes the signed, time-bound session tokens."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.secret_key
        self.algorithm = settings.algorithm
        self.lifetime = timedelta(days=settings.access_token_expire_days)

    def issue(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = {"sub": str(user.id)}
        expire = datetime.utcnow() + (expires_delta or self.lifetime)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> int:
        """Return the user id carried by ``token`` or raise ``Unauthenticated``."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthenticated()
        subject = payload.get("sub")
        if not subject:
            raise Unauthenticated()
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise Unauthenticated()


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(settings)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> User:
    if not token:
        raise Unauthenticated("Not authorized, no token")

    user_id = issuer.decode(token)
    user = db.query(User).filter(User.id == user_id).first()
    # A valid token for an account that no longer exists is still a failure
    if user is None:
        raise Unauthenticated()
    return user
