from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError as PydanticValidationError

from errors import AuthorizationError

ALGORITHM = "HS256"
SESSION_COOKIE = "auth-token"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised hash format
        return False


class SessionClaims(BaseModel):
    userId: str
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def public(self) -> dict:
        return {"id": self.userId, "email": self.email, "name": self.name, "role": self.role}


class TokenIssuer:
    def __init__(self, secret: str, expires_delta: timedelta = timedelta(seconds=SESSION_MAX_AGE)):
        self.secret = secret
        self.expires_delta = expires_delta

    def issue(self, user: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = SessionClaims(
            userId=user["id"],
            email=user["email"],
            name=user["name"],
            role=user["role"],
        ).model_dump()
        expire = datetime.now(timezone.utc) + (expires_delta if expires_delta is not None else self.expires_delta)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[SessionClaims]:
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
            return SessionClaims.model_validate(payload)
        except (JWTError, PydanticValidationError):
            return None


def set_session_cookie(response: Response, token: str, secure: bool) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(SESSION_COOKIE, "", max_age=0, path="/", httponly=True)


# Dependencies

def get_session(request: Request) -> Optional[SessionClaims]:
    issuer: TokenIssuer = request.app.state.store.tokens
    return issuer.verify(request.cookies.get(SESSION_COOKIE))


def require_admin(request: Request) -> SessionClaims:
    session = get_session(request)
    if session is None or not session.is_admin:
        raise AuthorizationError()
    return session
