"""Security helpers for hashing, token generation and one-time codes."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from estategate.config import get_settings
from estategate.domain.entities import User

# Raise "rounds" as hardware gets faster.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)

_ALGORITHM = "HS256"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def needs_rehash(hashed_password: str) -> bool:
    return pwd_context.needs_update(hashed_password)


# ---- JWT ----


def session_signature(user: User) -> str:
    """Return the claim that ties a token to the user's current credentials.

    Changing the password, deactivating the account or signing out changes
    the signature and so revokes every previously issued token.
    """

    return sha256(
        f"{user.password}:{int(user.is_active)}:{user.session_version}".encode()
    ).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def create_user_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Return a bearer token for ``user``."""

    return create_access_token(
        data={
            "sub": user.email,
            "role": user.role.value,
            "estate_id": user.estate_id,
            "sig": session_signature(user),
        },
        expires_delta=expires_delta,
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def refresh_access_token(token: str) -> str:
    """Return a copy of ``token`` with a renewed expiration."""

    payload = decode_access_token(token)
    payload.pop("exp", None)
    return create_access_token(payload)


# ---- Generated secrets ----


def generate_secure_password() -> str:
    """Generate a random password between 10 and 14 characters."""

    alphabet = string.ascii_letters + string.digits + string.punctuation
    length = secrets.choice(range(10, 15))

    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
            and any(char in string.punctuation for char in password)
        ):
            return password


def generate_otp_code(length: int | None = None, alphabet: str | None = None) -> str:
    """Return a random one-time code.

    The code is drawn from the CSPRNG and carries no information about the
    invitation it is attached to.
    """

    settings = get_settings()
    if length is None:
        length = settings.otp_length
    if alphabet is None:
        alphabet = settings.otp_alphabet
    if length <= 0:
        raise ValueError("Code length must be positive")
    if len(set(alphabet)) < 2:
        raise ValueError("Code alphabet needs at least two distinct characters")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def normalize_otp_code(code: str) -> str:
    """Return ``code`` as stored: no whitespace or dashes, upper case."""

    return "".join(char for char in code if not char.isspace() and char != "-").upper()
