from passlib.context import CryptContext

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer

from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from salon.config import settings


# Shared salon password
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def verify_shared_password(plain_password: str) -> bool:
    return verify_password(plain_password, settings.access_password_hash)

# Session token (replaces the "authenticated" flag a browser would persist)

def create_session_token() -> str:
    to_encode = {"sub": "operator"}
    to_encode['exp'] = datetime.now(timezone.utc) + timedelta(days=settings.session_token_expire_days)
    to_encode['type'] = 'session'
    return jwt.encode(to_encode, settings.secret_key, settings.jwt_algorithm)

def decode_token(token: str, expected_type: str = None) -> dict:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        if expected_type and payload.get('type') != expected_type:
            return None
        return payload
    except JWTError:
        return None



oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def require_session(extracted_token: str = Depends(oauth2_scheme)) -> bool:
    payload = decode_token(extracted_token, "session")
    if not payload:
        raise HTTPException(status_code=401, detail="인증이 필요합니다")
    return True
