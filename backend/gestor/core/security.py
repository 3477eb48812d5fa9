from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from passlib.hash import pbkdf2_sha256
import jwt

from gestor.core.errors import AuthenticationError
from gestor.core.settings import settings
from gestor.db import get_db
from gestor.models.account import Account

bearer = HTTPBearer(auto_error=False)

_SECRET_CACHE: str | None = None


def hash_password(plain: str) -> str:
    return pbkdf2_sha256.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pbkdf2_sha256.verify(plain, hashed)


def _secret() -> str:
    global _SECRET_CACHE
    if _SECRET_CACHE:
        return _SECRET_CACHE

    sec = settings.AUTH_JWT_SECRET
    if not sec:
        if settings.ENV == "prod":
            raise RuntimeError("SECURITY: AUTH_JWT_SECRET obrigatório em ENV=prod")
        # lab: segredo efêmero do processo (tokens morrem no restart)
        sec = secrets.token_urlsafe(48)

    _SECRET_CACHE = sec
    return sec


def create_access_token(sub: str, ttl_min: int | None = None) -> str:
    ttl = int(ttl_min or settings.AUTH_JWT_TTL_MIN)
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=ttl)).timestamp()),
    }
    return jwt.encode(payload, _secret(), algorithm="HS256")


def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, _secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("token expirado", error_code="TOKEN_EXPIRED")
    except jwt.PyJWTError:
        raise AuthenticationError("token inválido", error_code="TOKEN_INVALID")


def resolve_owner_id(db: Session, credential: str | None) -> str:
    """
    Resolve a credencial (bearer token) para o id estável da conta.
    Falha com AuthenticationError se o token for ausente/inválido/expirado
    ou se a conta não existir mais.
    """
    if not credential:
        raise AuthenticationError()

    claims = decode_token(credential)
    sub = claims.get("sub")
    if not sub:
        raise AuthenticationError("token inválido (sub ausente)", error_code="TOKEN_INVALID")

    if db.get(Account, sub) is None:
        raise AuthenticationError("conta não encontrada", error_code="ACCOUNT_NOT_FOUND")

    return str(sub)


def get_credential(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str | None:
    if not creds or (creds.scheme or "").lower() != "bearer":
        return None
    return creds.credentials


def get_current_owner_id(
    credential: str | None = Depends(get_credential),
    db: Session = Depends(get_db),
) -> str:
    return resolve_owner_id(db, credential)
