import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from gestor.core.security import create_access_token, get_current_owner_id, hash_password, verify_password
from gestor.db import get_db
from gestor.models.account import Account
from gestor.schemas.auth import AccountOut, LoginIn, RegisterIn, TokenOut

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@router.post("/register", response_model=AccountOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    email = _normalize_email(payload.email)
    exists = db.scalar(select(Account).where(Account.email == email))
    if exists:
        raise HTTPException(status_code=409, detail="Email ja cadastrado")

    acc = Account(email=email, password_hash=hash_password(payload.password))
    db.add(acc)
    db.commit()
    db.refresh(acc)
    logger.info("account registered id=%s", acc.id)
    return AccountOut(id=acc.id, email=acc.email)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    acc = db.scalar(select(Account).where(Account.email == _normalize_email(payload.email)))
    # mesma resposta para email inexistente e senha errada
    if not acc or not verify_password(payload.password, acc.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenOut(access_token=create_access_token(sub=acc.id))


@router.get("/me", response_model=AccountOut)
def me(owner_id: str = Depends(get_current_owner_id), db: Session = Depends(get_db)):
    acc = db.get(Account, owner_id)
    return AccountOut(id=acc.id, email=acc.email)
