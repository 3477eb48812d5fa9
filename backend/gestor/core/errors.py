"""
Erros de domínio do Gestor.

Os services levantam essas exceções; a camada HTTP traduz cada uma em um
status code (ver `install_error_handlers`).
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GestorError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "GESTOR_ERROR"
    default_message: str = "erro"

    def __init__(self, message: str | None = None, *, error_code: str | None = None):
        self.message = message or self.default_message
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class AuthenticationError(GestorError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "NOT_AUTHENTICATED"
    default_message = "não autenticado"


class NotFoundError(GestorError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "não encontrado"


class AuthorizationError(GestorError):
    """Nunca revela se o registro existe para outro dono."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "PERMISSION_DENIED"
    default_message = "permissão negada"

    def __init__(self):
        super().__init__()


class InvalidStateError(GestorError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "INVALID_STATE"
    default_message = "operação não permitida no estado atual"


class ValidationError(GestorError):
    status_code = 422
    error_code = "VALIDATION_ERROR"
    default_message = "dados inválidos"


class TransactionError(GestorError):
    """Falha/conflito na transação do banco. Nada foi gravado: retry é seguro."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "TRANSACTION_FAILED"
    default_message = "não foi possível concluir a transação, tente novamente"


def _handle_gestor_error(request: Request, exc: GestorError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    if exc.status_code >= 409:
        logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc.error_code)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()}, headers=headers)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GestorError, _handle_gestor_error)
