import logging

from fastapi import Depends, FastAPI
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from gestor.core.errors import install_error_handlers
from gestor.core.security import get_current_owner_id
from gestor.core.settings import settings

from gestor.api.auth import router as auth_router
from gestor.api.obligation import router as obligation_router
from gestor.api.fixed_cost import router as fixed_cost_router
from gestor.api.summary import router as summary_router
from gestor.api.pricing import router as pricing_router

VERSION = "0.1.0"

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

DOC_DEPS = [Depends(get_current_owner_id)] if settings.AUTH_PROTECT_DOCS or settings.ENV == "prod" else []

app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

install_error_handlers(app)

# Auth sempre exposto; demais routers resolvem o dono via bearer token
app.include_router(auth_router)
app.include_router(obligation_router)
app.include_router(fixed_cost_router)
app.include_router(summary_router)
app.include_router(pricing_router)


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "gestor-maestro",
        "env": settings.ENV,
        "version": VERSION,
        "build_sha": settings.BUILD_SHA or None,
        "docs_protected": bool(DOC_DEPS),
    }


# 📚 Docs/OpenAPI: sempre existem; protegidos em prod ou com AUTH_PROTECT_DOCS=true
@app.get("/openapi.json", include_in_schema=False, dependencies=DOC_DEPS)
def openapi_json():
    schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
    return JSONResponse(schema)


@app.get("/docs", include_in_schema=False, dependencies=DOC_DEPS)
def swagger_docs():
    return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app.title} - Docs")


@app.get("/redoc", include_in_schema=False, dependencies=DOC_DEPS)
def redoc_docs():
    return get_redoc_html(openapi_url="/openapi.json", title=f"{app.title} - ReDoc")
