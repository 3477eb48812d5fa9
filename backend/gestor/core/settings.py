from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices, model_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Gestor Maestro API"
    ENV: str = Field(default="lab", validation_alias=AliasChoices("GESTOR_ENV", "ENV"))  # lab|prod
    DATABASE_URL: str = Field(default="sqlite:///./lab.db", validation_alias=AliasChoices("GESTOR_DATABASE_URL", "DATABASE_URL"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("GESTOR_LOG_LEVEL", "LOG_LEVEL"))

    # Auth (JWT)
    AUTH_PROTECT_DOCS: bool = Field(default=False, validation_alias=AliasChoices("GESTOR_AUTH_PROTECT_DOCS", "AUTH_PROTECT_DOCS"))
    AUTH_JWT_SECRET: str = Field(default="", validation_alias=AliasChoices("GESTOR_AUTH_JWT_SECRET", "AUTH_JWT_SECRET", "JWT_SECRET"))
    AUTH_JWT_TTL_MIN: int = Field(default=60, validation_alias=AliasChoices("GESTOR_AUTH_JWT_TTL_MIN", "AUTH_JWT_TTL_MIN"))

    # Ledger: tentativas da transação em caso de conflito de concorrência
    LEDGER_TX_MAX_ATTEMPTS: int = Field(default=3, validation_alias=AliasChoices("GESTOR_LEDGER_TX_MAX_ATTEMPTS", "LEDGER_TX_MAX_ATTEMPTS"))

    BUILD_SHA: str = Field(default="", validation_alias=AliasChoices("GESTOR_BUILD_SHA", "BUILD_SHA", "GITHUB_SHA"))

    @model_validator(mode="after")
    def _invariants(self):
        # Fail-fast (contrato de settings)
        level = (self.LOG_LEVEL or "").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL inválido: {self.LOG_LEVEL!r}")
        self.LOG_LEVEL = level

        if self.LEDGER_TX_MAX_ATTEMPTS < 1:
            raise ValueError("LEDGER_TX_MAX_ATTEMPTS deve ser >= 1")

        if self.AUTH_JWT_TTL_MIN < 1:
            raise ValueError("AUTH_JWT_TTL_MIN deve ser >= 1")

        sec = (self.AUTH_JWT_SECRET or "").strip()
        if self.ENV == "prod":
            if not sec:
                raise ValueError("SECURITY: AUTH_JWT_SECRET obrigatório em ENV=prod")
            if len(sec) < 32:
                raise ValueError("SECURITY: AUTH_JWT_SECRET curto (min 32 chars)")
        # normaliza (remove espaços acidentais)
        self.AUTH_JWT_SECRET = sec

        return self


settings = Settings()
