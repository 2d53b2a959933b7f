from contextlib import asynccontextmanager
import os
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ========================
# .env スイッチング処理
# ========================
env = os.getenv("ENV", "development")
env_file = f".env.{env}"
load_dotenv(dotenv_path=env_file)

from inkwell.core.config import settings
from inkwell.core.exceptions import ContentError, ValidationError
from inkwell.core.logger import Logger
from inkwell.db.migrations import run_migrations
from inkwell.routers import api_router

logger = Logger.get_logger()
logger.info(f"Loaded ENV: {env_file}")

# ========================
# Auto Alembic Upgrade
# ========================
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    if settings.AUTO_MIGRATE:
        run_migrations()

    yield

app = FastAPI(title="Inkwell API", lifespan=lifespan)

# ========================
# CORS
# ========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,      # IdPのCookie/Authorization送信に必要
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========================
# エラーハンドリング
# ========================
@app.exception_handler(ContentError)
async def content_error_handler(request: Request, exc: ContentError):
    logger.info(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": jsonable_encoder(exc.errors()), "kind": ValidationError.kind},
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error", "kind": "InternalError"})

# ルータ
app.include_router(api_router)
