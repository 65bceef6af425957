import uuid
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncIterator
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from libs.database import Database
from libs.logger import get_logger, session_id_var
from libs.settings import settings
from routes.users import router as users_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Connecting to database...")
    await Database.connect()
    logger.info("Database connected.")
    yield
    logger.info("Disconnecting from database...")
    await Database.disconnect()
    logger.info("Database disconnected.")


app = FastAPI(lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def session_context(request: Request, call_next):
    session_id = uuid.uuid4().hex
    token = session_id_var.set(session_id)
    try:
        logger.info(f"{request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    finally:
        session_id_var.reset(token)
    response.headers["X-Session-ID"] = session_id
    return response


@app.get("/")
async def read_root():
    logger.info("Root endpoint accessed.")
    return JSONResponse(content={"message": "Server is running"})


app.include_router(users_router, prefix="/v1/users", tags=["users"])


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
