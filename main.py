"""
Document Q&A API

Mounts the upload (summarization) and chat routers.

Run locally:
    uvicorn main:app --reload --port 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ALLOW_ORIGINS, LOG_TO_FILE
from logs.logging_config import setup_llm_logging, get_llm_logger
from summarization import router as summarization_router
from chat import router as chat_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_llm_logging(log_to_file=LOG_TO_FILE)
    get_llm_logger().info("[APP] Startup complete")
    yield
    get_llm_logger().info("[APP] Shutdown")


app = FastAPI(title="Document Q&A API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(summarization_router)
app.include_router(chat_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
