from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from medchat.config import settings
from medchat.logging_config import setup_logging
from medchat.model_client import ModelClient
from medchat.orchestrator import ConversationOrchestrator
from medchat.routes import router

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.AZURE_OPENAI_HOST or not settings.AZURE_OPENAI_KEY:
        logger.warning("⚠️ AZURE_OPENAI_HOST / AZURE_OPENAI_KEY not set; model calls will fail")

    async with ModelClient(settings.completion_config()) as client:
        app.state.orchestrator = ConversationOrchestrator(client, settings.RISK_CONDITIONS)
        logger.info(f"MedChat API ready (risk conditions: {', '.join(settings.RISK_CONDITIONS)})")
        yield


app = FastAPI(title="MedChat API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
