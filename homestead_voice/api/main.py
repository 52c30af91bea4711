import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homestead_voice.api.routes.business_plan import router as business_plan_router
from homestead_voice.api.routes.commands import router as commands_router
from homestead_voice.api.routes.speech import router as speech_router
from homestead_voice.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Homestead Voice API",
    description="Voice command parsing for tasks, inventory, and projects",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_origin_regex=r"https://.*\.netlify\.app|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(commands_router)
app.include_router(speech_router)
app.include_router(business_plan_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
