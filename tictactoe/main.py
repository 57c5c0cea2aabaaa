import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tictactoe.routes import router as game_router
from tictactoe.session import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_TTL, session_manager

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

session_manager.ttl = float(os.getenv("SESSION_TTL", DEFAULT_SESSION_TTL))
session_manager.max_sessions = int(os.getenv("SESSION_MAX", DEFAULT_MAX_SESSIONS))

app = FastAPI(title="Tic-Tac-Toe Server")

# Same-origin only unless a front end is configured, e.g. CORS_ORIGINS=https://play.example.com
cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
if cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

app.include_router(game_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
