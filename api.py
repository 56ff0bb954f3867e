import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config.settings_loader import get_server_settings
from infodetect.probes.client_hints import ACCEPT_CH_HEADERS
from shared.state import close_network_resolver

logger = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("API starting up")
    yield
    logger.info("API shutting down")
    await close_network_resolver()


app = FastAPI(lifespan=lifespan)

# Enable CORS for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_server_settings().get("cors_origins", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_client_hints(request: Request, call_next):
    # Browsers only send high-entropy Sec-CH-UA-* headers once asked for them
    response = await call_next(request)
    for key, value in ACCEPT_CH_HEADERS.items():
        response.headers[key] = value
    return response


# === Import and Include Routers ===
from routers import detect as detect_router
app.include_router(detect_router.router)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "version": "1.0.0",
    }

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    server = get_server_settings()
    uvicorn.run("api:app", host=server.get("host", "0.0.0.0"), port=server.get("port", 8000))
