import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Imports de l'application
from sepitori.core.config import settings
from sepitori.api.endpoints import classifier_router

# --- Configuration du logging ---
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(title="Sepitori Classifier API")


def _build_cors_kwargs() -> dict[str, object]:
    origins = sorted({origin.strip().rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS if origin.strip()})
    allow_all = "*" in origins
    logger.info("CORS origins configured: %s", origins)
    return {
        "allow_origins": ["*"] if allow_all else origins,
        # Wildcard origins cannot be combined with credentials.
        "allow_credentials": not allow_all,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }


app.add_middleware(CORSMiddleware, **_build_cors_kwargs())
app.include_router(classifier_router.router)


@app.on_event("startup")
def startup():
    logger.info("Loading classifier from '%s'...", settings.MODEL_PATH)
    classifier_router.init_classifier()


# --- Route Racine ---
@app.get("/")
def read_root():
    return {"message": "Welcome to the Sepitori Classifier API!"}
