"""ComplyEUR compliance engine – FastAPI application."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from complyeur import __version__
from complyeur.config import get_settings
from complyeur.routers import compliance, countries, forecast
from complyeur.services.risk import alert_types_crossed
from complyeur.services.schengen import MEMBERSHIP_VERSION

settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(compliance.router)
app.include_router(forecast.router)
app.include_router(countries.router)


@app.on_event("startup")
def startup():
    log = logging.getLogger("uvicorn.error")
    # Fail fast on bad threshold env vars rather than on the first request
    thresholds = settings.risk_thresholds()
    alert_types_crossed(0, settings.alert_warning_threshold, settings.alert_critical_threshold)
    log.info(
        "Compliance engine ready: env=%s green>=%s amber>=%s start=%s membership=%s",
        settings.app_env,
        thresholds.green_min,
        thresholds.amber_min,
        settings.compliance_start_date or "(none)",
        MEMBERSHIP_VERSION,
    )


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy", "version": __version__, "membership_version": MEMBERSHIP_VERSION}
