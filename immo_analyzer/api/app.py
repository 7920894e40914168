"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from immo_analyzer.config import settings
from immo_analyzer.api.routes import projection, scenarios, sensitivity

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="German Property Analyzer",
    description="Leveraged rental property projections and sensitivity analysis",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projection.router)
app.include_router(sensitivity.router)
app.include_router(scenarios.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
