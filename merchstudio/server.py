"""
Merch Studio API Server
Admin HTTP surface for the guided product configuration workflow.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from merchstudio import __version__
from merchstudio.admin import router as studio_admin_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="Merch Studio API",
    description="Guided product configuration, compliance and publish for techno.dog merchandise",
    version=__version__,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o for o in os.getenv("STUDIO_CORS_ORIGINS", "http://localhost:3000").split(",") if o],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(studio_admin_router)


@app.get("/")
def root():
    return {"service": "merchstudio", "version": __version__}
