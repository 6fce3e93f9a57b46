from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safepsy_api.config import Settings


def setup_cors(app: FastAPI, settings: Settings):
    """Configure CORS for the application"""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
