from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.settings import get_settings


def apply_cors(app: FastAPI, origins: Optional[Iterable[str]] = None):
    allowed = list(origins) if origins is not None else list(get_settings().cors.allow_origins)
    # Frontend posiela len JSON, cookies nepotrebujeme
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )
