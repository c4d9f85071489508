from __future__ import annotations

from dlcity.api.routes import centers, health
from fastapi import APIRouter

api_router = APIRouter()

# Keep this list in the order you want routes registered.
for _mod in (health, centers):
    api_router.include_router(_mod.router)
