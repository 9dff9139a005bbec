from travel_ai.api.planner_service import PlannerBundle
from travel_ai.core.config import ApiSettings
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from functools import lru_cache


@lru_cache(maxsize=1)
def get_planner_bundle() -> PlannerBundle:
    settings = ApiSettings.from_env()
    return PlannerBundle(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if get_planner_bundle.cache_info().currsize:
            bundle = get_planner_bundle()
            await bundle.close()
