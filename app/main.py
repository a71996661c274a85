import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.batch.tag_load_batch import load_tag_store
from config.settings import TagStatsSettings
from tag_stats.adapter.input.web.tag_router import tag_router
from tag_stats.application.usecase.aggregation_store import AggregationStore

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(store: Optional[AggregationStore] = None, settings: Optional[TagStatsSettings] = None) -> FastAPI:
    settings = settings or TagStatsSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        FastAPI lifespan 훅에서 데이터셋을 한 번 적재해 app.state 에 보관합니다.
        외부에서 저장소를 주입한 경우(테스트 등)에는 적재를 건너뜁니다.
        """
        if app.state.tag_store is None:
            app.state.tag_store, summary = load_tag_store(settings)
            logger.info("[TAG-LOAD-BATCH] loaded at startup: %s", summary)
        yield

    app = FastAPI(title="Trending Tag Statistics", version="0.1.0", lifespan=lifespan)
    app.state.tag_store = store
    app.state.report_limit = settings.report_limit
    app.state.global_extended = settings.global_extended

    origins_env = os.getenv("CORS_ORIGINS")
    origins = [origin for origin in origins_env.split(",") if origin] if origins_env else ["http://localhost:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tag_router, prefix="/tags")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """
        헬스체크 엔드포인트입니다.
        """
        return {"status": "ok"}

    return app


app = create_app()
