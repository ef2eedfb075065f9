"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from nutrition_advisor.api.models import (
    AnalyzeImageRequest,
    AnalyzeTextRequest,
    ProfileUpdateRequest,
    SaveRecordsRequest,
)
from nutrition_advisor.app_logging import configure_logging
from nutrition_advisor.containers import AppContainer
from nutrition_advisor.domain.errors import (
    InvalidInput,
    ModelResponseInvalid,
    NutritionAdvisorError,
    ProfileIncomplete,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NutritionAdvisorError)
    async def handle_app_error(
        request: Request, exc: NutritionAdvisorError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message
            )
        return _error(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body.")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/analyze")
    async def analyze(body: AnalyzeImageRequest, request: Request) -> dict[str, object]:
        """Analyze a meal photo."""
        item = await _container(request).analysis_service.analyze_image(body.image)
        return _ok(item.to_dict())

    @app.post("/api/analyze-text")
    async def analyze_text(
        body: AnalyzeTextRequest, request: Request
    ) -> dict[str, object]:
        """Analyze a text description into one item per food."""
        items = await _container(request).analysis_service.analyze_text(body.text)
        return _ok([item.to_dict() for item in items])

    @app.post("/api/records")
    async def save_records(
        body: SaveRecordsRequest, request: Request
    ) -> dict[str, object]:
        """Persist analyzed items, optionally on a chosen day."""
        items = body.items()
        if not items:
            raise InvalidInput("Missing record in request body.")
        ids = _container(request).record_service.insert_records(
            items, body.record_date
        )
        return {"success": True, "ids": ids}

    @app.get("/api/records/today")
    async def records_today(request: Request) -> dict[str, object]:
        records = _container(request).record_service.list_today()
        return _ok([record.to_dict() for record in records])

    @app.get("/api/records")
    async def records_by_date(
        request: Request, date: str | None = None
    ) -> dict[str, object]:
        """Return the records of one day."""
        if not date:
            raise InvalidInput("Missing date query parameter.")
        records = _container(request).record_service.list_by_date(date)
        return _ok([record.to_dict() for record in records])

    @app.get("/api/summary/today")
    async def summary_today(request: Request) -> dict[str, object]:
        return _ok(_container(request).record_service.summary_today().to_dict())

    @app.get("/api/summary/range")
    async def summary_range(
        request: Request, start: str | None = None, end: str | None = None
    ) -> dict[str, object]:
        """Return per-day summaries between start and end inclusive."""
        if not start or not end:
            raise InvalidInput("Missing start or end query parameter.")
        summaries = _container(request).record_service.summary_for_range(start, end)
        return _ok([summary.to_dict() for summary in summaries])

    @app.get("/api/advice/today")
    async def advice_today(request: Request) -> dict[str, object]:
        """Return AI advice for today's intake."""
        advice = await _container(request).analysis_service.daily_advice()
        return _ok({"advice": advice.advice})

    @app.get("/api/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        return _ok(_container(request).profile_service.get_profile().to_dict())

    @app.put("/api/profile")
    async def put_profile(
        body: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        _container(request).profile_service.update_profile(body.model_dump())
        return {"success": True}

    @app.get("/api/report/weekly")
    async def weekly_report(
        request: Request, date: str | None = None
    ) -> dict[str, object]:
        """Return the AI weekly report for the week containing date."""
        report = await _container(request).analysis_service.weekly_report(date)
        return _ok(report.to_dict())

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _ok(data: object) -> dict[str, object]:
    return {"success": True, "data": data}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def _status_for(exc: NutritionAdvisorError) -> int:
    if isinstance(exc, InvalidInput | ProfileIncomplete):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ModelResponseInvalid):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR
