from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from tag_stats.adapter.input.web.response.tag_report_response import (
    CountryListResponse,
    TagRankingResponse,
    TagReportResponse,
)
from tag_stats.application.usecase.country_selection import parse_country_selection, resolve_country
from tag_stats.application.usecase.tag_report_usecase import DEFAULT_REPORT_LIMIT, TagReportUseCase
from tag_stats.domain.errors import CountrySelectionError, UnknownCountryError

tag_router = APIRouter(tags=["tags"])


def get_report_usecase(request: Request) -> TagReportUseCase:
    """
    앱 기동 시 적재해 둔 저장소(app.state.tag_store)로 리포트 유스케이스를 만든다.
    """
    store = getattr(request.app.state, "tag_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Tag statistics are not loaded yet.")
    return TagReportUseCase(
        store,
        limit=getattr(request.app.state, "report_limit", DEFAULT_REPORT_LIMIT),
        global_extended=getattr(request.app.state, "global_extended", False),
    )


@tag_router.get("/countries")
async def list_countries(usecase: TagReportUseCase = Depends(get_report_usecase)):
    """
    적재된 데이터에서 관측된 국가 코드 목록을 조회한다.
    """
    response = CountryListResponse(backend=usecase.store.backend, countries=usecase.store.countries)
    return JSONResponse(jsonable_encoder(response))


@tag_router.get("/report")
async def get_report(
    countries: str = Query(..., description="콤마로 구분된 국가 코드 (예: US,GB 또는 ALL)"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    extended: bool | None = Query(default=None, description="전체 범위 하위/인터랙션 랭킹 포함 여부"),
    usecase: TagReportUseCase = Depends(get_report_usecase),
):
    """
    선택한 국가별 상위/하위 태그 랭킹과 전체 범위 랭킹을 함께 조회한다.
    """
    try:
        selected = parse_country_selection(countries, usecase.store.countries)
    except UnknownCountryError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CountrySelectionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    report = usecase.build_report(selected, limit=limit, extended=extended)
    return JSONResponse(jsonable_encoder(TagReportResponse.from_domain(report)))


@tag_router.get("/countries/{country}/{metric}/{direction}")
async def get_country_ranking(
    country: str,
    metric: str,
    direction: str,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    usecase: TagReportUseCase = Depends(get_report_usecase),
):
    try:
        resolved = resolve_country(country, usecase.store.countries)
        ranking = usecase.rank(metric, direction, country=resolved, limit=limit)
    except UnknownCountryError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JSONResponse(jsonable_encoder(TagRankingResponse.from_domain(ranking)))


@tag_router.get("/global/{metric}/{direction}")
async def get_global_ranking(
    metric: str,
    direction: str,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    usecase: TagReportUseCase = Depends(get_report_usecase),
):
    try:
        ranking = usecase.rank(metric, direction, country=None, limit=limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JSONResponse(jsonable_encoder(TagRankingResponse.from_domain(ranking)))
