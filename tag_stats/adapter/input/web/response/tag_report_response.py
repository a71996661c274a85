from typing import Optional

from pydantic import BaseModel, Field

from tag_stats.domain.tag_ranking import CountryTagReport, GlobalTagReport, TagRanking, TagReport


class TagEntryResponse(BaseModel):
    tag: str
    value: int | float


class TagRankingResponse(BaseModel):
    scope: str
    country: Optional[str] = None
    metric: str
    direction: str
    limit: int
    entries: list[TagEntryResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, ranking: TagRanking) -> "TagRankingResponse":
        return cls(
            scope=ranking.scope,
            country=ranking.country,
            metric=ranking.metric,
            direction=ranking.direction,
            limit=ranking.limit,
            entries=[TagEntryResponse(tag=tag, value=value) for tag, value in ranking.entries],
        )


class CountryTagReportResponse(BaseModel):
    country: str
    rankings: list[TagRankingResponse]

    @classmethod
    def from_domain(cls, report: CountryTagReport) -> "CountryTagReportResponse":
        return cls(
            country=report.country,
            rankings=[TagRankingResponse.from_domain(r) for r in report.rankings()],
        )


class TagReportResponse(BaseModel):
    backend: str
    countries: list[CountryTagReportResponse]
    global_rankings: list[TagRankingResponse]

    @classmethod
    def from_domain(cls, report: TagReport) -> "TagReportResponse":
        global_report: GlobalTagReport = report.global_report
        return cls(
            backend=report.backend,
            countries=[CountryTagReportResponse.from_domain(c) for c in report.countries],
            global_rankings=[TagRankingResponse.from_domain(r) for r in global_report.rankings()],
        )


class CountryListResponse(BaseModel):
    backend: str
    countries: list[str]
