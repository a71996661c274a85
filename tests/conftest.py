import csv
from pathlib import Path

import pytest

from tag_stats.domain.video_record import TRENDING_COLUMNS, VideoRecord
from tag_stats.infrastructure.store.tag_stat_factory import BACKENDS, build_aggregation_store


def make_record(
    tags: str = "a|b",
    country: str = "US",
    views: int = 100,
    likes: int = 50,
    dislikes: int = 10,
    comment_count: int = 5,
    video_id: str = "vid",
) -> VideoRecord:
    return VideoRecord(
        video_id=video_id,
        country=country,
        tags=tags,
        views=views,
        likes=likes,
        dislikes=dislikes,
        comment_count=comment_count,
    )


def trending_row(**overrides) -> dict:
    row = {
        "video_id": "abc123",
        "trending_date": "17.14.11",
        "title": "Some title",
        "channel_title": "Some channel",
        "category_id": "22",
        "publish_time": "2017-11-13T17:13:01.000Z",
        "tags": "funny|cats",
        "views": "1000",
        "likes": "100",
        "dislikes": "10",
        "comment_count": "20",
        "thumbnail_link": "https://i.ytimg.com/vi/abc123/default.jpg",
        "comments_disabled": "False",
        "ratings_disabled": "False",
        "video_error_or_removed": "False",
        "description": "Line one, with a comma",
    }
    row.update(overrides)
    return row


def write_trending_csv(path: Path, rows: list[dict], columns=TRENDING_COLUMNS) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(columns), extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


@pytest.fixture(params=BACKENDS)
def store(request):
    return build_aggregation_store(request.param)


@pytest.fixture
def sample_records() -> list[VideoRecord]:
    return [
        make_record("funny|cats|music", "US", views=1000, likes=100, dislikes=10, comment_count=20, video_id="u1"),
        make_record("cats|news", "US", views=400, likes=10, dislikes=2, comment_count=4, video_id="u2"),
        make_record("music|Music|café", "GB", views=250, likes=30, dislikes=0, comment_count=2, video_id="g1"),
        make_record("news|sport", "GB", views=50, likes=1, dislikes=1, comment_count=1, video_id="g2"),
        make_record("funny", "CA", views=75, likes=5, dislikes=5, comment_count=5, video_id="c1"),
    ]
