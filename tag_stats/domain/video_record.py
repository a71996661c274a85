from dataclasses import dataclass
from typing import Mapping

from tag_stats.domain.errors import MalformedRecordError

TRENDING_COLUMNS = (
    "video_id",
    "trending_date",
    "title",
    "channel_title",
    "category_id",
    "publish_time",
    "tags",
    "views",
    "likes",
    "dislikes",
    "comment_count",
    "thumbnail_link",
    "comments_disabled",
    "ratings_disabled",
    "video_error_or_removed",
    "description",
)


@dataclass(frozen=True)
class VideoRecord:
    video_id: str
    country: str
    tags: str = ""
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    comment_count: int = 0
    trending_date: str = ""
    title: str = ""
    channel_title: str = ""
    category_id: int = 0
    publish_time: str = ""
    thumbnail_link: str = ""
    comments_disabled: bool = False
    ratings_disabled: bool = False
    video_error_or_removed: bool = False
    description: str = ""

    @classmethod
    def from_row(cls, country: str, row: Mapping[str, str]) -> "VideoRecord":
        """
        Build a record from one decoded trending-file row (all values as strings).
        Raises MalformedRecordError when a numeric column is not a non-negative integer.
        """
        return cls(
            video_id=_text(row, "video_id"),
            country=country,
            trending_date=_text(row, "trending_date"),
            title=_text(row, "title"),
            channel_title=_text(row, "channel_title"),
            category_id=_count(row, "category_id"),
            publish_time=_text(row, "publish_time"),
            tags=_text(row, "tags"),
            views=_count(row, "views"),
            likes=_count(row, "likes"),
            dislikes=_count(row, "dislikes"),
            comment_count=_count(row, "comment_count"),
            thumbnail_link=_text(row, "thumbnail_link"),
            comments_disabled=row.get("comments_disabled") == "True",
            ratings_disabled=row.get("ratings_disabled") == "True",
            video_error_or_removed=row.get("video_error_or_removed") == "True",
            description=_text(row, "description"),
        )


def _count(row: Mapping[str, str], column: str) -> int:
    raw = row.get(column)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise MalformedRecordError(f"{column}={raw!r} is not an integer") from None
    if value < 0:
        raise MalformedRecordError(f"{column}={raw!r} is negative")
    return value


def _text(row: Mapping[str, str], column: str) -> str:
    # 짧은 행은 빈 칸이 NaN 으로 채워진다.
    value = row.get(column)
    return value if isinstance(value, str) else ""
