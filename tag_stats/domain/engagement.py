from tag_stats.domain.errors import ZeroViewsError
from tag_stats.domain.video_record import VideoRecord

TAG_DELIMITER = "|"

LIKE_WEIGHT = 1.0
DISLIKE_WEIGHT = 0.5
COMMENT_WEIGHT = 1.5


def engagement_rate(record: VideoRecord) -> float:
    """
    (likes * 1.0 + dislikes * 0.5 + comment_count * 1.5) / views
    """
    if record.views == 0:
        raise ZeroViewsError(record.video_id)
    weighted = (
        LIKE_WEIGHT * record.likes
        + DISLIKE_WEIGHT * record.dislikes
        + COMMENT_WEIGHT * record.comment_count
    )
    return weighted / record.views


def extract_tags(field: str | None) -> list[str]:
    """
    Split a tag field on '|'.

    An empty field gives no tokens and a trailing delimiter does not add an
    empty token, but empty tokens between two delimiters are kept.
    """
    if not field:
        return []
    tokens = field.split(TAG_DELIMITER)
    if tokens[-1] == "":
        tokens.pop()
    return tokens


def is_ascii(tag: str) -> bool:
    return all(ord(ch) < 128 for ch in tag)


def qualifying_tags(field: str | None) -> list[str]:
    # 비ASCII 태그와 빈 토큰은 집계에서 제외한다.
    return [tag for tag in extract_tags(field) if tag and is_ascii(tag)]
