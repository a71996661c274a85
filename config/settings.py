import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class TagStatsSettings:
    backend: str = os.getenv("TAG_STATS_BACKEND", "mapping")
    source: str = os.getenv("TAG_STATS_SOURCE", "local")
    data_dir: str = os.getenv("TAG_STATS_DATA_DIR", "archive")
    report_limit: int = int(os.getenv("TAG_STATS_REPORT_LIMIT", "25"))
    global_extended: bool = os.getenv("TAG_STATS_GLOBAL_EXTENDED", "false").lower() == "true"


@dataclass
class S3DatasetSettings:
    region: str | None = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    bucket: str = os.getenv("AWS_S3_BUCKET", "")
    prefix: str = os.getenv("TAG_STATS_S3_PREFIX", "")
