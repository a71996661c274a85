import os
import boto3

from config.settings import S3DatasetSettings


def get_s3_client(settings: S3DatasetSettings):
    return boto3.client(
        "s3",
        region_name=settings.region,
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
    )


def build_s3_uri(bucket: str, key: str) -> str:
    return f"s3://{bucket}/{key}"
