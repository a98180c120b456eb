"""
Connection settings for S3Client.

Anything left as None falls through to boto3's own resolution (environment,
shared config files, instance metadata).
"""
from dataclasses import dataclass
from botocore.config import Config
from typing import Optional
import os

MAX_PAGE_SIZE = 1000 # list_objects_v2 never returns more than 1000 keys per call
DEFAULT_CHUNK_SIZE = 1024 * 1024

@dataclass(frozen=True)
class S3ClientConfig:
    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    page_size: int = MAX_PAGE_SIZE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    botocore_config: Optional[Config] = None

    def __post_init__(self):
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f'page_size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}')
        if self.chunk_size < 1:
            raise ValueError(f'chunk_size must be positive, got {self.chunk_size}')

    @classmethod
    def from_env(cls) -> 'S3ClientConfig':
        """Build a config from environment variables
        Env:
            AWS_REGION: region for the S3 client
            S3_ENDPOINT_URL: endpoint of an S3-compatible store (e.g. MinIO)
            S3_PAGE_SIZE: keys fetched per listing call
        Return:
            S3ClientConfig
        """
        page_size = os.environ.get('S3_PAGE_SIZE')
        return cls(region_name=os.environ.get('AWS_REGION') or None,
                   endpoint_url=os.environ.get('S3_ENDPOINT_URL') or None,
                   page_size=int(page_size) if page_size else MAX_PAGE_SIZE)

    def client_kwargs(self) -> dict:
        """Keyword arguments for boto3.client('s3', ...), skipping unset values"""
        kwargs = {}
        if self.region_name:
            kwargs['region_name'] = self.region_name
        if self.endpoint_url:
            kwargs['endpoint_url'] = self.endpoint_url
        if self.botocore_config is not None:
            kwargs['config'] = self.botocore_config
        return kwargs
