"""
Parses s3://bucket[/key-prefix] addresses and resolves keys against a prefix.
"""
from object_storage.utils.exceptions import InvalidAddressError
from typing import NamedTuple, Optional

S3_SCHEME = 's3://'
SEPARATOR = '/'

class S3Address(NamedTuple):
    address: str
    bucket_name: str
    key_prefix: Optional[str]

def parse_s3_address(address: str) -> S3Address:
    """Split an S3 address into bucket name and key prefix
    Args:
        address: e.g. 's3://my-bucket', 's3://my-bucket/data/v1/'
    Return:
        S3Address with the address normalized to end with a single '/'
        and key_prefix None when only a bucket is given
    """
    if not address.startswith(S3_SCHEME):
        raise InvalidAddressError(address, f'must start with "{S3_SCHEME}"')

    remainder = address[len(S3_SCHEME):].rstrip(SEPARATOR)
    bucket_name, *segments = remainder.split(SEPARATOR)
    if not bucket_name:
        raise InvalidAddressError(address, 'bucket name is empty')

    # Empty segments ('a//b') would give a prefix with a leading or doubled '/'
    key_prefix = SEPARATOR.join(segment for segment in segments if segment) or None
    return S3Address(address=f'{S3_SCHEME}{remainder}{SEPARATOR}',
                     bucket_name=bucket_name,
                     key_prefix=key_prefix)

def resolve_key(key_prefix: Optional[str], key: str) -> str:
    if key_prefix:
        return f'{key_prefix}{SEPARATOR}{key}'
    return key

def resolve_folder(key_prefix: Optional[str], folder: str) -> str:
    """Resolve a folder path to a listing prefix ending with one '/'

    An empty folder means the whole scope of the client: the key prefix
    itself, or the entire bucket when there is no prefix.
    """
    folder = folder.rstrip(SEPARATOR)
    if folder:
        return resolve_key(key_prefix, folder) + SEPARATOR
    if key_prefix:
        return key_prefix + SEPARATOR
    return ''
