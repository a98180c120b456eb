"""
Errors raised by the storage clients.

Service/transport failures are not wrapped: they surface as botocore's
ClientError / BotoCoreError.
"""
from typing import Optional

class StorageError(Exception):
    """Base class for storage client errors"""

class InvalidAddressError(StorageError, ValueError):
    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(f'invalid storage address "{address}": {reason}')

class ObjectFetchError(StorageError):
    def __init__(self, key: str, status_code: Optional[int] = None, reason: str = 'fetch failed'):
        self.key = key
        self.status_code = status_code
        self.reason = reason
        super().__init__(f'cannot fetch object "{key}" ({reason}, status={status_code})')
