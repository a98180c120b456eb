"""
Defines the interface shared by all storage clients.

Item Interface:
1. Verify
2. Exists
3. Read Item (bytes / text / stream)
4. Write Item (bytes / text)
5. Delete Item

Folder Interface:
1. List
2. Delete Folder
"""
from enum import Enum
from typing import Protocol
from typing import Dict, Iterator, List, Union

class StorageClientType(Enum):
    S3 = 'S3Client'
    LOCAL = 'LocalClient'

class StorageClientInterface(Protocol):
    type: StorageClientType
    address: str

    def verify(self) -> bool:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def read_item(self, key: str) -> bytes:
        raise NotImplementedError

    def read_text_item(self, key: str, encoding: str = 'utf-8') -> str:
        raise NotImplementedError

    def read_as_stream(self, key: str) -> Iterator[bytes]:
        raise NotImplementedError

    def write_item(self,
                   key: str,
                   content: Union[bytes, str]) -> bool:
        raise NotImplementedError

    def write_text_item(self,
                        key: str,
                        text: str) -> bool:
        raise NotImplementedError

    def delete_item(self, key: str) -> bool:
        raise NotImplementedError

    def delete_folder(self, folder: str) -> int:
        """Delete everything under folder; an empty folder raises ValueError"""
        raise NotImplementedError

    def list(self, folder: str = '') -> List[Dict]:
        """Object descriptions (Key, Size, LastModified) under folder

        Keys are relative to the client's address, in the same form the other
        methods accept.
        """
        raise NotImplementedError
