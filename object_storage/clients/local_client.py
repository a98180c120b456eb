"""
Implements the storage client interface on a local directory.

Keys map to paths below the root directory; listings are shaped like S3's
(Key, Size, LastModified) so callers can swap backends.
"""
from object_storage.utils.logger import logger
from object_storage.utils.exceptions import ObjectFetchError
from object_storage.utils.config import DEFAULT_CHUNK_SIZE
from object_storage.interfaces.storage_interface import StorageClientInterface, StorageClientType
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Union
import os
import shutil

class LocalClient(StorageClientInterface):
    def __init__(self, address: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """Define the root directory
        Args:
            address: directory path; created on first write if missing
            chunk_size: bytes per chunk yielded by read_as_stream
        """
        self.type = StorageClientType.LOCAL
        self.root = os.path.realpath(address)
        self.address = os.path.join(self.root, '')
        self.chunk_size = chunk_size

    def _path(self, key: str) -> str:
        """Map a key to a path, refusing keys that resolve outside the root ('../x', symlinks)"""
        path = os.path.realpath(os.path.join(self.root, *key.split('/')))
        if path != self.root and not path.startswith(self.root + os.sep):
            logger.error(f'[FAIL] key "{key}" resolves outside "{self.root}"')
            raise ValueError(f'key "{key}" resolves outside the root directory')
        return path

    def verify(self) -> bool:
        """Return True if the root directory exists"""
        if not os.path.isdir(self.root):
            logger.warning(f'[WARNING] directory "{self.root}" does not exist')
            return False
        return True

    def exists(self, key: str) -> bool:
        return os.path.isfile(self._path(key))

    def read_item(self, key: str) -> bytes:
        path = self._path(key)
        try:
            with open(path, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            logger.error(f'[FAIL] cannot read "{path}": file does not exist')
            raise ObjectFetchError(key, reason='no such file')

    def read_text_item(self, key: str, encoding: str = 'utf-8') -> str:
        return self.read_item(key).decode(encoding)

    def read_as_stream(self, key: str) -> Iterator[bytes]:
        path = self._path(key)
        if not os.path.isfile(path):
            logger.error(f'[FAIL] cannot read "{path}": file does not exist')
            raise ObjectFetchError(key, reason='no such file')
        with open(path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk

    def write_item(self,
                   key: str,
                   content: Union[bytes, str]) -> bool:
        """Write bytes or text to a file, creating parent folders as needed
        Args:
            key: path relative to the root directory
            content: bytes, or text (encoded as UTF-8)
        Return:
            True/False to indicate success/failure
        """
        path = self._path(key)
        if isinstance(content, str):
            content = content.encode('utf-8')
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'wb') as f:
                f.write(content)
        except OSError as e:
            logger.error(f'[FAIL] cannot write "{path}" ({e})')
            return False
        logger.info(f'[SUCCESS] wrote "{path}"')
        return True

    def write_text_item(self,
                        key: str,
                        text: str) -> bool:
        return self.write_item(key, text)

    def delete_item(self, key: str) -> bool:
        path = self._path(key)
        if not os.path.isfile(path):
            logger.info(f'[SKIP] "{path}" does not exist')
            return False
        os.remove(path)
        logger.info(f'[SUCCESS] deleted "{path}"')
        return True

    def list(self, folder: str = '') -> List[Dict]:
        """List files below a folder
        Args:
            folder: path relative to the root directory ('' for everything)
        Return:
            S3-style object descriptions with keys relative to the root, sorted by key
        """
        base = self._path(folder.strip('/')) if folder.strip('/') else self.root
        objects = []
        for dirpath, _, filenames in os.walk(base):
            for name in filenames:
                path = os.path.join(dirpath, name)
                stat = os.stat(path)
                objects.append({
                    'Key': os.path.relpath(path, self.root).replace(os.sep, '/'),
                    'Size': stat.st_size,
                    'LastModified': datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
                })
        return sorted(objects, key=lambda obj: obj['Key'])

    def delete_folder(self, folder: str) -> int:
        """Remove a folder and everything below it
        Return:
            number of files deleted
        """
        if not folder.strip('/'):
            raise ValueError('refusing to delete the root directory; pass a folder')
        path = self._path(folder.strip('/'))
        if path == self.root:
            raise ValueError('refusing to delete the root directory; pass a folder')
        if not os.path.isdir(path):
            logger.info(f'[SKIP] folder "{path}" does not exist')
            return 0
        deleted = len(self.list(folder))
        shutil.rmtree(path)
        logger.info(f'[SUCCESS] deleted {deleted} files under "{path}"')
        return deleted
