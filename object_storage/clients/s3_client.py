"""
Implements the storage client interface on top of Amazon S3 (or any S3-compatible store).

Every key passed in is relative to the address the client was created with:
S3Client('s3://my-bucket/data/v1').write_text_item('file.json', '{}') writes
the object 'data/v1/file.json' in bucket 'my-bucket'.
"""
import boto3
from object_storage.utils.logger import logger
from object_storage.utils.address import parse_s3_address, resolve_key, resolve_folder
from object_storage.utils.config import S3ClientConfig
from object_storage.utils.exceptions import ObjectFetchError
from object_storage.interfaces.storage_interface import StorageClientInterface, StorageClientType
from botocore.exceptions import ClientError
from botocore.client import BaseClient
from typing import Dict, Iterator, List, Optional, Union

NOT_FOUND_CODES = ('404', 'NoSuchKey', 'NotFound')

def _status_code(response: Dict) -> Optional[int]:
    return response.get('ResponseMetadata', {}).get('HTTPStatusCode')

class S3Client(StorageClientInterface):
    def __init__(self,
                 address: str,
                 config: Optional[S3ClientConfig] = None,
                 s3_client: Optional[BaseClient] = None):
        """Parse the address and set up the S3 client
        Args:
            address: s3://bucket[/key-prefix][/]
            config: region/endpoint/paging settings (defaults to boto3's own resolution)
            s3_client: an existing boto3 S3 client to use instead of creating one
        """
        parsed = parse_s3_address(address)
        self.type = StorageClientType.S3
        self.address = parsed.address
        self.bucket_name = parsed.bucket_name
        self.key_prefix = parsed.key_prefix
        self.config = config or S3ClientConfig()
        self.client = s3_client or boto3.client('s3', **self.config.client_kwargs())

    def _key(self, key: str) -> str:
        return resolve_key(self.key_prefix, key)

    def verify(self) -> bool:
        """Check that the bucket is reachable with the current credentials
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/list_objects_v2.html
        Return:
            True; any service or transport error is raised
        """
        self.client.list_objects_v2(Bucket=self.bucket_name, MaxKeys=1)
        logger.info(f'[SUCCESS] verified access to "{self.address}"')
        return True

    def exists(self, key: str) -> bool:
        """Check if object exists
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/head_object.html
        Args:
            key: the object key, relative to the client's key prefix
        Return:
            True/False if object exists/does not exist; other errors (e.g. access denied) are raised
        """
        object_key = self._key(key)
        try:
            self.client.head_object(Bucket=self.bucket_name, Key=object_key)
            return True
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code')
            if code in NOT_FOUND_CODES:
                logger.info(f'[INFO] object "{object_key}" does not exist in bucket "{self.bucket_name}"')
                return False
            logger.error(f'[FAIL] cannot check object "{object_key}" in bucket "{self.bucket_name}" ({e})')
            raise

    def _get_body(self, key: str):
        """Fetch an object and return its streaming body
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/get_object.html
        """
        object_key = self._key(key)
        response = self.client.get_object(Bucket=self.bucket_name, Key=object_key)
        status_code = _status_code(response)
        if status_code != 200:
            logger.error(f'[FAIL] cannot read object "{object_key}" (status {status_code})')
            raise ObjectFetchError(object_key, status_code, 'unexpected status')
        body = response.get('Body')
        if body is None:
            logger.error(f'[FAIL] object "{object_key}" returned no body')
            raise ObjectFetchError(object_key, status_code, 'missing body')
        return body

    def read_item(self, key: str) -> bytes:
        body = self._get_body(key)
        try:
            return body.read()
        finally:
            body.close()

    def read_text_item(self, key: str, encoding: str = 'utf-8') -> str:
        return self.read_item(key).decode(encoding)

    def read_as_stream(self, key: str) -> Iterator[bytes]:
        """Yield the object's content chunk by chunk without buffering it whole

        The request is only sent once iteration starts, so fetch errors are
        raised from the first next() call.
        """
        body = self._get_body(key)
        try:
            for chunk in body.iter_chunks(chunk_size=self.config.chunk_size):
                yield chunk
        finally:
            body.close()

    def write_item(self,
                   key: str,
                   content: Union[bytes, str]) -> bool:
        """Upload bytes or text as an object
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/put_object.html
        Args:
            key: the object key, relative to the client's key prefix
            content: bytes, or text (encoded as UTF-8)
        Return:
            True/False to indicate success/failure; service errors are raised
        """
        object_key = self._key(key)
        if isinstance(content, str):
            content = content.encode('utf-8')
        response = self.client.put_object(Bucket=self.bucket_name, Key=object_key, Body=content)
        status_code = _status_code(response)
        if status_code != 200:
            logger.error(f'[FAIL] cannot write object "{object_key}" (status {status_code})')
            return False
        logger.info(f'[SUCCESS] wrote object "{object_key}" to bucket "{self.bucket_name}"')
        return True

    def write_text_item(self,
                        key: str,
                        text: str) -> bool:
        return self.write_item(key, text)

    def delete_item(self, key: str) -> bool:
        """Delete object from the bucket
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/delete_object.html
        Args:
            key: the object key, relative to the client's key prefix
        Return:
            True/False to indicate success/failure; service errors are raised
        """
        object_key = self._key(key)
        response = self.client.delete_object(Bucket=self.bucket_name, Key=object_key)
        status_code = _status_code(response)
        if status_code is None or not 200 <= status_code < 300:
            logger.error(f'[FAIL] cannot delete object "{object_key}" (status {status_code})')
            return False
        logger.info(f'[SUCCESS] deleted object "{object_key}" in bucket "{self.bucket_name}"')
        return True

    def iter_pages(self, folder: str = '') -> Iterator[List[Dict]]:
        """Yield the objects under a folder, one listing page at a time
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/list_objects_v2.html
        Args:
            folder: folder path relative to the client's key prefix ('' for everything)
        Return:
            iterator of pages, each a list of object descriptions (Key, Size, LastModified, ...)
        """
        prefix = resolve_folder(self.key_prefix, folder)
        kwargs = {'Bucket': self.bucket_name,
                  'Prefix': prefix,
                  'MaxKeys': self.config.page_size}
        while True:
            response = self.client.list_objects_v2(**kwargs)
            contents = response.get('Contents', [])
            if contents:
                yield contents

            if not response.get('IsTruncated'):
                break
            kwargs['ContinuationToken'] = response['NextContinuationToken']

    def list(self, folder: str = '') -> List[Dict]:
        """List every object under a folder, across all listing pages

        Keys in the result are relative to the client's key prefix, so they can
        be passed straight back to read_item, exists or delete_item.
        """
        scope = resolve_folder(self.key_prefix, '')
        objects = []
        for page in self.iter_pages(folder):
            for obj in page:
                objects.append({**obj, 'Key': obj['Key'][len(scope):]})
        return objects

    def delete_folder(self, folder: str) -> int:
        """Delete every object under a folder, one bulk delete per listing page
        Docs:
            https://boto3.amazonaws.com/v1/documentation/api/latest/reference/services/s3/client/delete_objects.html
        Args:
            folder: folder path relative to the client's key prefix; '' is refused
        Return:
            number of objects deleted; per-object failures are logged and skipped
        """
        if not folder.strip('/'):
            raise ValueError('refusing to delete the whole client scope; pass a folder')
        deleted = 0
        for page in self.iter_pages(folder):
            response = self.client.delete_objects(
                Bucket=self.bucket_name,
                Delete={'Objects': [{'Key': obj['Key']} for obj in page]}
            )
            deleted += len(response.get('Deleted', []))
            for error in response.get('Errors', []):
                logger.warning(f'[WARNING] cannot delete object "{error.get("Key")}": '
                               f'{error.get("Code")} {error.get("Message")}')

        logger.info(f'[SUCCESS] deleted {deleted} objects under "{resolve_folder(self.key_prefix, folder)}" '
                    f'in bucket "{self.bucket_name}"')
        return deleted
