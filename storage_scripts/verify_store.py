"""
Check that an S3 address is reachable before pointing an application at it.

Usage:
    python storage_scripts/verify_store.py s3://my-bucket/data/v1
"""
import sys
import os

# Looks at project root directory; used for finding object_storage
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from object_storage.clients.s3_client import S3Client
from object_storage.utils.config import S3ClientConfig
from object_storage.utils.exceptions import InvalidAddressError
from object_storage.utils.logger import logger
from botocore.exceptions import BotoCoreError, ClientError

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)

    try:
        client = S3Client(sys.argv[1], config=S3ClientConfig.from_env())
        client.verify()
    except InvalidAddressError as e:
        logger.error(f'[FAIL] {e}')
        sys.exit(2)
    except (ClientError, BotoCoreError) as e:
        logger.error(f'[FAIL] cannot reach "{sys.argv[1]}" ({e})')
        sys.exit(1)

    print('End Process')
