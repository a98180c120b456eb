import logging
import os

LOG_FORMAT = '[%(levelname)s] %(message)s'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

def _level_from_env() -> str:
    """OBJECT_STORAGE_LOG_LEVEL, or INFO when unset or not a logging level name"""
    level = os.environ.get('OBJECT_STORAGE_LOG_LEVEL', 'INFO').upper()
    return level if level in LOG_LEVELS else 'INFO'

logger = logging.getLogger('object_storage')
# OBJECT_STORAGE_LOG_LEVEL=WARNING silences the per-object [SUCCESS] lines
logger.setLevel(_level_from_env())

# Prevent duplicate handlers during tests or reruns
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
