import logging
import os
from contextlib import contextmanager

from filelock import FileLock, Timeout

from inventory_api.config import settings
from inventory_api.services.exceptions import ConflictError

log = logging.getLogger(__name__)


def _lock_path(product_id: int) -> str:
    return os.path.join(settings.STOCK_LOCK_DIR, f"product_{product_id}.lock")


@contextmanager
def product_lock(product_id: int, timeout: float = None):
    """
    Serialize stock writes for one product across threads and worker processes.

    Raises ConflictError when the lock cannot be taken within ``timeout``.
    """
    timeout = settings.STOCK_LOCK_TIMEOUT_SECONDS if timeout is None else timeout
    os.makedirs(settings.STOCK_LOCK_DIR, exist_ok=True)
    lock = FileLock(_lock_path(product_id))
    try:
        with lock.acquire(timeout=timeout):
            yield
    except Timeout:
        log.warning("Timed out waiting for stock lock. ProductId: %s", product_id)
        raise ConflictError("Product stock is being updated by another request; try again")


def discard_product_lock(product_id: int):
    """Remove the lock file of a deleted product; later writes to it fail with NotFound anyway."""
    try:
        os.remove(_lock_path(product_id))
    except FileNotFoundError:
        return
    log.debug("Removed stock lock file. ProductId: %s", product_id)
