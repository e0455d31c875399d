# storefront/services/lock_service.py
import uuid
from contextlib import contextmanager

import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Krotkie blokady na klucz (wariant w koszyku, pozycja wishlisty).
    - SET NX EX przy zakladaniu
    - zwalnianie tylko przez wlasciciela (lua, GET + DEL atomowo)
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def acquire_lock(self, key: str, owner: str, ttl: int) -> bool:
        logger.debug(f"Acquire lock {key} for {owner}")
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=ttl))

    @redis_retry()
    def release_lock(self, key: str, owner: str) -> bool:
        logger.debug(f"Release lock {key} for {owner}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)

    @contextmanager
    def locked(self, key: str, ttl: int = LOCK_TTL_SECONDS):
        owner = uuid.uuid4().hex
        if not self.acquire_lock(key, owner, ttl):
            raise RuntimeError("Resource is busy, retry the request")
        try:
            yield
        finally:
            self.release_lock(key, owner)

    def close(self):
        self.redis.close()
