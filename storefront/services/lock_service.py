import uuid
from contextlib import contextmanager

import redis

from storefront.domain.errors import CartBusy
from storefront.utils.retry import redis_retry, lock_wait
from storefront.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS, CART_LOCK_WAIT_SECONDS
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

#redis wykonuje skrypt lua atomowo, nikt nie wcisnie sie miedzy GET a DEL
#wiec lock zwolni tylko ten kto go trzyma (po tokenie)


class LockService:
    """
    -lock koszyka per principal (mutacje jednego principala po kolei)
    -czekanie na lock do CART_LOCK_WAIT_SECONDS, potem CartBusy
    -zwalnianie locka
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        url: str | None = None,
        ttl: int = CART_LOCK_TTL_SECONDS,
        wait: float = CART_LOCK_WAIT_SECONDS,
    ):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl
        self.wait = wait

    @staticmethod
    def _key(principal: str) -> str:
        return f"cart:{principal}:lock"

    @redis_retry()
    def acquire_cart_lock(self, principal: str, token: str) -> bool:
        key = self._key(principal)
        logger.info(f"Acquire lock {key}")
        #SET cart:abc:lock "<token>" NX EX 10
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,  #tylko jesli nie istnieje
                ex=self.ttl,  #wygasa sam, nawet jak proces padnie
            )
        )

    @redis_retry()
    def release_cart_lock(self, principal: str, token: str) -> bool:
        key = self._key(principal)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, principal: str):
        token = uuid.uuid4().hex
        #druga operacja tego samego principala czeka az pierwsza skonczy
        if not lock_wait(self.wait)(self.acquire_cart_lock, principal, token):
            logger.warning(f"Koszyk {principal} zablokowany dluzej niz {self.wait}s")
            raise CartBusy("Koszyk jest modyfikowany przez inna operacje")
        try:
            yield
        finally:
            self.release_cart_lock(principal, token)
