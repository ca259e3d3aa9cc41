import redis

from storefront.utils.retry import redis_retry
from storefront.utils.logging import get_logger
from storefront.utils.settings import REDIS_URL

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
#wiec zwalnia tylko ten kto lock zalozyl (token = id zamowienia)


class LockService:
    """
    -lock na skladanie zamowienia per user (drugi klik "zamow")
    -zwalnianie locka tylko przez wlasciciela
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _checkout_key(user_id: str) -> str:
        return f"checkout:{user_id}:lock"

    @redis_retry()
    def acquire_checkout_lock(self, user_id: str, token: str, ttl: int) -> bool:
        key = self._checkout_key(user_id)
        logger.info(f"Acquire lock {key} for order {token}")
        #SET checkout:u1:lock "IX123" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,
                ex=ttl, #wygasa sam jesli proces padnie w trakcie commitu
            )
        )

    @redis_retry()
    def release_checkout_lock(self, user_id: str, token: str) -> bool:
        key = self._checkout_key(user_id)
        logger.info(f"Release lock {key} for order {token}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
