# storefront/utils/retry.py
from tenacity import (
    Retrying,
    retry,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
    retry_if_exception_type,
    retry_if_result,
)
import redis
from sqlalchemy.exc import IntegrityError


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def lock_wait(seconds: float, poll: float = 0.05) -> Retrying:
    """
    Ponawia probe zalozenia locka (False) az do `seconds`.
    Po czasie zwraca False zamiast rzucac RetryError.
    """
    return Retrying(
        stop=stop_after_delay(seconds),
        wait=wait_fixed(poll),
        retry=retry_if_result(lambda acquired: not acquired),
        retry_error_callback=lambda state: False,
    )


def integrity_retry():
    #konflikt unikalnosci przy rownoleglym insercie - liczymy wartosc jeszcze raz
    return retry(
        reraise=True,
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=0.02, min=0.02, max=0.2),
        retry=retry_if_exception_type(IntegrityError),
    )
