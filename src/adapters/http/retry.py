"""
Relance des requetes HTTP limitees par le site (429 Too Many Requests).

Les sources HTTP d'un batch frappent souvent le meme site : un 429 est
relance apres le delai demande par Retry-After (plafonne), ou a defaut
apres un backoff exponentiel avec jitter. Les autres statuts d'erreur
remontent immediatement.

Usage:
    @with_retry(max_attempts=5, max_wait=60)
    async def fetch_page():
        ...

    response = await request_with_retry(client, "GET", url)
"""

from typing import Callable, Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Le site a repondu 429.

    Attributes:
        retry_after: Delai demande par l'en-tete Retry-After (secondes),
                     None s'il est absent ou n'est pas un nombre.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        delay = f"{retry_after}s" if retry_after is not None else "non precise"
        super().__init__(f"Limite de requetes atteinte (Retry-After: {delay})")


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Convertit l'en-tete Retry-After en secondes (forme date ignoree)."""
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def wait_retry_after(max_wait: int) -> Callable[[RetryCallState], float]:
    """
    Strategie d'attente tenacity : Retry-After s'il est connu, sinon backoff.

    Le delai ne depasse jamais max_wait.
    """
    backoff = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def _wait(retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after:
            return float(min(error.retry_after, max_wait))
        return backoff(retry_state)

    return _wait


def _log_retry(retry_state: RetryCallState) -> None:
    logger.debug(f"429 recu, tentative {retry_state.attempt_number + 1} a venir")


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur de relance sur RateLimitError.

    Apres max_attempts, la derniere RateLimitError est relevee telle quelle.
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete en relancant les reponses 429.

    Args:
        client: Client httpx de la session
        method: Methode HTTP
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives (secondes)
        **kwargs: Transmis a client.request()

    Raises:
        RateLimitError: Si le site repond encore 429 apres max_attempts
        httpx.HTTPStatusError: Pour les autres statuts 4xx/5xx
        httpx.HTTPError: Pour les erreurs de transport
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _send() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _send()
