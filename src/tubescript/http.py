"""HTTP transport used by the retrieval pipeline."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .constants import DEFAULT_ACCEPT_LANGUAGE
from .errors import IpBlocked, YouTubeRequestFailed

if TYPE_CHECKING:
    from .proxies import ProxyConfig

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
RATE_LIMIT_BACKOFF = 0.5


def create_session(proxy_config: ProxyConfig | None = None) -> requests.Session:
    """Create the shared session all pipeline requests go through.

    Consent negotiation writes a cookie into this session, so one session must
    not be shared by pipelines running concurrently.
    """
    session = requests.Session()
    session.headers.update({"Accept-Language": DEFAULT_ACCEPT_LANGUAGE})

    if proxy_config is None:
        return session

    proxies = proxy_config.to_requests_dict()
    if proxies:
        session.proxies.update(proxies)

    if proxy_config.prevent_keeping_connections_alive:
        session.headers.update({"Connection": "close"})

    if proxy_config.retries_when_blocked > 0:
        retry_strategy = Retry(
            total=proxy_config.retries_when_blocked,
            backoff_factor=RATE_LIMIT_BACKOFF,
            status_forcelist=[RATE_LIMIT_STATUS],
            allowed_methods=frozenset({"GET", "POST"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        logger.debug(
            "Retrying rate limited requests up to %d times",
            proxy_config.retries_when_blocked,
        )

    return session


@contextmanager
def translate_request_errors(video_id: str) -> Iterator[None]:
    """Map ``requests`` failures raised inside the block to retrieval errors.

    A 429 response becomes :class:`IpBlocked`; every other transport failure
    becomes :class:`YouTubeRequestFailed` chained to the original exception.
    """
    try:
        yield
    except requests.HTTPError as exc:
        response = exc.response
        if response is not None and response.status_code == RATE_LIMIT_STATUS:
            logger.debug("Request for %s was rate limited", video_id)
            raise IpBlocked(video_id) from exc
        raise YouTubeRequestFailed(video_id, exc) from exc
    except requests.RequestException as exc:
        raise YouTubeRequestFailed(video_id, exc) from exc


__all__ = ["RATE_LIMIT_STATUS", "create_session", "translate_request_errors"]
