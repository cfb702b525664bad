"""Proxy and blocked-request retry configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import InvalidProxyConfig

ENV_HTTP_PROXY = "TUBESCRIPT_HTTP_PROXY"
ENV_HTTPS_PROXY = "TUBESCRIPT_HTTPS_PROXY"
ENV_RETRIES_WHEN_BLOCKED = "TUBESCRIPT_RETRIES_WHEN_BLOCKED"
ENV_CLOSE_CONNECTIONS = "TUBESCRIPT_CLOSE_CONNECTIONS"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """Where to route requests and how to react when YouTube blocks them.

    ``retries_when_blocked`` bounds both the transport-level retry of HTTP 429
    responses and the number of attempts made at the whole catalog fetch when
    YouTube answers with a bot check. Retrying only helps with a rotating
    proxy, since every attempt needs to leave from a different IP.
    """

    http_url: str | None = None
    https_url: str | None = None
    retries_when_blocked: int = 0
    prevent_keeping_connections_alive: bool = False

    def __post_init__(self) -> None:
        if self.retries_when_blocked < 0:
            raise InvalidProxyConfig("retries_when_blocked must not be negative")

    def to_requests_dict(self) -> dict[str, str]:
        """Return the mapping ``requests`` expects in ``Session.proxies``.

        A proxy configured for only one scheme is used for both.
        """
        http_url = self.http_url or self.https_url
        https_url = self.https_url or self.http_url
        proxies: dict[str, str] = {}
        if http_url:
            proxies["http"] = http_url
        if https_url:
            proxies["https"] = https_url
        return proxies

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProxyConfig | None:
        """Build a config from ``TUBESCRIPT_*`` environment variables.

        Returns ``None`` when none of the variables is set.
        """
        env = os.environ if environ is None else environ
        keys = (ENV_HTTP_PROXY, ENV_HTTPS_PROXY, ENV_RETRIES_WHEN_BLOCKED, ENV_CLOSE_CONNECTIONS)
        if not any(env.get(key, "").strip() for key in keys):
            return None

        retries_raw = env.get(ENV_RETRIES_WHEN_BLOCKED, "").strip() or "0"
        try:
            retries = int(retries_raw)
        except ValueError as exc:
            raise InvalidProxyConfig(
                f"{ENV_RETRIES_WHEN_BLOCKED} must be an integer, got {retries_raw!r}"
            ) from exc

        return cls(
            http_url=env.get(ENV_HTTP_PROXY, "").strip() or None,
            https_url=env.get(ENV_HTTPS_PROXY, "").strip() or None,
            retries_when_blocked=retries,
            prevent_keeping_connections_alive=_parse_flag(
                ENV_CLOSE_CONNECTIONS, env.get(ENV_CLOSE_CONNECTIONS, "")
            ),
        )


def _parse_flag(name: str, value: str) -> bool:
    normalised = value.strip().lower()
    if normalised in _TRUTHY:
        return True
    if normalised in _FALSY:
        return False
    raise InvalidProxyConfig(f"{name} must be a boolean flag, got {value!r}")


__all__ = [
    "ENV_CLOSE_CONNECTIONS",
    "ENV_HTTPS_PROXY",
    "ENV_HTTP_PROXY",
    "ENV_RETRIES_WHEN_BLOCKED",
    "ProxyConfig",
]
