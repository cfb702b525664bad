"""Fixed endpoints and client identity used to talk to YouTube."""

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
INNERTUBE_API_URL = "https://www.youtube.com/youtubei/v1/player?key={api_key}"

INNERTUBE_CLIENT_NAME = "ANDROID"
INNERTUBE_CLIENT_VERSION = "20.10.38"

DEFAULT_ACCEPT_LANGUAGE = "en-US"


def innertube_context() -> dict[str, dict[str, str]]:
    """Return a fresh copy of the client context sent with player requests."""

    return {
        "client": {
            "clientName": INNERTUBE_CLIENT_NAME,
            "clientVersion": INNERTUBE_CLIENT_VERSION,
        }
    }


__all__ = [
    "DEFAULT_ACCEPT_LANGUAGE",
    "INNERTUBE_API_URL",
    "INNERTUBE_CLIENT_NAME",
    "INNERTUBE_CLIENT_VERSION",
    "WATCH_URL",
    "innertube_context",
]
