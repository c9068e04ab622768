"""Configuration: frozen Config with validated endpoints and timeouts."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
import os
from typing import Any
from urllib.parse import urlsplit

from dotenv import load_dotenv

from blitline._http import DEFAULT_JOB_URL, DEFAULT_LISTEN_URL
from blitline.errors import ConfigurationError

# Environment variables read by ``Config.from_env``, keyed by field name.
_ENV_VARS: dict[str, str] = {
    "job_url": "BLITLINE_JOB_URL",
    "listen_url": "BLITLINE_LISTEN_URL",
    "timeout_s": "BLITLINE_TIMEOUT_S",
    "long_poll_timeout_s": "BLITLINE_LONG_POLL_TIMEOUT_S",
    "encoding": "BLITLINE_ENCODING",
}
_FLOAT_FIELDS = frozenset({"timeout_s", "long_poll_timeout_s"})


@dataclass(frozen=True)
class Config:
    """Immutable configuration for a ``BlitlineClient``.

    Defaults point at the public Blitline endpoints, so ``Config()`` is enough
    for most callers.

    Example:
        config = Config(timeout_s=10.0)
        # or, honoring BLITLINE_* environment variables and a local .env:
        config = Config.from_env()
    """

    job_url: str = DEFAULT_JOB_URL
    #: Job ids are appended as a path segment: ``<listen_url>/<job_id>``.
    listen_url: str = DEFAULT_LISTEN_URL
    timeout_s: float = 30.0
    #: The listen endpoint blocks until the job finishes; *None* waits forever.
    long_poll_timeout_s: float | None = 120.0
    #: Charset used to encode job documents before sending.
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("job_url", "listen_url"):
            url = getattr(self, name)
            parts = urlsplit(url)
            if parts.scheme not in ("http", "https") or not parts.netloc:
                raise ConfigurationError(
                    f"{name} must be an absolute http(s) URL, got {url!r}",
                    hint="Example: 'http://api.blitline.com/job'",
                )

        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds each job submission request in seconds.",
            )
        if self.long_poll_timeout_s is not None and self.long_poll_timeout_s <= 0:
            raise ConfigurationError(
                f"long_poll_timeout_s must be > 0 or None, got {self.long_poll_timeout_s}",
                hint="Use None to wait for the job without a client-side limit.",
            )

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(
                f"Unknown encoding: {self.encoding!r}",
                hint="Job documents are JSON; 'utf-8' is almost always right.",
            ) from e

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Build a Config from ``BLITLINE_*`` environment variables.

        A ``.env`` file is loaded first (existing variables win). Keyword
        arguments override anything found in the environment.
        """
        load_dotenv()
        values: dict[str, Any] = {}
        for name, env_var in _ENV_VARS.items():
            raw = os.environ.get(env_var)
            if raw is None or not raw.strip():
                continue
            values[name] = _coerce(name, env_var, raw.strip())
        values.update(overrides)
        return cls(**values)


def _coerce(name: str, env_var: str, raw: str) -> Any:
    if name not in _FLOAT_FIELDS:
        return raw
    if name == "long_poll_timeout_s" and raw.lower() == "none":
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{env_var} must be a number, got {raw!r}",
            hint=f"Set {env_var} to a number of seconds.",
        ) from e
