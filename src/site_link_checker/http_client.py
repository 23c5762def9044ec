from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests
from requests import exceptions as req_exc

from . import __version__
from .models import LinkStatus, ValidationOutcome

LOGGER = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"site-link-checker/{__version__}"
REQUEST_TIMEOUT = "Request timeout"


@dataclass(frozen=True)
class ProbeResult:
    url: str
    final_url: str
    status_code: int


class HttpClient:
    """HEAD prober around an injected ``requests.Session``.

    Transport errors and timeouts are retried ``max_retries`` times with a
    fixed ``backoff_s`` pause. HTTP status codes are returned as-is, never
    retried.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 10.0,
        max_retries: int = 2,
        backoff_s: float = 0.5,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._max_retries = max(0, max_retries)
        self._backoff_s = backoff_s
        self._headers = {"User-Agent": user_agent}

    def head(self, url: str) -> ProbeResult:
        last_error: req_exc.RequestException | None = None

        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.head(
                    url, timeout=self._timeout_s, headers=self._headers
                )
                resp.close()
                return ProbeResult(
                    url=url,
                    final_url=str(resp.url),
                    status_code=int(resp.status_code),
                )
            except req_exc.RequestException as e:
                last_error = e
                # Malformed URLs will not get better on retry.
                if isinstance(
                    e, (req_exc.InvalidURL, req_exc.InvalidSchema, req_exc.MissingSchema)
                ):
                    break
                if attempt >= self._max_retries:
                    break
                LOGGER.debug(
                    "HEAD %s failed (attempt %d/%d): %s",
                    url,
                    attempt + 1,
                    self._max_retries + 1,
                    e,
                )
                time.sleep(self._backoff_s)

        if last_error is None:
            raise RuntimeError(f"HEAD {url} was never attempted")
        raise last_error


def outcome_for_status(status_code: int) -> ValidationOutcome:
    if 200 <= status_code < 400:
        return ValidationOutcome(LinkStatus.VALID, status_code, None)
    if 400 <= status_code < 500:
        return ValidationOutcome(
            LinkStatus.BROKEN, status_code, f"Client error: {status_code}"
        )
    # 500+ and anything below 200 are reported as server trouble.
    return ValidationOutcome(
        LinkStatus.WARNING, status_code, f"Server error: {status_code}"
    )


def validate_external(http: HttpClient, url: str) -> ValidationOutcome:
    try:
        res = http.head(url)
    except req_exc.Timeout:
        return ValidationOutcome(LinkStatus.WARNING, None, REQUEST_TIMEOUT)
    except req_exc.RequestException as e:
        return ValidationOutcome(LinkStatus.BROKEN, None, str(e))
    return outcome_for_status(res.status_code)
