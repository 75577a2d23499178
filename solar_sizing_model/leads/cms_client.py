"""Payload CMS REST client – submit and fetch contact leads.

Key behaviour
-------------
- Base URL comes from the constructor or the ``PAYLOAD_API_URL`` environment
  variable; it is resolved lazily so a missing setting only fails on use.
- Phone numbers are sanitised before submission.
- Retries up to :data:`~solar_sizing_model.config.defaults.PAYLOAD_RETRY_MAX`
  attempts with exponential backoff on HTTP 429, 5xx, timeouts and
  connection errors. Other 4xx responses fail immediately with the CMS's own
  error messages.
- Every failure, including a malformed URL or a broken response stream,
  surfaces as :class:`PayloadAPIError`.

Typical usage::

    from solar_sizing_model.leads.cms_client import PayloadClient
    client = PayloadClient(base_url="http://localhost:3001")
    doc = client.submit_lead(LeadFormData("สมชาย ใจดี", "081-234-5678", "a@b.co"))
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any

import requests

from solar_sizing_model.config.defaults import (
    PAYLOAD_API_URL_ENV,
    PAYLOAD_LEADS_ENDPOINT,
    PAYLOAD_REQUEST_TIMEOUT_S,
    PAYLOAD_RETRY_BACKOFF_FACTOR,
    PAYLOAD_RETRY_MAX,
)
from solar_sizing_model.leads.validation import LeadFormData

logger = logging.getLogger(__name__)

# HTTP status codes that warrant a retry (rate-limit and server errors)
_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class PayloadAPIError(RuntimeError):
    """Raised when the CMS API fails in a way that cannot be retried.

    Attributes
    ----------
    status_code:
        HTTP status of the failing response, or ``None`` for network errors
        and configuration problems.
    errors:
        The CMS's ``errors`` list (``[{"message": ...}, ...]``) when present.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class PayloadClient:
    """Thin client for the Payload CMS collections API.

    Parameters
    ----------
    base_url:
        CMS base URL. Defaults to the ``PAYLOAD_API_URL`` environment
        variable.
    timeout:
        HTTP request timeout in seconds.
    max_retries:
        Maximum number of attempts on transient errors.
    backoff_factor:
        Initial wait time (seconds) for exponential backoff.
        Actual wait on attempt *k* = ``backoff_factor × 2^(k-1)``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int = PAYLOAD_REQUEST_TIMEOUT_S,
        max_retries: int = PAYLOAD_RETRY_MAX,
        backoff_factor: float = PAYLOAD_RETRY_BACKOFF_FACTOR,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor

    @property
    def base_url(self) -> str:
        """Resolved base URL with a trailing slash.

        Raises
        ------
        PayloadAPIError
            When neither the constructor nor the environment provides one.
        """
        url = self._base_url or os.environ.get(PAYLOAD_API_URL_ENV)
        if not url:
            raise PayloadAPIError(
                f"{PAYLOAD_API_URL_ENV} environment variable is not set"
            )
        return url.rstrip("/") + "/"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit_lead(self, lead: LeadFormData) -> dict[str, Any]:
        """Create a lead in the CMS.

        Parameters
        ----------
        lead:
            Validated contact form data.

        Returns
        -------
        dict
            The created lead document (the response's ``doc``).

        Raises
        ------
        PayloadAPIError
            When the CMS rejects the lead or all retries are exhausted.
        """
        body = self._request("POST", PAYLOAD_LEADS_ENDPOINT, json=lead.to_payload())
        doc = body.get("doc", body)
        logger.info("Lead submitted to CMS (id=%s)", doc.get("id"))
        return doc

    def get_lead(self, lead_id: str) -> dict[str, Any]:
        """Fetch a single lead by id (requires admin access on the CMS)."""
        return self._request("GET", f"{PAYLOAD_LEADS_ENDPOINT}/{lead_id}")

    # ------------------------------------------------------------------
    # HTTP with retry/backoff
    # ------------------------------------------------------------------

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Execute an HTTP request with exponential backoff retry."""
        url = self.base_url + endpoint.lstrip("/")
        last_exc: Exception | None = None

        for attempt in range(1, self._max_retries + 1):
            wait = self._backoff_factor * (2 ** (attempt - 1))
            try:
                logger.debug(
                    "CMS %s attempt %d/%d: %s",
                    method,
                    attempt,
                    self._max_retries,
                    url,
                )
                resp = requests.request(
                    method,
                    url,
                    headers={"Content-Type": "application/json"},
                    timeout=self._timeout,
                    **kwargs,
                )

                if resp.ok:
                    try:
                        return resp.json()
                    except ValueError as exc:
                        raise PayloadAPIError(
                            "CMS returned a non-JSON response.",
                            status_code=resp.status_code,
                        ) from exc

                if resp.status_code in _RETRYABLE_STATUS_CODES:
                    logger.warning(
                        "CMS HTTP %d on attempt %d/%d – retrying in %.1fs",
                        resp.status_code,
                        attempt,
                        self._max_retries,
                        wait,
                    )
                    last_exc = PayloadAPIError(
                        f"API Error: {resp.status_code} {resp.reason}",
                        status_code=resp.status_code,
                    )
                    if attempt < self._max_retries:
                        time.sleep(wait)
                    continue

                raise self._error_from_response(resp)

            except requests.Timeout as exc:
                logger.warning(
                    "CMS timeout on attempt %d/%d – retrying in %.1fs",
                    attempt,
                    self._max_retries,
                    wait,
                )
                last_exc = exc

            except requests.ConnectionError as exc:
                logger.warning(
                    "CMS connection error on attempt %d/%d – retrying in %.1fs: %s",
                    attempt,
                    self._max_retries,
                    wait,
                    exc,
                )
                last_exc = exc

            except requests.RequestException as exc:
                raise PayloadAPIError(f"Network error: {exc}") from exc

            if attempt < self._max_retries:
                time.sleep(wait)

        if isinstance(last_exc, PayloadAPIError):
            raise last_exc
        raise PayloadAPIError(
            f"Network error: CMS request failed after {self._max_retries} attempt(s)."
        ) from last_exc

    @staticmethod
    def _error_from_response(resp: requests.Response) -> PayloadAPIError:
        """Build an error from a non-retryable response, using CMS messages."""
        message = f"API Error: {resp.status_code} {resp.reason}"
        errors: list[dict[str, Any]] = []
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("errors"):
            errors = list(body["errors"])
            message = ", ".join(str(e.get("message", e)) for e in errors)
        return PayloadAPIError(message, status_code=resp.status_code, errors=errors)

