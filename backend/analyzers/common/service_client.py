import logging
import os
import time
from typing import Any, Dict, Optional

import requests


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_SECONDS = 20
DEFAULT_RETRIES = 2
DEFAULT_API_URL = "http://127.0.0.1:8000"


def analyze_remote(
    code: str,
    language: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    retries: int = DEFAULT_RETRIES,
) -> Dict[str, Any]:
    """
    Run an analysis on a running Debug Helper API.

    Returns:
      {
        "ok": bool,
        "data": dict,
        "error": str | None,
      }
    """
    payload: Dict[str, Any] = {"code": code}
    if language:
        payload["language"] = language
    return _post("/analyze", payload, base_url, timeout_seconds, retries, expect_json=True)


def report_remote(
    code: str,
    language: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    retries: int = DEFAULT_RETRIES,
) -> Dict[str, Any]:
    """
    Fetch the markdown report for a snippet. data carries {"markdown": str}.
    """
    payload: Dict[str, Any] = {"code": code}
    if language:
        payload["language"] = language
    return _post("/report", payload, base_url, timeout_seconds, retries, expect_json=False)


def _resolve_base_url(base_url: Optional[str]) -> str:
    url = base_url or os.environ.get("DEBUG_HELPER_API_URL", DEFAULT_API_URL)
    return url.rstrip("/")


def _post(
    path: str,
    payload: Dict[str, Any],
    base_url: Optional[str],
    timeout_seconds: int,
    retries: int,
    expect_json: bool,
) -> Dict[str, Any]:
    url = f"{_resolve_base_url(base_url)}{path}"
    logger.debug("Debug Helper request url=%s", url)

    last_error: Optional[str] = None
    for attempt in range(retries + 1):
        try:
            response = requests.post(url, json=payload, timeout=timeout_seconds)
            if response.status_code >= 500:
                last_error = f"HTTP {response.status_code}: {response.text}"
                logger.warning("Debug Helper error: %s", last_error)
            elif response.status_code >= 400:
                # client errors won't change on retry
                return _safe_error(f"HTTP {response.status_code}: {response.text}")
            elif expect_json:
                return {"ok": True, "data": response.json(), "error": None}
            else:
                return {"ok": True, "data": {"markdown": response.text}, "error": None}
        except Exception as exc:
            last_error = str(exc)
            logger.warning("Debug Helper request failed: %s", last_error)

        if attempt < retries:
            time.sleep(0.5 * (attempt + 1))

    return _safe_error(last_error or "Unknown error")


def _safe_error(message: str) -> Dict[str, Any]:
    return {
        "ok": False,
        "data": {},
        "error": message,
    }
