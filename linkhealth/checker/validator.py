"""Redirect validation: request one link against the target environment."""

from __future__ import annotations

import httpx

from linkhealth.checker.models import ValidationResult, ValidationTarget
from linkhealth.config import settings

# ---------------------------------------------------------------------------
# Content-shape rules: URL suffix -> (marker the body must contain, message)
# ---------------------------------------------------------------------------
_CONTENT_RULES = [
    (
        "?wsdl",
        "<wsdl:definitions",
        "URL was ending with ?wsdl but did not contain <wsdl:definition!",
    ),
    (
        ".xsd",
        "<xs:schema",
        "URL was ending with .xsd but did not contain <xs:schema!",
    ),
]

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; LinkHealth-Bot/1.0)"
}


def new_client(timeout: float | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` configured for redirect checks."""
    return httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=settings.request_timeout if timeout is None else timeout,
        follow_redirects=True,
    )


def _apply_content_rules(result: ValidationResult, body: str) -> None:
    for suffix, marker, message in _CONTENT_RULES:
        if result.full_url.endswith(suffix):
            if marker not in body:
                result.success = False
                result.message = message
            return


def _get(client: httpx.Client, target: ValidationTarget) -> ValidationResult:
    try:
        response = client.get(target.full_url)
        body = response.text
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return ValidationResult(
            url=target.url,
            success=False,
            message=str(exc) or exc.__class__.__name__,
            full_url=target.full_url,
        )

    return ValidationResult(
        url=target.url,
        success=True,
        message=body,
        full_url=target.full_url,
        status_code=response.status_code,
    )


def check_redirect(
    url: str,
    host_url: str,
    client: httpx.Client | None = None,
    *,
    require_ok_status: bool = False,
) -> ValidationResult:
    """Request ``host_url + url`` once and judge the response.

    A transport failure (DNS, connection, timeout, read error) is a failed
    result carrying the error text.  Otherwise the check succeeds with the
    response body as its message, unless:

    * the URL ends with ``?wsdl`` and the body lacks ``<wsdl:definitions``;
    * the URL ends with ``.xsd`` and the body lacks ``<xs:schema``;
    * *require_ok_status* is set and the final status code is not 2xx.

    HTTP status codes are ignored unless *require_ok_status* is set.

    Args:
        url: Link as written in the page, usually a path.
        host_url: Prefix of the environment under test.
        client: Shared client.  A short-lived one is created when omitted.
        require_ok_status: Treat non-2xx responses as failures.

    Returns:
        A :class:`ValidationResult`; this function never raises for
        network problems.
    """
    target = ValidationTarget.for_host(url, host_url)

    if client is None:
        with new_client() as own_client:
            result = _get(own_client, target)
    else:
        result = _get(client, target)

    if not result.success:
        return result

    body = result.message
    if require_ok_status and not 200 <= (result.status_code or 0) < 300:
        result.success = False
        result.message = f"HTTP {result.status_code} returned by {target.full_url}"
        return result

    _apply_content_rules(result, body)
    return result
