"""Concurrent validation of every link found in a page."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, Iterable

from linkhealth.checker.models import ValidationResult
from linkhealth.checker.validator import check_redirect, new_client
from linkhealth.config import settings


def _failed(url: str, host_url: str, message: str) -> ValidationResult:
    return ValidationResult(
        url=url, success=False, message=message, full_url=host_url + url
    )


def _result_of(future: Future, url: str, host_url: str) -> ValidationResult:
    """Unwrap a finished check; an unexpected exception becomes a failed result."""
    try:
        return future.result()
    except Exception as exc:
        print(f"[VALIDATING] ✗ Unexpected error for {url!r}: {exc}")
        return _failed(url, host_url, str(exc))


def validate_all(
    urls: Iterable[str],
    host_url: str,
    *,
    max_workers: int | None = None,
    overall_timeout: float | None = None,
    require_ok_status: bool | None = None,
    on_result: Callable[[ValidationResult], None] | None = None,
) -> list[ValidationResult]:
    """Check every URL in *urls* against *host_url* in parallel.

    Exactly one result is returned per input element, duplicates included,
    in completion order.  A failing link never aborts its siblings: transport
    errors, content-shape failures and unexpected exceptions all become failed
    results.

    Args:
        urls: Links to check, usually from
            :func:`~linkhealth.checker.extractor.iter_links`.
        host_url: Prefix of the environment under test.
        max_workers: Upper bound on in-flight requests.  Defaults to
            ``settings.max_concurrent_checks``.
        overall_timeout: Seconds the whole batch may take.  Links still
            pending at the deadline are cancelled and reported as failed.
        require_ok_status: Forwarded to
            :func:`~linkhealth.checker.validator.check_redirect`.  Defaults
            to ``settings.require_ok_status``.
        on_result: Called with each result as soon as it is collected.

    Returns:
        A list of :class:`ValidationResult`, ``len(urls)`` long.
    """
    url_list = list(urls)
    if not url_list:
        return []

    workers = min(max_workers or settings.max_concurrent_checks, len(url_list))
    if require_ok_status is None:
        require_ok_status = settings.require_ok_status

    results: list[ValidationResult] = []
    collected: set[Future] = set()

    def _collect(future: Future, result: ValidationResult) -> None:
        collected.add(future)
        results.append(result)
        if on_result is not None:
            on_result(result)

    print(
        f"[VALIDATING] Checking {len(url_list)} link(s) against {host_url!r} "
        f"({workers} worker(s)) …"
    )

    with new_client() as client:
        pool = ThreadPoolExecutor(max_workers=workers)
        timed_out = False
        try:
            future_to_url = {
                pool.submit(
                    check_redirect,
                    url,
                    host_url,
                    client,
                    require_ok_status=require_ok_status,
                ): url
                for url in url_list
            }
            try:
                for future in as_completed(future_to_url, timeout=overall_timeout):
                    url = future_to_url[future]
                    _collect(future, _result_of(future, url, host_url))
            except FuturesTimeoutError:
                timed_out = True
                print(
                    f"[VALIDATING] ⚠ Batch deadline of {overall_timeout}s reached; "
                    "cancelling pending checks."
                )
                for future, url in future_to_url.items():
                    if future in collected:
                        continue
                    if future.done() and not future.cancelled():
                        _collect(future, _result_of(future, url, host_url))
                        continue
                    future.cancel()
                    _collect(
                        future,
                        _failed(
                            url,
                            host_url,
                            f"Validation did not finish within {overall_timeout}s",
                        ),
                    )
        finally:
            pool.shutdown(wait=not timed_out, cancel_futures=True)

    ok = sum(1 for r in results if r.success)
    print(f"[VALIDATING] Done: {ok} of {len(results)} link(s) OK.")
    return results
