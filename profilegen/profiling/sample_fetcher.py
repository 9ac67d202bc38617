"""
Fetch sample records from an HTTP endpoint.

The endpoint returns either one record per request or a JSON list of
records; both are accepted. Used when a dataset has no profile yet
and only a live API to sample from.
"""

from typing import Any, Dict, List

import requests

from profilegen.exceptions import SampleFetchError
from profilegen.logger import get_logger

logger = get_logger(__name__)


def fetch_sample_records(
    url: str,
    count: int = 10,
    timeout: float = 10.0,
    max_errors: int = 3,
) -> List[Dict[str, Any]]:
    """
    Pull up to `count` records from the API.

    Args:
        url: Endpoint returning a JSON record or list of records
        count: Number of records wanted
        timeout: Per-request timeout in seconds
        max_errors: Request failures tolerated before giving up

    Returns:
        The sampled records (never more than `count`)

    Raises:
        SampleFetchError: too many request errors, or a non-JSON body
    """
    if count <= 0:
        raise SampleFetchError(f"Sample count must be positive, got {count}")

    records: List[Dict[str, Any]] = []
    errors = 0

    while len(records) < count:
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            errors += 1
            logger.warning("Sample request to %s failed (%d/%d): %s", url, errors, max_errors, e)
            if errors >= max_errors:
                raise SampleFetchError(
                    f"Giving up on {url} after {errors} failed requests: {e}"
                ) from e
            continue

        try:
            payload = response.json()
        except ValueError as e:
            raise SampleFetchError(f"Response from {url} is not JSON: {e}") from e

        batch = payload if isinstance(payload, list) else [payload]
        if not batch:
            break
        for record in batch:
            if not isinstance(record, dict):
                raise SampleFetchError(
                    f"Response from {url} holds a {type(record).__name__}, expected a record"
                )
            records.append(record)
            if len(records) >= count:
                break

        # A list endpoint answers everything it has in one go
        if isinstance(payload, list):
            break

    logger.info("Fetched %d sample records from %s", len(records), url)
    return records
