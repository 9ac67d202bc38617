# ==============================================
# Tests for fetch_sample_records
# ==============================================
#
# requests.get is replaced with a fake that plays back
# a scripted list of responses (or exceptions).
# ==============================================

import pytest
import requests

from profilegen.exceptions import SampleFetchError
from profilegen.profiling import sample_fetcher
from profilegen.profiling.sample_fetcher import fetch_sample_records


class FakeResponse:
    def __init__(self, payload=None, status=200, body_is_json=True):
        self.payload = payload
        self.status = status
        self.body_is_json = body_is_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if not self.body_is_json:
            raise ValueError("Expecting value")
        return self.payload


@pytest.fixture
def script(monkeypatch):
    """Queue responses; each requests.get call pops the next one."""
    queue = []
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(sample_fetcher.requests, "get", fake_get)
    return queue, calls


class TestFetch:
    def test_one_record_per_request(self, script):
        queue, calls = script
        queue.extend(FakeResponse({"id": i}) for i in range(3))
        records = fetch_sample_records("http://api/record", count=3, timeout=2.5)
        assert records == [{"id": 0}, {"id": 1}, {"id": 2}]
        assert calls == [("http://api/record", 2.5)] * 3

    def test_list_endpoint_is_read_once(self, script):
        queue, calls = script
        queue.append(FakeResponse([{"id": 1}, {"id": 2}]))
        assert fetch_sample_records("http://api/records", count=5) == [{"id": 1}, {"id": 2}]
        assert len(calls) == 1

    def test_list_is_truncated_to_count(self, script):
        queue, _ = script
        queue.append(FakeResponse([{"id": i} for i in range(10)]))
        assert len(fetch_sample_records("http://api/records", count=4)) == 4

    def test_transient_errors_are_retried(self, script):
        queue, _ = script
        queue.extend([
            requests.ConnectionError("refused"),
            FakeResponse({"id": 1}),
            FakeResponse(status=503),
            FakeResponse({"id": 2}),
        ])
        assert fetch_sample_records("http://api/record", count=2) == [{"id": 1}, {"id": 2}]

    def test_too_many_errors(self, script):
        queue, _ = script
        queue.extend(requests.Timeout("slow") for _ in range(3))
        with pytest.raises(SampleFetchError) as exc:
            fetch_sample_records("http://api/record", count=2, max_errors=3)
        assert exc.value.rule == "sample_fetch"

    def test_non_json_body(self, script):
        queue, _ = script
        queue.append(FakeResponse(body_is_json=False))
        with pytest.raises(SampleFetchError):
            fetch_sample_records("http://api/record", count=1)

    def test_non_record_item(self, script):
        queue, _ = script
        queue.append(FakeResponse([1, 2]))
        with pytest.raises(SampleFetchError):
            fetch_sample_records("http://api/records", count=2)

    def test_count_must_be_positive(self, script):
        with pytest.raises(SampleFetchError):
            fetch_sample_records("http://api/record", count=0)
