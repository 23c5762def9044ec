"""Tests for site_link_checker.http_client."""

from __future__ import annotations

import pytest
import requests
import responses

from site_link_checker.http_client import (
    DEFAULT_USER_AGENT,
    REQUEST_TIMEOUT,
    HttpClient,
    outcome_for_status,
    validate_external,
)
from site_link_checker.models import LinkStatus

URL = "https://example.com/page"


@pytest.fixture
def http():
    session = requests.Session()
    yield HttpClient(session, timeout_s=1.0, max_retries=2, backoff_s=0)
    session.close()


class TestValidateExternal:
    @responses.activate
    @pytest.mark.parametrize("status", [200, 204, 301, 304, 399])
    def test_2xx_3xx_valid(self, http, status):
        responses.add(responses.HEAD, URL, status=status)
        outcome = validate_external(http, URL)
        assert outcome.status == LinkStatus.VALID
        assert outcome.status_code == status
        assert outcome.error is None

    @responses.activate
    def test_404_broken(self, http):
        responses.add(responses.HEAD, URL, status=404)
        outcome = validate_external(http, URL)
        assert outcome.status == LinkStatus.BROKEN
        assert outcome.status_code == 404
        assert outcome.error == "Client error: 404"

    @responses.activate
    def test_500_warning(self, http):
        responses.add(responses.HEAD, URL, status=500)
        outcome = validate_external(http, URL)
        assert outcome.status == LinkStatus.WARNING
        assert outcome.status_code == 500
        assert outcome.error == "Server error: 500"

    @responses.activate
    def test_timeout_warning_without_code(self, http):
        responses.add(responses.HEAD, URL, body=requests.exceptions.ReadTimeout("slow"))
        outcome = validate_external(http, URL)
        assert outcome.status == LinkStatus.WARNING
        assert outcome.status_code is None
        assert outcome.error == REQUEST_TIMEOUT

    @responses.activate
    def test_connect_timeout_is_a_timeout(self, http):
        responses.add(
            responses.HEAD, URL, body=requests.exceptions.ConnectTimeout("connect")
        )
        assert validate_external(http, URL).error == REQUEST_TIMEOUT

    @responses.activate
    def test_transport_error_broken_with_message(self, http):
        responses.add(
            responses.HEAD, URL, body=requests.exceptions.ConnectionError("refused")
        )
        outcome = validate_external(http, URL)
        assert outcome.status == LinkStatus.BROKEN
        assert outcome.status_code is None
        assert "refused" in outcome.error

    def test_malformed_url_broken(self, http):
        outcome = validate_external(http, "http:/broken")
        assert outcome.status == LinkStatus.BROKEN
        assert outcome.status_code is None
        assert outcome.error


class TestHttpClientHead:
    @responses.activate
    def test_sends_user_agent_and_no_redirects(self, http):
        responses.add(
            responses.HEAD,
            URL,
            status=301,
            headers={"Location": "https://example.com/elsewhere"},
        )
        res = http.head(URL)
        assert res.status_code == 301
        assert len(responses.calls) == 1
        assert responses.calls[0].request.headers["User-Agent"] == DEFAULT_USER_AGENT

    @responses.activate
    def test_retries_transport_errors(self, http):
        responses.add(responses.HEAD, URL, body=requests.exceptions.ConnectionError("x"))
        responses.add(responses.HEAD, URL, status=200)
        assert http.head(URL).status_code == 200
        assert len(responses.calls) == 2

    @responses.activate
    def test_gives_up_after_max_retries(self, http):
        responses.add(responses.HEAD, URL, body=requests.exceptions.ReadTimeout("slow"))
        with pytest.raises(requests.exceptions.Timeout):
            http.head(URL)
        assert len(responses.calls) == 3

    @responses.activate
    def test_status_codes_are_not_retried(self, http):
        responses.add(responses.HEAD, URL, status=503)
        assert http.head(URL).status_code == 503
        assert len(responses.calls) == 1

    @responses.activate
    def test_zero_retries(self):
        responses.add(responses.HEAD, URL, body=requests.exceptions.ConnectionError("x"))
        with requests.Session() as session:
            client = HttpClient(session, max_retries=0, backoff_s=0)
            with pytest.raises(requests.exceptions.ConnectionError):
                client.head(URL)
        assert len(responses.calls) == 1


@pytest.mark.parametrize(
    "code, status",
    [
        (200, LinkStatus.VALID),
        (302, LinkStatus.VALID),
        (410, LinkStatus.BROKEN),
        (503, LinkStatus.WARNING),
        (101, LinkStatus.WARNING),
    ],
)
def test_outcome_for_status(code, status):
    assert outcome_for_status(code).status == status


def test_codes_below_200_map_to_server_error():
    outcome = outcome_for_status(101)
    assert outcome.status_code == 101
    assert outcome.error == "Server error: 101"
