"""
Contract service client: one bounded POST, every failure returned as Degraded.
"""

import json
import threading
import time
from datetime import date
from decimal import Decimal
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import MagicMock

import pytest
import requests

from apps.contract.client import (
    ContractProvisioningClient,
    ContractProvisioningRequest,
    Degraded,
    resolve_contract_service_url,
)


@pytest.fixture
def contract_request():
    return ContractProvisioningRequest(
        client_id=11,
        freelancer_id=22,
        offer_application_id=33,
        title="Brand identity package",
        description="Logo, colour palette and typography guide.",
        terms="Contract from offer: Brand identity package",
        amount=Decimal("200.00"),
        start_date=date(2026, 3, 1),
        end_date=date(2026, 4, 1),
    )


def _session(response=None, error=None):
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    return session


def _response(status_code=201, body=None, invalid_json=False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    content = b"<html>maintenance</html>" if invalid_json else json.dumps(body).encode()
    response.iter_content.return_value = [content]
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


class TestPayload:

    def test_camel_case_payload(self, contract_request):
        assert contract_request.to_payload() == {
            "clientId": 11,
            "freelancerId": 22,
            "offerApplicationId": 33,
            "title": "Brand identity package",
            "description": "Logo, colour palette and typography guide.",
            "terms": "Contract from offer: Brand identity package",
            "amount": "200.00",
            "startDate": "2026-03-01",
            "endDate": "2026-04-01",
            "status": "DRAFT",
        }


class TestServiceUrl:

    def test_configured_url(self, settings):
        settings.SERVICE_REGISTRY = {}
        assert resolve_contract_service_url() == "http://contract.test/api/contracts"

    def test_registry_entry_wins(self, settings):
        settings.SERVICE_REGISTRY = {"CONTRACT": "http://10.0.0.7:8083/"}
        assert resolve_contract_service_url() == "http://10.0.0.7:8083/api/contracts"


class TestProvision:

    def test_created_contract_id(self, contract_request):
        session = _session(_response(201, {"id": 501, "status": "DRAFT"}))

        result = ContractProvisioningClient(session=session, timeout=2.5).provision(contract_request)

        assert result == 501
        session.post.assert_called_once_with(
            "http://contract.test/api/contracts",
            json=contract_request.to_payload(),
            timeout=2.5,
            stream=True,
        )

    def test_timeout_comes_from_settings(self, contract_request, settings):
        settings.CONTRACT_SERVICE = dict(settings.CONTRACT_SERVICE, TIMEOUT=0.5)
        session = _session(_response(201, {"id": 1}))

        ContractProvisioningClient(session=session).provision(contract_request)

        assert session.post.call_args.kwargs["timeout"] == 0.5

    @pytest.mark.parametrize("error, reason", [
        (requests.Timeout("read timed out"), "Contract service timed out"),
        (requests.ConnectionError("refused"), "Contract service unavailable"),
    ])
    def test_transport_failures_degrade(self, contract_request, error, reason):
        result = ContractProvisioningClient(session=_session(error=error)).provision(contract_request)

        assert result == Degraded(reason)

    def test_error_status_degrades(self, contract_request):
        session = _session(_response(503, {"error": "maintenance"}))

        result = ContractProvisioningClient(session=session).provision(contract_request)

        assert result == Degraded("Contract service answered 503")

    def test_non_json_body_degrades(self, contract_request):
        session = _session(_response(201, invalid_json=True))

        result = ContractProvisioningClient(session=session).provision(contract_request)

        assert isinstance(result, Degraded)
        assert "invalid response" in result.reason

    @pytest.mark.parametrize("body", [{}, {"id": None}, {"id": "abc"}, {"id": True}, ["not", "a", "dict"]])
    def test_missing_id_degrades(self, contract_request, body):
        session = _session(_response(201, body))

        result = ContractProvisioningClient(session=session).provision(contract_request)

        assert result == Degraded("Contract service response had no contract id")

    def test_single_attempt_only(self, contract_request):
        session = _session(error=requests.ConnectionError("refused"))

        ContractProvisioningClient(session=session).provision(contract_request)

        assert session.post.call_count == 1


class _DripHandler(BaseHTTPRequestHandler):
    """
    Answers one byte at a time, each byte well within the socket read timeout,
    so only a total deadline can stop the client.
    """
    drip_interval = 0.15
    drip_headers = False

    def do_POST(self):
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        body = b'{"id": 77}'
        head = (
            b"HTTP/1.1 201 Created\r\n"
            b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n"
        )
        try:
            if self.drip_headers:
                self._drip(head + body)
            else:
                self.wfile.write(head)
                self.wfile.flush()
                self._drip(body)
        except OSError:
            pass

    def _drip(self, data):
        for i in range(len(data)):
            self.wfile.write(data[i:i + 1])
            self.wfile.flush()
            time.sleep(self.drip_interval)

    def log_message(self, format, *args):
        pass


class _HeaderDripHandler(_DripHandler):
    drip_interval = 0.05
    drip_headers = True


@pytest.fixture
def drip_server(request, settings):
    server = ThreadingHTTPServer(("127.0.0.1", 0), request.param)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    settings.SERVICE_REGISTRY = {}
    settings.CONTRACT_SERVICE = dict(
        settings.CONTRACT_SERVICE, URL=f"http://127.0.0.1:{server.server_port}"
    )
    yield server

    server.shutdown()
    server.server_close()


class TestDeadline:

    @pytest.mark.parametrize("drip_server", [_DripHandler, _HeaderDripHandler], indirect=True)
    def test_slow_drip_reply_is_cut_at_the_deadline(self, contract_request, drip_server):
        session = requests.Session()
        session.trust_env = False
        started = time.monotonic()

        result = ContractProvisioningClient(session=session, timeout=0.5).provision(contract_request)

        assert result == Degraded("Contract service timed out")
        assert time.monotonic() - started < 2.0

    def test_stalled_worker_is_not_awaited(self, contract_request):
        release = threading.Event()
        session = MagicMock(spec=requests.Session)

        def stalled_post(*args, **kwargs):
            release.wait(5)
            return _response(201, {"id": 1})

        session.post.side_effect = stalled_post
        started = time.monotonic()

        result = ContractProvisioningClient(session=session, timeout=0.3).provision(contract_request)

        release.set()
        assert result == Degraded("Contract service timed out")
        assert time.monotonic() - started < 2.0
