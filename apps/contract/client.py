"""
Client for the Contract service.

Accepting an application provisions a contract in the Contract service, which
is deployed and fails independently of this one. The call is made once,
bounded by a wall-clock deadline, and never raises: any failure comes back as
``Degraded`` so the acceptance that already committed locally stays authoritative.
"""

import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024


@dataclass(frozen=True)
class ContractProvisioningRequest:
    client_id: int
    freelancer_id: int
    offer_application_id: int
    title: str
    description: str
    terms: str
    amount: Decimal
    start_date: date
    end_date: Optional[date] = None
    status: str = "DRAFT"

    def to_payload(self) -> dict:
        """
        JSON body in the Contract service's field names; null fields omitted.
        """
        payload = {
            "clientId": self.client_id,
            "freelancerId": self.freelancer_id,
            "offerApplicationId": self.offer_application_id,
            "title": self.title,
            "description": self.description,
            "terms": self.terms,
            "amount": str(self.amount) if self.amount is not None else None,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "status": self.status,
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class Degraded:
    """
    Provisioning did not succeed. Carries no contract id, only why.
    """
    reason: str


ProvisioningResult = Union[int, Degraded]


def resolve_contract_service_url() -> str:
    """
    Base URL from the service registry when discovery filled it in,
    otherwise the directly configured URL.
    """
    config = settings.CONTRACT_SERVICE
    registry = getattr(settings, "SERVICE_REGISTRY", {}) or {}

    base_url = registry.get(config.get("NAME", "CONTRACT")) or config["URL"]
    return base_url.rstrip("/") + config.get("PATH", "/api/contracts")


class ContractProvisioningClient:

    def __init__(self, session=None, timeout=None):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.CONTRACT_SERVICE["TIMEOUT"]

    def _post(self, url, payload, deadline):
        """
        Runs in a worker thread. Streams the body so a server that drips bytes
        cannot keep the read alive past the deadline.
        """
        with self.session.post(url, json=payload, timeout=self.timeout, stream=True) as response:
            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise requests.Timeout(f"Contract service exceeded the {self.timeout}s deadline")
                chunks.append(chunk)
            return response.status_code, response.ok, b"".join(chunks)

    def provision(self, request: ContractProvisioningRequest) -> ProvisioningResult:
        url = resolve_contract_service_url()
        deadline = time.monotonic() + self.timeout

        # The requests timeout only bounds each socket read, so the whole call
        # is also bounded by the future.
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="contract-provision")
        try:
            future = executor.submit(self._post, url, request.to_payload(), deadline)
            status_code, ok, content = future.result(timeout=self.timeout)
        except (FutureTimeout, requests.Timeout):
            logger.warning(
                "Contract service timed out after %ss for offerApplicationId=%s",
                self.timeout, request.offer_application_id
            )
            return Degraded("Contract service timed out")
        except requests.RequestException as e:
            logger.warning(
                "Contract service unreachable for offerApplicationId=%s: %s",
                request.offer_application_id, e
            )
            return Degraded("Contract service unavailable")
        finally:
            executor.shutdown(wait=False)

        if not ok:
            logger.warning(
                "Contract service answered %s for offerApplicationId=%s",
                status_code, request.offer_application_id
            )
            return Degraded(f"Contract service answered {status_code}")

        try:
            body = json.loads(content)
        except ValueError:
            logger.warning(
                "Contract service returned a non-JSON body for offerApplicationId=%s",
                request.offer_application_id
            )
            return Degraded("Contract service returned an invalid response")

        contract_id = body.get("id") if isinstance(body, dict) else None
        if isinstance(contract_id, bool) or not isinstance(contract_id, (int, float)):
            logger.warning("Contract created but response body missing id: %s", body)
            return Degraded("Contract service response had no contract id")

        contract_id = int(contract_id)
        logger.info(
            "Contract created id=%s for offerApplicationId=%s, clientId=%s, freelancerId=%s",
            contract_id, request.offer_application_id, request.client_id, request.freelancer_id
        )
        return contract_id
