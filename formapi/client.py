import datetime
import logging
from typing import Any, Dict, Optional

import httpx

from formapi.models.form import FormConfig
from formapi.schema import generate_schema
from formapi.validation import validate_form

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class FormValidationError(Exception):
    """Raised before any request is made when fields fail validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class SubmissionError(Exception):
    def __init__(self, status_code: int, body: Any):
        super().__init__(f"Submission rejected with status {status_code}")
        self.status_code = status_code
        self.body = body


def to_wire(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_wire(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_wire(v) for v in value]
    return value


class FormClient:
    """Validates a form locally and posts it to the validate endpoint.

    Pass an existing httpx.Client (or a FastAPI TestClient) to reuse its
    base URL and transport.
    """

    def __init__(self, config: FormConfig, base_url: str = "http://localhost:8000", client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=DEFAULT_TIMEOUT)

    def check(self, values: Dict[str, Any]) -> Dict[str, str]:
        return validate_form(self.config, values)

    def submit(self, values: Dict[str, Any]) -> Dict[str, Any]:
        errors = self.check(values)
        if errors:
            raise FormValidationError(errors)

        values = {k: v for k, v in values.items() if v is not None}
        payload = {"values": to_wire(values), "schema": generate_schema(self.config)}
        r = self._client.post("/api/validate", json=payload)
        body = r.json()
        if r.status_code != 200:
            logger.warning("Submission rejected (%s): %s", r.status_code, body)
            raise SubmissionError(r.status_code, body)
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
