import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from harbormaster.config import PollSettings
from harbormaster.modules.digitalocean import DigitalOceanClient


@dataclass
class Call:
    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    payload: Optional[Dict[str, Any]] = None


class FakeHTTP:
    """Stands in for ProviderClient and records every request.

    A route answers with a dict (every time), a list (one entry per call,
    the last one repeating), a callable taking the Call, or an exception.
    """

    def __init__(self):
        self.routes: Dict[tuple, Any] = {}
        self.calls: List[Call] = []

    def on(self, method: str, path: str, answer: Any) -> "FakeHTTP":
        self.routes[(method, path)] = list(answer) if isinstance(answer, list) else answer
        return self

    def _dispatch(self, call: Call):
        self.calls.append(call)
        answer = self.routes.get((call.method, call.path))
        if answer is None:
            raise AssertionError(f"unexpected request {call.method} {call.path}")
        if isinstance(answer, list):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if callable(answer):
            answer = answer(call)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def get(self, path, params=None):
        return self._dispatch(Call("GET", path, params=params))

    def post(self, path, payload):
        return self._dispatch(Call("POST", path, payload=payload))

    def put(self, path, payload):
        return self._dispatch(Call("PUT", path, payload=payload))

    def delete(self, path, expected_status=None):
        self._dispatch(Call("DELETE", path))

    @property
    def mutations(self) -> List[Call]:
        return [c for c in self.calls if c.method != "GET"]

    def requests_to(self, path: str) -> List[Call]:
        return [c for c in self.calls if c.path == path]


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def droplet(id=1, name="web-1", memory=1024, status="active", locked=False, ip="203.0.113.10"):
    return {
        "id": id,
        "name": name,
        "memory": memory,
        "status": status,
        "locked": locked,
        "networks": {"v4": [{"ip_address": ip, "netmask": "255.255.240.0", "gateway": "203.0.113.1", "type": "public"}]},
    }


@pytest.fixture
def fake_http():
    return FakeHTTP()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def settings():
    return PollSettings(
        status_attempts=10,
        status_interval=3.0,
        lock_interval=20.0,
        create_settle_delay=5.0,
        power_off_settle_delay=5.0,
    )


@pytest.fixture
def do_client(fake_http, sleep, settings):
    return DigitalOceanClient(fake_http, settings=settings, sleep=sleep)


@pytest.fixture(autouse=True)
def reset_harbormaster_logger():
    yield
    logger = logging.getLogger("harbormaster")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
