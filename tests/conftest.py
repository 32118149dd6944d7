from __future__ import annotations

import json

import pytest
import requests

from ocutils.openshift import OpenShift

BASE = "https://ocp.test:8443"


class FakeResponse:
    def __init__(self, status_code: int, body=None):
        self.status_code = status_code
        self._body = body if body is not None else {}
        self.text = self._body if isinstance(self._body, str) else json.dumps(self._body)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        # str bodies stand in for non-JSON payloads such as HTML pages
        return json.loads(self._body) if isinstance(self._body, str) else self._body


class FakeSession:
    """Answers (method, url) pairs from a routing table and records every call."""

    def __init__(self):
        self.headers: dict = {}
        self.routes: dict = {}
        self.calls: list = []

    def add(self, method: str, path: str, status: int = 200, body=None) -> None:
        self.routes[(method, BASE + path)] = (status, body)

    def request(self, method, url, **kw):
        self.calls.append((method, url, kw))
        if (method, url) not in self.routes:
            return FakeResponse(404, {"kind": "Status", "reason": "NotFound"})
        status, body = self.routes[(method, url)]
        if isinstance(body, Exception):
            raise body
        return FakeResponse(status, body)

    def sent(self, method: str) -> list:
        return [c for c in self.calls if c[0] == method]


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def api(session) -> OpenShift:
    return OpenShift(BASE, "sha256~token", session=session)


def dc(name: str, replicas: int = 1) -> dict:
    return {"metadata": {"name": name, "namespace": "team-a"}, "spec": {"replicas": replicas}}


def scale(name: str, replicas: int) -> dict:
    return {
        "kind": "Scale",
        "apiVersion": "extensions/v1beta1",
        "metadata": {"name": name, "namespace": "team-a", "resourceVersion": "4711",
                     "creationTimestamp": "2018-03-01T10:00:00Z"},
        "spec": {"replicas": replicas},
        "status": {"replicas": replicas, "targetSelector": f"deploymentconfig={name}"},
    }


def pod(name: str, start: str | None, deleting: bool = False) -> dict:
    p = {"metadata": {"name": name, "namespace": "team-a"}, "status": {"phase": "Running"}}
    if start:
        p["status"]["startTime"] = start
    if deleting:
        p["metadata"]["deletionTimestamp"] = "2018-03-10T00:00:00Z"
    return p


def requests_connection_error() -> Exception:
    return requests.exceptions.ConnectionError("Name or service not known")
