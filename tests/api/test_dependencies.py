# tests/api/test_dependencies.py
from __future__ import annotations

from starlette.requests import Request

from portfolio_backend.api.dependencies import UNKNOWN_CLIENT, resolve_client_ip


def _request(headers: dict[str, str] | None = None, client: tuple[str, int] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/contact",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def test_first_forwarded_hop_wins() -> None:
    request = _request({"X-Forwarded-For": " 1.2.3.4 , 10.0.0.1"}, client=("10.0.0.1", 5000))
    assert resolve_client_ip(request) == "1.2.3.4"


def test_falls_back_to_socket_peer() -> None:
    assert resolve_client_ip(_request(client=("192.0.2.5", 5000))) == "192.0.2.5"


def test_empty_forwarded_header_is_ignored() -> None:
    assert resolve_client_ip(_request({"X-Forwarded-For": " "}, client=("192.0.2.5", 5000))) == "192.0.2.5"


def test_unknown_without_client_address() -> None:
    assert resolve_client_ip(_request()) == UNKNOWN_CLIENT == "unknown"
