"""
Shared test fixtures for the RailData client.

Provides:
- Fake RailData server (multipart POST in, JSON out)
- Temporary config files
"""

import json

import pytest
from pytest_httpserver import HTTPServer
from werkzeug.wrappers import Response


# ---------------------------------------------------------------------------
# Fake RailData server
# ---------------------------------------------------------------------------

class FakeRailData:
    """
    A real HTTP server that impersonates the RailData API.

    Each API method is a path; tests register a response (or a function of
    the submitted form fields returning one) per method. Every call is
    recorded as (method, form fields).
    """

    def __init__(self, server: HTTPServer):
        self.server = server
        self.calls: list[tuple[str, dict]] = []

    @property
    def base_url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    def on(self, method: str, respond) -> None:
        def handler(request):
            form = request.form.to_dict()
            self.calls.append((method, form))
            if isinstance(respond, Response):
                return respond
            return respond(form)

        self.server.expect_request(f"/{method}", method="POST").respond_with_handler(
            handler
        )

    def calls_to(self, method: str) -> list[dict]:
        return [form for name, form in self.calls if name == method]

    @staticmethod
    def json(body, status: int = 200) -> Response:
        if not isinstance(body, str):
            body = json.dumps(body)
        return Response(body, status=status, content_type="application/json")

    @staticmethod
    def error(message: str, status: int = 500) -> Response:
        return FakeRailData.json({"errorMessage": message}, status=status)

    @staticmethod
    def empty() -> Response:
        return Response(b"", status=204)


@pytest.fixture()
def fake_raildata():
    server = HTTPServer(host="127.0.0.1")
    server.start()
    yield FakeRailData(server)
    server.clear()
    if server.is_running():
        server.stop()


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------

@pytest.fixture()
def config_file(fake_raildata, tmp_path):
    """
    Write a temporary config.yaml that points at the fake RailData server.
    Returns the path to the config file.
    """
    config_content = f"""\
base_url: "{fake_raildata.base_url}"
timeout: 5
token_file: "{tmp_path / 'token.txt'}"
"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(config_content)
    return str(config_path)
