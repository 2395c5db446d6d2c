import json
import httpx
import pytest
from inventory_service.client.cli import main

@pytest.fixture
def token_file(tmp_path, monkeypatch):
    path = tmp_path / "mservice.token"
    path.write_text("tok-123\n")
    monkeypatch.setenv("INV_TOKEN_FILE", str(path))
    monkeypatch.setenv("INV_SERVER_URL", "http://inventory.test")
    return path

class Recorder:
    def __init__(self, status_code=200, payload=None):
        self.requests = []
        self.status_code = status_code
        self.payload = payload if payload is not None else {"error_code": 0, "error_message": ""}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

def test_create_facility(token_file, capsys):
    recorder = Recorder(payload={"error_code": 0, "error_message": "", "version": 1, "facility_id": 101})
    code = main(["create_facility", "--name", "Warehouse A", "-j", '{"zone": 1}'],
                transport=httpx.MockTransport(recorder))
    assert code == 0

    [request] = recorder.requests
    assert request.method == "POST"
    assert str(request.url) == "http://inventory.test/api/facility"
    assert request.headers["Authorization"] == "Bearer tok-123"
    assert json.loads(request.content) == {"facility_name": "Warehouse A", "json_data": '{"zone": 1}'}
    assert json.loads(capsys.readouterr().out)["facility_id"] == 101

def test_delete_puts_version_in_path(token_file):
    recorder = Recorder()
    assert main(["delete_product", "--id", "7", "--version", "3"], transport=httpx.MockTransport(recorder)) == 0
    [request] = recorder.requests
    assert request.method == "DELETE"
    assert request.url.path == "/api/product/7/3"

def test_get_items_by_facility(token_file):
    recorder = Recorder()
    main(["get_items_by_facility", "--facility", "12"], transport=httpx.MockTransport(recorder))
    assert recorder.requests[0].url.path == "/api/items/facility/12"

def test_create_entity_schema_sends_schema(token_file):
    recorder = Recorder()
    main(["create_entity_schema", "--entity_name", "product", "-j", "{}"], transport=httpx.MockTransport(recorder))
    assert json.loads(recorder.requests[0].content) == {"entity_name": "product", "json_schema": "{}"}

def test_missing_parameter(token_file, capsys):
    recorder = Recorder()
    assert main(["get_facility"], transport=httpx.MockTransport(recorder)) == 2
    assert "id parameter missing" in capsys.readouterr().err
    assert recorder.requests == []

def test_missing_json_flag_uses_flag_name(token_file, capsys):
    assert main(["create_entity_schema", "--entity_name", "product"],
                transport=httpx.MockTransport(Recorder())) == 2
    assert "j parameter missing" in capsys.readouterr().err

def test_no_token_file_sends_no_header(tmp_path, monkeypatch):
    monkeypatch.setenv("INV_TOKEN_FILE", str(tmp_path / "absent"))
    recorder = Recorder()
    assert main(["get_server_version"], transport=httpx.MockTransport(recorder)) == 0
    assert "Authorization" not in recorder.requests[0].headers

def test_error_response_is_still_printed(token_file, capsys):
    recorder = Recorder(status_code=401, payload={"error_code": 401, "error_message": "not authorized"})
    assert main(["get_facilities"], transport=httpx.MockTransport(recorder)) == 0
    assert json.loads(capsys.readouterr().out)["error_code"] == 401

def test_non_json_response(token_file, capsys):
    transport = httpx.MockTransport(lambda request: httpx.Response(502, content=b""))
    assert main(["get_facilities"], transport=transport) == 0
    assert "http status: 502" in capsys.readouterr().out

def test_connection_error(token_file, capsys):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)
    assert main(["get_facilities"], transport=httpx.MockTransport(refuse)) == 1
    assert "request failed" in capsys.readouterr().err
