def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["trace_id"]


def test_health_echoes_trace_header(client) -> None:
    response = client.get("/health", headers={"X-Trace-ID": "trace-abc"})
    assert response.headers["X-Trace-ID"] == "trace-abc"
    assert response.json()["trace_id"] == "trace-abc"


def test_openapi_documents_error_envelope(client) -> None:
    schema = client.get("/openapi.json").json()
    assert "ApiErrorResponse" in schema["components"]["schemas"]
    delete_responses = schema["paths"]["/api/users/{username}"]["delete"]["responses"]
    assert delete_responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ApiErrorResponse")
