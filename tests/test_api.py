import pytest
from conftest import make_request, make_xr
from httpx import ASGITransport, AsyncClient
from xdeployment.api.main import create_app


@pytest.mark.asyncio
async def test_run_function_endpoint(gateway_input) -> None:
    app = create_app()
    req = make_request(make_xr(port=8080, hostname="test.example.com"), input=gateway_input)

    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/v1/run-function", json=req.model_dump(mode="json", exclude_none=True)
        )

    assert response.status_code == 200
    body = response.json()
    assert body["meta"] == {"tag": "test", "ttl": 60}
    assert sorted(body["desired"]["resources"]) == [
        "xdeployment-deployment-test-app",
        "xdeployment-httproute-test-app",
        "xdeployment-service-test-app",
    ]
    assert [c["type"] for c in body["conditions"]] == [
        "DeploymentReady",
        "ServiceReady",
        "HttpRouteReady",
    ]
    assert body["conditions"][0]["status"] == "False"
    assert body["conditions"][0]["target"] == "Composite"


@pytest.mark.asyncio
async def test_run_function_reports_failure_in_body() -> None:
    app = create_app()
    req = make_request(make_xr(), input={"gateway": "nope"})

    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/run-function", json=req.model_dump(mode="json"))

    assert response.status_code == 200
    body = response.json()
    assert body["conditions"][0]["reason"] == "InternalError"
    assert body["conditions"][0]["target"] == "CompositeAndClaim"
    assert body["results"][0]["severity"] == "Fatal"


@pytest.mark.asyncio
async def test_malformed_request_rejected() -> None:
    app = create_app()
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/v1/run-function", json={"observed": {"resources": []}})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_health_and_ready() -> None:
    app = create_app()
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        health = await client.get("/health")
        ready = await client.get("/ready")

    assert health.json()["status"] == "healthy"
    body = ready.json()
    assert body["status"] == "ready"
    assert body["composers"] == ["deployment", "service", "httproute"]
    assert body["problems"] == []
