"""Tests for the error envelope rendered by the exception handlers."""

import httpx
import pytest
from fastapi import FastAPI
from pydantic import BaseModel

from storefront_admin.api import register_exception_handlers
from storefront_admin.core.exceptions import DatabaseError, NotFoundError


class Payload(BaseModel):
    count: int


def build_app(is_production: bool) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app, is_production=is_production)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Product", "p1")

    @app.get("/database")
    async def database():
        raise DatabaseError("connection refused on 10.0.0.5")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unexpected")

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    return app


async def call(app: FastAPI, method: str, path: str, **kwargs) -> httpx.Response:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await client.request(method, path, **kwargs)


class TestExceptionHandlers:
    """Test status mapping and masking."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        response = await call(build_app(True), "GET", "/missing")

        assert response.status_code == 404
        assert response.json() == {"error": {
            "code": "RESOURCE_NOT_FOUND",
            "message": "Product not found",
            "details": {"resource": "Product", "id": "p1"},
            "type": "NotFoundError",
        }}

    @pytest.mark.asyncio
    async def test_internal_errors_are_masked_in_production(self):
        response = await call(build_app(True), "GET", "/database")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "An unexpected error occurred"
        assert "10.0.0.5" not in response.text

    @pytest.mark.asyncio
    async def test_internal_errors_visible_in_development(self):
        response = await call(build_app(False), "GET", "/database")

        assert response.status_code == 500
        assert "connection refused" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_unhandled_exception(self):
        response = await call(build_app(True), "GET", "/crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    @pytest.mark.asyncio
    async def test_request_validation(self):
        response = await call(build_app(True), "POST", "/payload", json={"count": "many"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["field"] == "count"
