"""Integration tests for API endpoints."""

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.engine import get_db
from app.domain.errors import IllegalStateError, NotFoundError
from app.main import app
from app.models import Base

GOOD_METADATA = {
    "width": 1920, "height": 1080, "file_size": 3 * 1024 * 1024,
    "image_format": "JPEG", "color_space": "sRGB", "dpi": 150,
}
BAD_METADATA = {
    "width": 800, "height": 600, "file_size": 2 * 1024 * 1024,
    "image_format": "BMP", "color_space": "RGB",
}


@pytest_asyncio.fixture
async def client():
    """Create a test client backed by an in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
    await engine.dispose()


async def _create_order(client, number="QC-1001") -> dict:
    resp = await client.post("/api/orders", json={"order_number": number, "created_by": "planner"})
    assert resp.status_code == 201
    return resp.json()


async def _upload(client, order_id, template="CLOSE_UP_OF_WELD", metadata=None) -> dict:
    body = {"template": template, "image_path": "/img/weld.jpg", "uploaded_by": "tech"}
    if metadata is not None:
        body["metadata"] = metadata
    resp = await client.post(f"/api/orders/{order_id}/photos", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _complete(client, order_id):
    for action in ("start", "complete"):
        resp = await client.post(f"/api/orders/{order_id}/status/{action}")
        assert resp.status_code == 200


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.json() == {"status": "ok"}


async def test_list_templates(client):
    resp = await client.get("/api/templates")
    assert resp.status_code == 200
    names = [t["name"] for t in resp.json()]
    assert len(names) == 11
    assert "TOP_VIEW_OF_JOINT" in names

    resp = await client.get("/api/templates/CLOSE_UP_OF_WELD")
    assert "DEFECT_MARKING" in resp.json()["required_fields"]
    assert (await client.get("/api/templates/NOPE")).status_code == 404


async def test_create_and_get_order(client):
    order = await _create_order(client)
    assert order["status"] == "PENDING"

    resp = await client.get(f"/api/orders/{order['id']}")
    assert resp.json()["order_number"] == "QC-1001"

    dup = await client.post("/api/orders", json={"order_number": "QC-1001", "created_by": "planner"})
    assert dup.status_code == 409
    assert (await client.get("/api/orders/missing")).status_code == 404


async def test_illegal_order_transition_is_conflict(client):
    order = await _create_order(client)
    resp = await client.post(f"/api/orders/{order['id']}/status/deliver")
    assert resp.status_code == 409
    assert resp.json()["current_state"] == "PENDING"

    resp = await client.post(f"/api/orders/{order['id']}/status/teleport")
    assert resp.status_code == 400


async def test_upload_reports_quality(client):
    order = await _create_order(client)
    good = await _upload(client, order["id"], metadata=GOOD_METADATA)
    assert good["meets_quality_standards"] is True
    assert good["metadata"]["resolution"] == "1920x1080"

    bad = await _upload(client, order["id"], metadata=BAD_METADATA)
    assert bad["meets_quality_standards"] is False

    resp = await client.put(f"/api/photos/{bad['id']}/metadata", json=BAD_METADATA)
    result = resp.json()
    assert result["valid"] is False
    assert len(result["violations"]) == 2


async def test_upload_unknown_template(client):
    order = await _create_order(client)
    resp = await client.post(
        f"/api/orders/{order['id']}/photos",
        json={"template": "FLANGE", "image_path": "/f.jpg", "uploaded_by": "tech"},
    )
    assert resp.status_code == 400

    photo = await _upload(client, order["id"], template="CUSTOM")
    assert photo["template"] == "CUSTOM"


async def test_photo_review(client):
    order = await _create_order(client)
    photo = await _upload(client, order["id"])

    resp = await client.post(f"/api/photos/{photo['id']}/approve", json={"reviewer": "qa-lead"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "APPROVED"
    assert resp.json()["reviewed_by"] == "qa-lead"

    resp = await client.post(f"/api/photos/{photo['id']}/reject", json={"reviewer": "qa-lead", "reason": "x"})
    assert resp.status_code == 409
    assert "already approved" in resp.json()["detail"]


async def test_annotations(client):
    order = await _create_order(client)
    photo = await _upload(client, order["id"])
    url = f"/api/photos/{photo['id']}/annotations"

    resp = await client.post(url, json={"x": 0.2, "y": 0.8, "text": "porosity", "type": "ISSUE"})
    assert resp.status_code == 201
    ann = resp.json()

    resp = await client.put(f"{url}/{ann['id']}", json={"x": 0.3, "y": 0.8, "text": "porosity 2mm"})
    assert resp.json()["text"] == "porosity 2mm"

    resp = await client.put(f"{url}/{ann['id']}", json={"x": 0.3, "y": 0.8, "text": "   "})
    assert resp.status_code == 400

    assert (await client.put(f"{url}/missing", json={"x": 0, "y": 0, "text": "t"})).status_code == 404
    assert (await client.post(url, json={"x": 2, "y": 0, "text": "t"})).status_code == 422

    assert (await client.delete(f"{url}/{ann['id']}")).status_code == 204
    assert (await client.delete(f"{url}/{ann['id']}")).status_code == 404
    assert (await client.get(f"/api/photos/{photo['id']}")).json()["annotations"] == []


async def test_readiness(client):
    order = await _create_order(client)
    approved = await _upload(client, order["id"])
    pending = await _upload(client, order["id"], template="TOP_VIEW_OF_JOINT")
    await client.post(f"/api/photos/{approved['id']}/approve", json={"reviewer": "qa"})

    resp = await client.get(f"/api/orders/{order['id']}/readiness")
    assert resp.json()["ready_for_qa_review"] is False

    await _complete(client, order["id"])
    data = (await client.get(f"/api/orders/{order['id']}/readiness")).json()
    assert data["ready_for_qa_review"] is True
    assert data["approved_photo_ids"] == [approved["id"]]
    assert data["pending_photo_ids"] == [pending["id"]]


async def test_report_requires_ready_order(client):
    order = await _create_order(client)
    resp = await client.post(f"/api/orders/{order['id']}/reports", json={"generated_by": "qa"})
    assert resp.status_code == 409

    resp = await client.post("/api/orders/missing/reports", json={"generated_by": "qa"})
    assert resp.status_code == 404


async def test_report_lifecycle(client):
    order = await _create_order(client)
    photo = await _upload(client, order["id"], metadata=GOOD_METADATA)
    await client.post(f"/api/photos/{photo['id']}/approve", json={"reviewer": "qa"})
    await _complete(client, order["id"])

    resp = await client.post(f"/api/orders/{order['id']}/reports", json={"generated_by": "qa", "format": "HTML"})
    assert resp.status_code == 201, resp.text
    report = resp.json()
    assert report["status"] == "COMPLETED"
    assert report["photo_ids"] == [photo["id"]]
    assert report["has_content"] is True

    content = await client.get(f"/api/reports/{report['id']}/content")
    assert content.status_code == 200
    assert content.headers["content-type"].startswith("text/html")
    assert b"/img/weld.jpg" in content.content

    rid = report["id"]
    assert (await client.post(f"/api/reports/{rid}/finalize")).status_code == 409
    resp = await client.post(f"/api/reports/{rid}/recipient", json={"recipient": "customer@example.com"})
    assert resp.json()["recipient"] == "customer@example.com"

    assert (await client.post(f"/api/reports/{rid}/finalize")).json()["status"] == "GENERATED"
    assert (await client.post(f"/api/reports/{rid}/deliver")).status_code == 409
    resp = await client.post(f"/api/reports/{rid}/approve", json={"actor": "qa-lead"})
    assert resp.json()["status"] == "APPROVED"
    assert resp.json()["approved_by"] == "qa-lead"
    assert (await client.post(f"/api/reports/{rid}/deliver")).json()["status"] == "DELIVERED"
    assert (await client.post(f"/api/reports/{rid}/archive")).json()["status"] == "ARCHIVED"

    listed = (await client.get(f"/api/orders/{order['id']}/reports")).json()
    assert [r["id"] for r in listed] == [rid]

    assert (await client.delete(f"/api/reports/{rid}")).status_code == 204
    assert (await client.get(f"/api/reports/{rid}")).status_code == 404


async def test_docx_report_fails_without_content(client):
    order = await _create_order(client)
    photo = await _upload(client, order["id"])
    await client.post(f"/api/photos/{photo['id']}/approve", json={"reviewer": "qa"})
    await _complete(client, order["id"])

    resp = await client.post(f"/api/orders/{order['id']}/reports", json={"generated_by": "qa", "format": "DOCX"})
    report = resp.json()
    assert report["status"] == "FAILED"
    assert report["error_message"]
    assert (await client.get(f"/api/reports/{report['id']}/content")).status_code == 404


def test_only_domain_errors_map_to_client_statuses():
    assert NotFoundError in app.exception_handlers
    assert IllegalStateError in app.exception_handlers
    # a stray KeyError is a server bug, not a missing resource
    assert LookupError not in app.exception_handlers
    assert KeyError not in app.exception_handlers
