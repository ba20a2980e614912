import io

import pytest
from openpyxl import Workbook

from app.core.config import settings


def _csv(rows: list[str]) -> bytes:
    return ("\n".join(["FirstName,Phone,Notes", *rows]) + "\n").encode("utf-8")


def _xlsx(rows: list[list]) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in [["FirstName", "Phone", "Notes"], *rows]:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


async def _upload(client, filename: str, content: bytes):
    return await client.post("/api/list/upload", files={"file": (filename, content, "application/octet-stream")})


@pytest.mark.asyncio
async def test_upload_distributes_twelve_rows_over_five_agents(client, five_agents, upload_dir):
    r = await _upload(client, "contacts.csv", _csv([f"Person{i},555000{i:02d},note {i}" for i in range(12)]))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["message"] == "File uploaded and distributed successfully"
    assert body["totalItems"] == 12
    assert [e["agent"]["id"] for e in body["distribution"]] == [a.id for a in five_agents]
    assert [len(e["items"]) for e in body["distribution"]] == [3, 3, 2, 2, 2]

    first = body["distribution"][0]
    assert set(first["agent"]) == {"id", "name", "email", "mobile"}
    assert first["items"][0] == {
        "id": first["items"][0]["id"],
        "firstName": "Person0",
        "phone": "55500000",
        "notes": "note 0",
    }
    assert [i["firstName"] for i in body["distribution"][2]["items"]] == ["Person6", "Person7"]

    # temporary copy is gone
    assert list(upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_upload_and_view_return_the_same_shape(client, five_agents):
    r = await _upload(client, "contacts.xlsx", _xlsx([[f"P{i}", 9000 + i, ""] for i in range(7)]))
    assert r.status_code == 200, r.text
    uploaded = r.json()

    r = await client.get("/api/list/agents")
    assert r.status_code == 200
    viewed = r.json()

    assert viewed["totalItems"] == uploaded["totalItems"] == 7
    assert viewed["distribution"] == uploaded["distribution"]


@pytest.mark.asyncio
async def test_only_first_five_agents_receive_items(client, make_agents):
    agents = await make_agents(6)

    r = await _upload(client, "contacts.csv", _csv([f"P{i},{i}," for i in range(10)]))
    assert r.status_code == 200, r.text
    assert [e["agent"]["id"] for e in r.json()["distribution"]] == [a.id for a in agents[:5]]

    r = await client.get("/api/list/agents")
    distribution = r.json()["distribution"]
    assert len(distribution) == 6
    assert distribution[5]["agent"]["id"] == agents[5].id
    assert distribution[5]["items"] == []


@pytest.mark.asyncio
async def test_view_with_no_uploads(client, five_agents):
    r = await client.get("/api/list/agents")
    assert r.status_code == 200
    body = r.json()
    assert body["totalItems"] == 0
    assert len(body["distribution"]) == 5
    assert all(e["items"] == [] for e in body["distribution"])


@pytest.mark.asyncio
async def test_upload_rejected_with_fewer_than_five_agents(client, make_agents, upload_dir):
    await make_agents(3)

    r = await _upload(client, "contacts.csv", _csv(["Anna,1,"]))

    assert r.status_code == 400
    assert r.json() == {"message": "Please add at least 5 agents before uploading. Currently you have 3 agents."}
    assert list(upload_dir.iterdir()) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content, message",
    [
        (b"", "File is empty"),
        (b"FirstName,Phone,Notes\n", "File is empty"),
        (b"FirstName,Notes\nAnna,x\n", "Missing required column: Phone"),
        (_csv(["Anna,123,", "Ben,12b,", "Cara,+44,"]), "Invalid phone number at row 2"),
    ],
)
async def test_upload_stage_failures(client, five_agents, upload_dir, content, message):
    r = await _upload(client, "contacts.csv", content)

    assert r.status_code == 400
    assert r.json()["message"] == message
    assert list(upload_dir.iterdir()) == []

    r = await client.get("/api/list/agents")
    assert r.json()["totalItems"] == 0


@pytest.mark.asyncio
async def test_upload_rejects_other_file_types(client, five_agents):
    r = await _upload(client, "contacts.txt", _csv(["Anna,1,"]))

    assert r.status_code == 400
    assert r.json()["message"] == "Only CSV, XLSX, and XLS files are allowed"


@pytest.mark.asyncio
async def test_upload_rejects_large_files(client, five_agents, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 64)

    r = await _upload(client, "contacts.csv", _csv([f"Person{i},{i}," for i in range(20)]))

    assert r.status_code == 400
    assert r.json()["message"] == "File size too large. Maximum 5MB allowed."
    assert list(upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_oversize_body_is_refused_before_the_endpoint(client, five_agents, upload_dir, monkeypatch):
    from app.api.v1.endpoints import lists
    from app.main import UPLOAD_ENVELOPE_BYTES

    async def _never_called(*args, **kwargs):
        raise AssertionError("upload reached the pipeline")

    monkeypatch.setattr(lists, "run_upload", _never_called)
    monkeypatch.setattr(settings, "max_upload_bytes", 64)

    r = await _upload(client, "contacts.csv", b"x" * (UPLOAD_ENVELOPE_BYTES + 1024))

    assert r.status_code == 400
    assert r.json()["message"] == "File size too large. Maximum 5MB allowed."
    assert not upload_dir.exists()


@pytest.mark.asyncio
async def test_upload_without_file(client, five_agents):
    r = await client.post("/api/list/upload")

    assert r.status_code == 400
    assert r.json()["message"] == "No file uploaded"


@pytest.mark.asyncio
async def test_corrupt_excel_gets_generic_message(client, five_agents):
    r = await _upload(client, "contacts.xlsx", b"PK\x03\x04 definitely not a workbook")

    assert r.status_code == 400
    assert r.json()["message"].startswith("Unable to read the uploaded file")


@pytest.mark.asyncio
async def test_delete_item(client, five_agents):
    r = await _upload(client, "contacts.csv", _csv([f"P{i},{i}," for i in range(5)]))
    item_id = r.json()["distribution"][0]["items"][0]["id"]

    r = await client.delete(f"/api/list/items/{item_id}")
    assert r.status_code == 200
    assert r.json() == {"message": "List item deleted successfully"}

    r = await client.get("/api/list/agents")
    body = r.json()
    assert body["totalItems"] == 4
    assert body["distribution"][0]["items"] == []


@pytest.mark.asyncio
async def test_delete_missing_item(client, five_agents):
    await _upload(client, "contacts.csv", _csv([f"P{i},{i}," for i in range(5)]))

    r = await client.delete("/api/list/items/itm_does_not_exist")
    assert r.status_code == 404
    assert r.json() == {"message": "List item not found"}

    r = await client.get("/api/list/agents")
    assert r.json()["totalItems"] == 5
