import asyncio
import itertools

import httpx
import pytest
from fastapi import status


async def _presign(client, auth_headers, session_id, chunk_number, mime_type="audio/webm"):
    response = await client.post(
        "/api/v1/get-presigned-url",
        json={"sessionId": session_id, "chunkNumber": chunk_number, "mimeType": mime_type},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    return response.json()


async def _upload(client, session_id, chunk_number, content=b"RIFF....WAVE"):
    response = await client.put(
        f"/api/upload-chunk/{session_id}/{chunk_number}",
        content=content,
        headers={"Content-Type": "application/octet-stream"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.content == b""
    return response


async def _notify(client, auth_headers, session_id, chunk_number, is_last=False):
    response = await client.post(
        "/api/v1/notify-chunk-uploaded",
        json={"sessionId": session_id, "chunkNumber": chunk_number, "isLast": is_last},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {}
    return response


async def test_presigned_url_points_back_at_this_host(client, auth_headers, monkeypatch):
    from src.medinote_mock.config import settings

    monkeypatch.setattr(settings, "public_base_url", "http://localhost:3001")

    target = await _presign(client, auth_headers, "session_abc", 4)

    assert target == {
        "url": "http://localhost:3001/api/upload-chunk/session_abc/4",
        "gcsPath": "sessions/session_abc/chunk_4.wav",
        "publicUrl": "http://localhost:3001/api/audio/session_abc/chunk_4.wav",
    }


async def test_presign_registers_chunk_with_default_mime_type(client, auth_headers):
    response = await client.post(
        "/api/v1/get-presigned-url",
        json={"sessionId": "session_abc", "chunkNumber": 0},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK

    chunks = (await client.get("/api/debug/chunks/session_abc")).json()
    assert set(chunks) == {"0"}
    assert chunks["0"]["uploaded"] is False
    assert chunks["0"]["mimeType"] == "audio/wav"
    assert chunks["0"]["timestamp"].endswith("Z")
    assert "notified" not in chunks["0"]


async def test_presign_and_notify_require_session_and_chunk(client, auth_headers):
    for path in ("/api/v1/get-presigned-url", "/api/v1/notify-chunk-uploaded"):
        response = await client.post(path, json={"sessionId": "session_abc"}, headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "sessionId and chunkNumber required"}

        response = await client.post(path, json={"chunkNumber": 1}, headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_raw_upload_persists_bytes_and_serves_them_back(client, audio_storage):
    await _upload(client, "session_abc", 2, content=b"chunk-two-bytes")

    stored = audio_storage.base_dir / "session_abc_chunk_2.wav"
    assert stored.read_bytes() == b"chunk-two-bytes"

    chunks = (await client.get("/api/debug/chunks/session_abc")).json()
    assert chunks["2"] == {"uploaded": True, "filepath": str(stored)}

    audio = await client.get("/api/audio/session_abc/chunk_2.wav")
    assert audio.status_code == status.HTTP_200_OK
    assert audio.content == b"chunk-two-bytes"


async def test_audio_for_missing_chunk_is_404(client):
    response = await client.get("/api/audio/session_abc/chunk_9.wav")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Audio chunk not found"}


@pytest.mark.parametrize("order", list(itertools.permutations(["presign", "upload", "notify"])))
async def test_chunk_record_is_the_same_in_any_call_order(client, auth_headers, order):
    session_id = "session_order"
    for step in order:
        if step == "presign":
            await _presign(client, auth_headers, session_id, 7, mime_type="audio/webm")
        elif step == "upload":
            await _upload(client, session_id, 7)
        else:
            await _notify(client, auth_headers, session_id, 7)

    record = (await client.get(f"/api/debug/chunks/{session_id}")).json()["7"]
    assert record["uploaded"] is True
    assert record["notified"] is True
    assert record["mimeType"] == "audio/webm"
    assert record["filepath"].endswith("session_order_chunk_7.wav")


async def test_notify_is_accepted_without_upload(client, auth_headers):
    await _notify(client, auth_headers, "session_abc", 5)

    chunks = (await client.get("/api/debug/chunks/session_abc")).json()
    assert chunks == {"5": {"notified": True}}


async def test_full_recording_flow(client, store, auth_headers, fast_completion):
    create = await client.post(
        "/api/v1/upload-session",
        json={"patientId": "patient_123", "userId": "user_123", "patientName": "Alice Johnson"},
        headers=auth_headers,
    )
    session_id = create.json()["id"]

    for chunk in range(3):
        target = await _presign(client, auth_headers, session_id, chunk)
        await client.put(httpx.URL(target["url"]).path, content=f"chunk-{chunk}".encode())
        await _notify(client, auth_headers, session_id, chunk, is_last=chunk == 2)

    assert store.sessions[session_id].status == "processing"

    chunks = (await client.get(f"/api/debug/chunks/{session_id}")).json()
    assert sorted(chunks) == ["0", "1", "2"]
    assert all(c["uploaded"] and c["notified"] for c in chunks.values())

    await asyncio.sleep(fast_completion * 4)

    all_sessions = await client.get("/api/v1/all-session", params={"userId": "user_123"}, headers=auth_headers)
    by_id = {s["id"]: s for s in all_sessions.json()["sessions"]}
    assert by_id[session_id]["status"] == "completed"
    assert by_id[session_id]["transcript_status"] == "completed"
    assert by_id[session_id]["transcript"]


async def test_debug_all_data_counts_entities(client, auth_headers):
    before = (await client.get("/api/debug/all-data")).json()
    assert before == {"users": 2, "patients": 2, "sessions": 1, "templates": 2, "audioChunks": 0}

    await _presign(client, auth_headers, "session_a", 0)
    await _presign(client, auth_headers, "session_a", 1)
    await _upload(client, "session_b", 0)

    after = (await client.get("/api/debug/all-data")).json()
    assert after["audioChunks"] == 2


async def test_debug_chunks_for_unknown_session_is_empty(client):
    response = await client.get("/api/debug/chunks/session_nobody")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {}


async def test_presign_and_notify_accept_non_string_values(client, auth_headers):
    presign = await client.post(
        "/api/v1/get-presigned-url",
        json={"sessionId": "session_loose", "chunkNumber": 1.5, "mimeType": "audio/webm"},
        headers=auth_headers,
    )
    assert presign.status_code == status.HTTP_200_OK
    assert presign.json()["url"].endswith("/api/upload-chunk/session_loose/1.5")

    notify = await client.post(
        "/api/v1/notify-chunk-uploaded",
        json={"sessionId": "session_loose", "chunkNumber": 1.5, "isLast": 2},
        headers=auth_headers,
    )
    assert notify.status_code == status.HTTP_200_OK
    assert notify.json() == {}

    chunks = (await client.get("/api/debug/chunks/session_loose")).json()
    assert set(chunks) == {"1.5"}
    assert chunks["1.5"]["notified"] is True
    assert chunks["1.5"]["mimeType"] == "audio/webm"


async def test_whole_float_chunk_number_shares_the_integer_record(client, auth_headers):
    await _presign(client, auth_headers, "session_float", 2.0)
    await _upload(client, "session_float", 2)

    chunks = (await client.get("/api/debug/chunks/session_float")).json()
    assert list(chunks) == ["2"]
    assert chunks["2"]["uploaded"] is True
