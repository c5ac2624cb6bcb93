from fastapi import status


async def test_fetch_default_templates_for_user(client, auth_headers):
    response = await client.get(
        "/api/v1/fetch-default-template-ext",
        params={"userId": "user_123"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "data": [
            {"id": "template_123", "title": "New Patient Visit", "type": "default"},
            {"id": "template_456", "title": "Follow-up Visit", "type": "predefined"},
        ],
    }


async def test_fetch_default_templates_requires_user_id(client, auth_headers):
    response = await client.get("/api/v1/fetch-default-template-ext", headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "userId parameter required"}
