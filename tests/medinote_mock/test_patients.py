from fastapi import status


async def test_list_patients_returns_seeded_patients_for_user(client, auth_headers):
    response = await client.get("/api/v1/patients", params={"userId": "user_123"}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "patients": [
            {"id": "patient_123", "name": "Alice Johnson"},
            {"id": "patient_456", "name": "Bob Wilson"},
        ]
    }


async def test_list_patients_for_user_without_patients_is_empty(client, auth_headers):
    response = await client.get("/api/v1/patients", params={"userId": "user_456"}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"patients": []}


async def test_list_patients_requires_user_id(client, auth_headers):
    response = await client.get("/api/v1/patients", headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "userId parameter required"}


async def test_add_patient_then_fetch_details(client, auth_headers):
    create_resp = await client.post(
        "/api/v1/add-patient-ext",
        json={"name": "Carol Diaz", "userId": "user_456"},
        headers=auth_headers,
    )
    assert create_resp.status_code == status.HTTP_201_CREATED
    patient = create_resp.json()["patient"]
    assert patient["id"].startswith("patient_")
    assert patient["name"] == "Carol Diaz"
    assert patient["user_id"] == "user_456"
    assert patient["pronouns"] is None
    assert patient["medical_history"] is None

    details_resp = await client.get(f"/api/v1/patient-details/{patient['id']}", headers=auth_headers)
    assert details_resp.status_code == status.HTTP_200_OK
    assert details_resp.json() == patient

    list_resp = await client.get("/api/v1/patients", params={"userId": "user_456"}, headers=auth_headers)
    assert list_resp.json() == {"patients": [{"id": patient["id"], "name": "Carol Diaz"}]}


async def test_add_patient_requires_name_and_user(client, auth_headers):
    response = await client.post("/api/v1/add-patient-ext", json={"name": "No Owner"}, headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "name and userId are required"}


async def test_patient_details_full_record(client, auth_headers):
    response = await client.get("/api/v1/patient-details/patient_123", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["name"] == "Alice Johnson"
    assert body["pronouns"] == "she/her"
    assert body["previous_treatment"] == "Metformin"


async def test_unknown_patient_details_is_404(client, auth_headers):
    response = await client.get("/api/v1/patient-details/patient_missing", headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Patient not found"}


async def test_find_user_id_by_email(client, auth_headers):
    response = await client.get(
        "/api/users/asd3fd2faec",
        params={"email": "jane.smith@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": "user_456"}

    missing = await client.get(
        "/api/users/asd3fd2faec",
        params={"email": "nobody@example.com"},
        headers=auth_headers,
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json() == {"error": "User not found"}

    no_email = await client.get("/api/users/asd3fd2faec", headers=auth_headers)
    assert no_email.status_code == status.HTTP_400_BAD_REQUEST
    assert no_email.json() == {"error": "email parameter required"}


async def test_add_patient_accepts_non_string_values(client, auth_headers):
    response = await client.post(
        "/api/v1/add-patient-ext",
        json={"name": 42, "userId": 123},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    patient = response.json()["patient"]
    assert patient["name"] == "42"
    assert patient["user_id"] == "123"
