from fastapi.testclient import TestClient

SECRET = "test-signing-key-0123456789-abcdefghij"
ISSUER = "Expenses.API"
AUDIENCE = "Expenses.Frontend"


def register(client: TestClient, email: str, password: str = "secret1") -> dict:
    """Register through the API and return bearer headers for the new user."""
    response = client.post("/api/Account/Register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
