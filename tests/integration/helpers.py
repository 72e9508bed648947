from httpx import AsyncClient


async def register(client: AsyncClient, email="ann@acme.com", password="SecurePass123!", name="Ann"):
    response = await client.post("/auth/register", json={
        "email": email,
        "password": password,
        "confirmPassword": password,
        "name": name,
    })
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def login(client: AsyncClient, email="ann@acme.com", password="SecurePass123!", **extra):
    return await client.post("/auth/login", json={"email": email, "password": password, **extra})
