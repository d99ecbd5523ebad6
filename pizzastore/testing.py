"""
pizzastore.testing

Helpers shared by the API test modules.
"""
import base64

from rest_framework.test import APIClient


def basic_auth_client(login: str, password: str) -> APIClient:
    """APIClient that re-authenticates (and so re-reads the user) on every request."""
    client = APIClient()
    token = base64.b64encode(f"{login}:{password}".encode("utf-8")).decode("ascii")
    client.credentials(HTTP_AUTHORIZATION=f"Basic {token}")
    return client
