"""
Shared helpers for Taskboard examples.

Handles the health check and user registration so each example can
focus on its specific workflow.
"""

import sys
import uuid

import httpx

BASE = "http://localhost:5000"


def check_backend() -> None:
    """Verify the backend is reachable and its database is up."""
    try:
        resp = httpx.get(f"{BASE}/health", timeout=5)
    except httpx.ConnectError:
        print(f"ERROR: Backend not reachable at {BASE}")
        print("Start it with:  taskboard serve --reload")
        sys.exit(1)

    if resp.status_code != 200:
        print(f"ERROR: Health check returned {resp.status_code}")
        sys.exit(1)

    health = resp.json()
    print("Backend health:")
    print(f"  Database: {'✓' if health['database'] == 'ok' else '✗'}")
    print(f"  Redis:    {'✓' if health['redis'] == 'ok' else '✗ (rate limiting off)'}")

    if health["database"] != "ok":
        print("\nERROR: Database is not connected. Check TASKBOARD_DATABASE_URL on the server.")
        sys.exit(1)


def register_user(name: str, password: str = "demo-password-123") -> httpx.Client:
    """Register a fresh user and return a Client that sends their token.

    A random suffix keeps usernames and emails unique, so examples can be
    re-run against the same database. The user dict is on `client.user`.
    """
    run_id = uuid.uuid4().hex[:6]
    username = f"{name}-{run_id}"

    resp = httpx.post(
        f"{BASE}/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
        timeout=10,
    )
    if resp.status_code != 201:
        print(f"ERROR: Registration failed: {resp.status_code} {resp.text}")
        sys.exit(1)

    body = resp.json()
    client = httpx.Client(
        base_url=BASE,
        timeout=10,
        headers={"Authorization": f"Bearer {body['token']}"},
    )
    client.user = body["user"]
    print(f"  User:     {username} (#{body['user']['id']})")
    return client
