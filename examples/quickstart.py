#!/usr/bin/env python3
"""
Taskboard Quickstart — a team's whole lifecycle in one script.

Registers two users → creates a team → adds a member → creates and
assigns a task → walks it to done → deletes the team.
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: http://localhost:5000
"""

from _common import check_backend, register_user


def main():
    check_backend()

    # ── Users ─────────────────────────────────────────────────────
    print("\n1. Registering users...")
    alice = register_user("alice")
    bob = register_user("bob")

    # ── Create team (creator becomes first member) ────────────────
    print("\n2. Creating team...")
    resp = alice.post("/teams", json={"name": "Engineering"})
    assert resp.status_code == 201, f"Failed: {resp.text}"
    team = resp.json()
    print(f"   Team: {team['name']} (#{team['id']})")

    # ── Add bob ───────────────────────────────────────────────────
    print("\n3. Adding bob to the team...")
    resp = alice.post(f"/teams/{team['id']}/members", json={"userId": bob.user["id"]})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    members = alice.get(f"/teams/{team['id']}/members").json()
    print(f"   Members: {', '.join(m['username'] for m in members)}")

    # ── Create task assigned to bob ───────────────────────────────
    print("\n4. Creating task...")
    resp = alice.post("/tasks/create-task", json={
        "title": "Add health check to API",
        "description": "Add a /healthz endpoint that returns 200 when the service is ready",
        "team_id": team["id"],
        "assigned_to_id": bob.user["id"],
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    task = resp.json()
    print(f"   Task #{task['id']}: {task['title']}")
    print(f"   Status: {task['status']}")

    # ── bob works it ──────────────────────────────────────────────
    print("\n5. bob walks the task to done...")
    queue = bob.get("/tasks/get-task", params={"assigned_to_id": bob.user["id"]}).json()
    print(f"   bob's queue: {[t['title'] for t in queue]}")

    for status in ["In Progress", "Done"]:
        resp = bob.put(f"/tasks/{task['id']}", json={"status": status})
        assert resp.status_code == 200, f"Failed to set {status}: {resp.text}"
        print(f"   → {status}")

    # ── Clean up ──────────────────────────────────────────────────
    print("\n6. Deleting the team...")
    resp = bob.delete(f"/teams/{team['id']}")
    print(f"   bob tries: {resp.status_code} {resp.json()['error']}")
    resp = alice.delete(f"/teams/{team['id']}")
    assert resp.status_code == 200, f"Failed: {resp.text}"
    print(f"   alice: {resp.json()['message']}")

    print(f"\n✓ Complete lifecycle finished. Task #{task['id']} went from To Do to Done.")


if __name__ == "__main__":
    main()
