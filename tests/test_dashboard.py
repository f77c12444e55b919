# tests/test_dashboard.py
from datetime import datetime, timedelta, timezone

BASE = datetime(2024, 2, 1, 8, 0, tzinfo=timezone.utc)


def _create(client, intake, n, **fields):
    payload = intake(nombre_cliente=f"Customer {n}", fecha_ingreso=(BASE + timedelta(hours=n)).isoformat(), **fields)
    r = client.post("/tickets/", json=payload)
    assert r.status_code == 201
    return r.json()


def test_empty_dashboard(client):
    r = client.get("/dashboard")
    assert r.status_code == 200
    data = r.json()
    assert data["statistics"]["total"] == 0
    assert data["recent"] == []
    assert data["urgent"] == []


def test_dashboard_slices_and_counters(client, intake):
    delivered = _create(client, intake, 1, prioridad="Urgent")
    client.put(f"/tickets/{delivered['id']}", json={"estado_actual": "Delivered"})
    high = _create(client, intake, 2, prioridad="High")
    for n in range(3, 9):
        _create(client, intake, n, prioridad="Low")
    ready = _create(client, intake, 9, prioridad="Medium")
    client.put(f"/tickets/{ready['id']}", json={"estado_actual": "Ready for Pickup"})

    data = client.get("/dashboard").json()

    assert [t["nombre_cliente"] for t in data["recent"]] == [f"Customer {n}" for n in (9, 8, 7, 6, 5)]
    assert [t["id"] for t in data["urgent"]] == [high["id"]]

    stats = data["statistics"]
    assert stats["total"] == 9
    assert stats["counts_by_state"]["Delivered"] == 1
    assert stats["completed"] == 1
    assert stats["in_process"] == 7
    assert stats["urgent"] == 1


def test_lifecycle_lookup(client):
    data = client.get("/lifecycle").json()
    assert [s["value"] for s in data["states"]][0] == "Received"
    assert [s["value"] for s in data["states"]][-1] == "Delivered"
    assert data["initial_states"] == ["Received", "Under Evaluation"]
    assert data["all_filter"] == "All"
    assert "estado_actual" in data["editable_fields"]
