# tests/test_tickets.py
import re
from datetime import datetime, timedelta, timezone


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_create_and_get_ticket(client, intake):
    r = client.post("/tickets/", json=intake(tipo_equipo="Laptop", marca="Dell"))
    assert r.status_code == 201
    created = r.json()
    assert re.fullmatch(r"TKT-\d{4}-0001", created["numero_ticket"])

    r2 = client.get(f"/tickets/{created['id']}")
    assert r2.status_code == 200
    data = r2.json()
    assert data["nombre_cliente"] == "Ana Ruiz"
    assert data["marca"] == "Dell"
    assert data["estado_inicial"] == "Received"
    assert data["estado_actual"] == "Received"
    assert data["prioridad"] == "Medium"
    assert data["costo_estimado"] == 0
    assert data["costo_final"] == 0
    assert data["direccion"] == ""
    assert data["fecha_estimada_entrega"] is None
    assert data["version"] == 1


def test_ticket_numbers_increase(client, intake):
    first = client.post("/tickets/", json=intake()).json()["numero_ticket"]
    second = client.post("/tickets/", json=intake(nombre_cliente="Luis")).json()["numero_ticket"]
    assert first.endswith("-0001")
    assert second.endswith("-0002")


def test_intake_time_returned_in_utc(client, intake):
    r = client.post("/tickets/", json=intake(fecha_ingreso="2024-06-01T10:00:00-06:00"))
    assert r.status_code == 201
    stamp = r.json()["fecha_ingreso"].replace("Z", "+00:00")
    assert datetime.fromisoformat(stamp) == datetime(2024, 6, 1, 16, 0, tzinfo=timezone.utc)
    assert datetime.fromisoformat(stamp).utcoffset() == timedelta(0)


def test_list_returns_array(client):
    r = client.get("/tickets/")
    assert r.status_code == 200
    assert isinstance(r.json(), list)


def test_update_ticket_state_and_costs(client, intake):
    tid = client.post("/tickets/", json=intake()).json()["id"]

    r = client.put(
        f"/tickets/{tid}",
        json={"estado_actual": "In Repair", "tecnico_asignado": "Carlos", "costo_estimado": 350.5},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["estado_actual"] == "In Repair"
    assert data["tecnico_asignado"] == "Carlos"
    assert data["costo_estimado"] == 350.5
    assert data["estado_inicial"] == "Received"
    assert data["version"] == 2

    # fetch again to be sure
    r2 = client.get(f"/tickets/{tid}")
    assert r2.json()["estado_actual"] == "In Repair"


def test_delivered_ticket_can_move_back(client, intake):
    tid = client.post("/tickets/", json=intake()).json()["id"]
    client.put(f"/tickets/{tid}", json={"estado_actual": "Delivered"})
    r = client.put(f"/tickets/{tid}", json={"estado_actual": "In Diagnosis"})
    assert r.status_code == 200
    assert r.json()["estado_actual"] == "In Diagnosis"


def test_update_rejects_intake_fields(client, intake):
    tid = client.post("/tickets/", json=intake()).json()["id"]
    r = client.put(f"/tickets/{tid}", json={"estado_inicial": "Under Evaluation"})
    assert r.status_code == 422
    r2 = client.put(f"/tickets/{tid}", json={"numero_ticket": "TKT-1999-0001"})
    assert r2.status_code == 422


def test_update_with_stale_version_conflicts(client, intake):
    tid = client.post("/tickets/", json=intake()).json()["id"]
    assert client.put(f"/tickets/{tid}", json={"estado_actual": "In Repair", "version": 1}).status_code == 200

    r = client.put(f"/tickets/{tid}", json={"estado_actual": "Repaired", "version": 1})
    assert r.status_code == 409
    assert client.get(f"/tickets/{tid}").json()["estado_actual"] == "In Repair"


def test_update_unknown_ticket_returns_404(client):
    r = client.put("/tickets/does-not-exist", json={"estado_actual": "Repaired"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_delete_ticket_then_404(client, intake):
    tid = client.post("/tickets/", json=intake()).json()["id"]

    r2 = client.delete(f"/tickets/{tid}")
    assert r2.status_code == 200
    assert r2.json()["id"] == tid

    r3 = client.get(f"/tickets/{tid}")
    assert r3.status_code == 404
    assert r3.json()["detail"] == "Ticket not found"


def test_get_not_found_returns_404(client):
    r = client.get("/tickets/9999999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_create_validation_errors(client, intake):
    # missing customer name
    payload = intake()
    del payload["nombre_cliente"]
    assert client.post("/tickets/", json=payload).status_code == 422

    # blank phone
    assert client.post("/tickets/", json=intake(telefono="   ")).status_code == 422

    # unknown priority
    assert client.post("/tickets/", json=intake(prioridad="Whenever")).status_code == 422

    # current state is not set at intake
    assert client.post("/tickets/", json=intake(estado_actual="Repaired")).status_code == 422

    # negative cost
    assert client.post("/tickets/", json=intake(costo_estimado=-1)).status_code == 422


def test_filter_by_status(client, intake):
    a = client.post("/tickets/", json=intake(nombre_cliente="A")).json()
    b = client.post("/tickets/", json=intake(nombre_cliente="B")).json()
    client.put(f"/tickets/{b['id']}", json={"estado_actual": "Repaired"})

    ids = {t["id"] for t in client.get("/tickets/?status=Repaired").json()}
    assert ids == {b["id"]}

    everything = {t["id"] for t in client.get("/tickets/?status=All").json()}
    assert everything == {a["id"], b["id"]}


def test_search(client, intake):
    client.post("/tickets/", json=intake(nombre_cliente="Maria Lopez", tipo_equipo="Laptop"))
    client.post("/tickets/", json=intake(nombre_cliente="Jose", telefono="3171-3287", tipo_equipo="Printer"))

    names = [t["nombre_cliente"] for t in client.get("/tickets/", params={"search": "maria"}).json()]
    assert names == ["Maria Lopez"]

    names = [t["nombre_cliente"] for t in client.get("/tickets/", params={"search": "3171"}).json()]
    assert names == ["Jose"]

    names = [t["nombre_cliente"] for t in client.get("/tickets/", params={"search": "PRINT"}).json()]
    assert names == ["Jose"]


def test_stats_endpoint(client, intake):
    client.post("/tickets/", json=intake(prioridad="Urgent"))
    client.post("/tickets/", json=intake(prioridad="Low"))

    r = client.get("/tickets/stats")
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 2
    assert data["counts_by_state"]["Received"] == 2
    assert data["counts_by_priority"]["Urgent"] == 1
    assert data["in_process"] == 2
    assert data["completed"] == 0
    assert data["urgent"] == 1
