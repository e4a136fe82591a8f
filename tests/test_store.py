from flashfit.models import StoreProgram
from flashfit.services.seed import STORE_PROGRAMS


def test_list_store_programs(client):
    r = client.get("/api/store/programs")
    assert r.status_code == 200
    assert r.json()["count"] == len(STORE_PROGRAMS)


def test_store_filters(client):
    yoga = client.get("/api/store/programs", params={"category": "yoga"}).json()
    assert [p["title"] for p in yoga["programs"]] == ["Yoga Flow & Flexibility"]

    intermediate = client.get("/api/store/programs", params={"difficulty": "intermediate"}).json()
    assert intermediate["count"] == 2

    priced = client.get("/api/store/programs", params={"minPrice": 25, "maxPrice": 50}).json()
    assert sorted(p["price"] for p in priced["programs"]) == [29.99, 49.99]

    bad = client.get("/api/store/programs", params={"difficulty": "legendary"})
    assert bad.status_code == 400


def test_get_store_program(client, db_session):
    pid = db_session.query(StoreProgram.id).filter(StoreProgram.category == "cardio").scalar()
    r = client.get(f"/api/store/programs/{pid}")
    assert r.json()["program"]["title"] == "Advanced HIIT Masterclass"
    assert client.get("/api/store/programs/9999").status_code == 404


def test_purchase_flow(client, auth_headers, db_session):
    pid = db_session.query(StoreProgram.id).filter(StoreProgram.category == "yoga").scalar()

    r = client.post(f"/api/store/programs/{pid}/purchase", headers=auth_headers)
    assert r.status_code == 201
    purchase = r.json()["purchase"]
    assert purchase["programId"] == pid
    assert purchase["programTitle"] == "Yoga Flow & Flexibility"
    assert purchase["price"] == 24.99

    again = client.post(f"/api/store/programs/{pid}/purchase", headers=auth_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "You have already purchased this program"

    owned = client.get("/api/store/purchased", headers=auth_headers).json()
    assert owned["count"] == 1
    assert owned["programs"][0]["purchase_id"] == purchase["id"]
    assert owned["programs"][0]["status"] == "active"


def test_purchase_unknown_program(client, auth_headers):
    assert client.post("/api/store/programs/9999/purchase", headers=auth_headers).status_code == 404


def test_purchases_require_auth(client):
    assert client.post("/api/store/programs/1/purchase").status_code == 401
    assert client.get("/api/store/purchased").status_code == 401
