from app.models.category import Category
from app.seed import CATEGORY_NAMES, seed_categories


def test_categories_sorted_by_name(client, db_session):
    db_session.add_all([Category(name="Health"), Category(name="City"), Category(name="Culture")])
    db_session.commit()

    r = client.get("/categories")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["City", "Culture", "Health"]
    assert set(r.json()[0]) == {"id", "name"}


def test_categories_empty(client):
    r = client.get("/categories")
    assert r.status_code == 200
    assert r.json() == []


def test_seed_categories_is_idempotent(db_session):
    seed_categories(db_session)
    seed_categories(db_session)
    names = [c.name for c in db_session.query(Category).order_by(Category.name)]
    assert names == sorted(CATEGORY_NAMES)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["uptime"] >= 0
    assert "timestamp" in body
