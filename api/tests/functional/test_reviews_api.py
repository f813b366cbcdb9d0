import datetime as dt
import pytest

success_codes = [200, 201]


@pytest.fixture
def created_review(client, test_review_data):
    response = client.post("/api/reviews/", json=test_review_data)
    assert response.status_code in success_codes
    return response.json()


def test_read_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to Beverage Buddy API"}

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "environment": "test"}


# CREATE REVIEW TESTS
def test_create_review_success(client, test_review_data):
    response = client.post("/api/reviews/", json=test_review_data)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["name"] == test_review_data["name"]
    assert body["score"] == test_review_data["score"]
    assert body["date"] == test_review_data["date"]
    assert body["count"] == test_review_data["count"]
    assert body["category"] is None

def test_create_review_defaults_date_to_today(client):
    response = client.post("/api/reviews/", json={"name": "Kefir", "score": 2, "count": 1})
    assert response.status_code == 201
    assert response.json()["date"] == dt.date.today().isoformat()

@pytest.mark.parametrize("overrides", [
    {"score": 6},
    {"score": 0},
    {"count": 100},
    {"name": "ab"},
    {"name": "   "},
    {"date": (dt.date.today() + dt.timedelta(days=1)).isoformat()},
])
def test_create_review_invalid_data(client, test_review_data, overrides):
    response = client.post("/api/reviews/", json={**test_review_data, **overrides})
    assert response.status_code == 422
    assert client.get("/api/reviews/").json() == []


# READ REVIEW TESTS
def test_find_reviews(client, beverages):
    response = client.get("/api/reviews/")
    assert response.status_code == 200
    assert [r["review"]["name"] for r in response.json()] == ["Lager", "Stout"]

def test_find_reviews_with_filter(client, beverages):
    response = client.get("/api/reviews/", params={"filter": "LA"})
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["review"]["name"] == "Lager"
    assert body[0]["category_id"] is None
    assert body[0]["category_name"] == "Undefined"

def test_get_review(client, created_review):
    response = client.get(f"/api/reviews/{created_review['id']}")
    assert response.status_code == 200
    assert response.json() == created_review

def test_get_review_not_found(client):
    response = client.get("/api/reviews/999")
    assert response.status_code == 404


# UPDATE REVIEW TESTS
def test_update_review_success(client, created_review):
    review_id = created_review["id"]
    response = client.put(f"/api/reviews/{review_id}", json={"score": 2, "count": 4})

    assert response.status_code == 200
    assert response.json()["score"] == 2
    assert response.json()["count"] == 4
    assert response.json()["name"] == created_review["name"]

def test_update_review_blank_name(client, created_review):
    review_id = created_review["id"]
    response = client.put(f"/api/reviews/{review_id}", json={"name": "    "})

    assert response.status_code == 422
    assert response.json()["detail"][0]["field"] == "name"
    assert response.json()["detail"][0]["rule"] == "not_blank"
    assert client.get(f"/api/reviews/{review_id}").json()["name"] == created_review["name"]

def test_update_review_null_score(client, created_review):
    response = client.put(f"/api/reviews/{created_review['id']}", json={"score": None})
    assert response.status_code == 422
    assert [(v["field"], v["rule"]) for v in response.json()["detail"]] == [("score", "not_null")]

def test_update_review_not_found(client):
    response = client.put("/api/reviews/999", json={"score": 3})
    assert response.status_code == 404


# DELETE REVIEW TESTS
def test_delete_review(client, created_review):
    review_id = created_review["id"]
    response = client.delete(f"/api/reviews/{review_id}")
    assert response.status_code == 204
    assert client.get(f"/api/reviews/{review_id}").status_code == 404

def test_delete_review_not_found(client):
    response = client.delete("/api/reviews/999")
    assert response.status_code == 404
