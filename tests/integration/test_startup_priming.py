from importlib import reload

from fastapi.testclient import TestClient

from app.crud.bitcoin import bitcoin as crud_bitcoin
from tests.helpers.doubles import store_failure


def _start(cache_service):
    import main
    reload(main)
    main.app.state.cache_service = cache_service
    return TestClient(main.app)


def test_startup_primes_item_entries(cache_service, memory_cache, seed_bitcoins):
    seed_bitcoins({"BTC": 65000, "ETH": 3500, "BNB": 450})

    with _start(cache_service) as client:
        info = client.get("/api/cache/stats").json()["data"]
        assert info["memory_cache_size"] == 3
        assert sorted(info["cache_entries"]) == ["bitcoin:BNB", "bitcoin:BTC", "bitcoin:ETH"]

        response = client.get("/api/bitcoins/ETH")
        assert response.status_code == 200
        assert response.json()["data"]["price"] == 3500


def test_startup_survives_priming_failure(cache_service, monkeypatch):
    monkeypatch.setattr(crud_bitcoin, "get_multi_ordered", store_failure)

    with _start(cache_service) as client:
        assert client.get("/health").status_code == 200

        response = client.post("/api/bitcoins", json={"symbol": "BTC", "price": 65000})
        assert response.status_code == 201
        assert client.get("/api/bitcoins/BTC").json()["data"]["price"] == 65000
