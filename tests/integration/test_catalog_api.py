def test_config_exposes_storefront_settings(client):
    r = client.get("/config")
    assert r.status_code == 200
    body = r.json()
    assert body["country"] == "ES"
    assert body["currency"] == "eur"
    assert {o["id"]: o["amount"] for o in body["shippingOptions"]} == {"free": 0, "express": 500}


def test_list_wines(client, fake_stripe):
    fake_stripe.add_wine("wine_a", "Albariño")
    r = client.get("/wines")
    assert r.status_code == 200
    assert [w["id"] for w in r.json()["data"]] == ["wine_a"]


def test_get_wine_and_missing_wine(client, fake_stripe):
    fake_stripe.add_wine("wine_a", "Albariño", stock="6")
    r = client.get("/wines/wine_a")
    assert r.status_code == 200
    assert r.json()["metadata"]["quantity"] == "6"

    r = client.get("/wines/wine_x")
    assert r.status_code == 404
    assert r.json()["code"] == "not_found"


def test_wine_skus_and_prices(client, fake_stripe):
    fake_stripe.add_wine("wine_a", "Albariño", stock="6", unit_amount=1800)

    skus = client.get("/wines/wine_a/skus").json()["data"]
    assert len(skus) == 1
    assert skus[0]["inventory"]["quantity"] == 6

    prices = client.get("/wines/wine_a/prices").json()["data"]
    assert [p["unit_amount"] for p in prices] == [1800]


def test_prices_by_product_and_by_id(client, fake_stripe):
    fake_stripe.add_wine("wine_a", "A", unit_amount=1000)
    fake_stripe.add_wine("wine_b", "B", unit_amount=2000)

    r = client.get("/prices", params={"product": "wine_b"})
    assert [p["id"] for p in r.json()["data"]] == ["price_wine_b"]

    r = client.get("/prices/price_wine_a")
    assert r.status_code == 200
    assert r.json()["unit_amount"] == 1000
