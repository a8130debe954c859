CUSTOMER = {
    "address": {"city": "Haro", "country": "ES", "postalCode": "26200", "province": "La Rioja", "street": "Av. Vizcaya 3"},
    "email": "luis@example.com",
    "firstName": "Luis",
    "lastName": "Pérez",
    "lgpd": True,
}


def test_create_customer(client, fake_stripe):
    r = client.post("/customers", json=CUSTOMER)
    assert r.status_code == 200
    body = r.json()
    assert body["id"].startswith("cus_")
    assert body["name"] == "Luis Pérez"
    assert body["metadata"]["lgpd"] == "true"


def test_create_customer_rejects_bad_email(client, fake_stripe):
    r = client.post("/customers", json={**CUSTOMER, "email": "luis"})
    assert r.status_code == 400
    assert r.json()["code"] == "malformed_input"
    assert fake_stripe.called("create_customer") == []
