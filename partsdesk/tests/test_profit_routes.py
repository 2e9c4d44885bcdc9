import io

import pandas as pd


def seed(client):
    for body in (
        {"gsm_number": "GSM-1", "category": "Brake", "price": 15, "cost_price": 10, "stock_quantity": 5},
        {"gsm_number": "GSM-2", "category": "Clutch", "price": 40, "stock_quantity": 1},
    ):
        assert client.post("/parts", json=body).status_code == 201


def test_profit_dashboard(auth_client):
    seed(auth_client)

    data = auth_client.get("/profit").get_json()["data"]

    assert len(data["rows"]) == 2
    assert data["summary"]["total_profit"] == 65
    assert data["categories"] == ["Brake", "Clutch"]
    assert data["gsm_numbers"] == ["GSM-1", "GSM-2"]


def test_profit_dashboard_filters(auth_client):
    seed(auth_client)

    data = auth_client.get("/profit?category=Brake&gsm=GSM-2").get_json()["data"]

    assert data["rows"] == []
    assert data["empty_message"] == "No matching records."
    assert data["filters"] == {"category": "Brake", "gsm": "GSM-2"}


def test_export_downloads_workbook(auth_client):
    seed(auth_client)

    resp = auth_client.get("/profit/export?category=Clutch")

    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    df = pd.read_excel(io.BytesIO(resp.data))
    assert df["GSM"].tolist() == ["GSM-2"]
    assert df["Total Profit"].tolist() == [40]
