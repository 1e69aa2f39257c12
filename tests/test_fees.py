import re
from datetime import date

from school_portal.domain.entities import FeeRecord, SchoolConfig
from school_portal.interfaces.http.receipts import format_inr, render_receipt


def test_record_fee_uses_receipt_prefix(client, login):
    """Тест записи оплаты: номер квитанции из префикса настроек"""
    admin = login("ADM-001")
    client.put("/api/school/config", headers=admin, json={"receipt_prefix": "901"})
    response = client.post("/api/fees", headers=admin, json={
        "student_id": "s2", "amount": 4500, "status": "PAID", "months": ["May", "June"],
    })
    assert response.status_code == 201
    fee = response.json()
    assert re.fullmatch(r"901\d{6}", fee["receipt_id"])
    assert fee["months"] == ["May", "June"]


def test_record_fee_validation(client, login):
    admin = login("ADM-001")
    assert client.post("/api/fees", headers=admin, json={"student_id": "s2", "amount": 0}).status_code == 400
    assert client.post("/api/fees", headers=admin, json={"student_id": "2", "amount": 10}).status_code == 404
    assert client.post("/api/fees", headers=admin, json={"student_id": "", "amount": 10}).status_code == 422


def test_record_fee_admin_only(client, login):
    response = client.post("/api/fees", headers=login("TCH-001"), json={"student_id": "s2", "amount": 10})
    assert response.status_code == 403


def test_student_sees_only_own_fees(client, login):
    admin = login("ADM-001")
    client.post("/api/fees", headers=admin, json={"student_id": "s2", "amount": 4500})

    assert len(client.get("/api/fees", headers=admin).json()) == 2
    own = client.get("/api/fees", headers=login("STD-001")).json()
    assert [f["receipt_id"] for f in own] == ["778301380"]


def test_receipt_html(client, login):
    response = client.get("/api/fees/f1/receipt", headers=login("STD-001"))
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "#778301380" in html
    assert "Aarav Kumar" in html
    assert "UID: STD-001" in html
    assert "&#8377;5,000" in html
    assert "Period: April" in html


def test_receipt_of_other_student_forbidden(client, login):
    assert client.get("/api/fees/f1/receipt", headers=login("STD-002")).status_code == 403
    assert client.get("/api/fees/nope/receipt", headers=login("ADM-001")).status_code == 404


def test_receipt_escapes_and_handles_missing_student():
    config = SchoolConfig(name="<RPS>", logo="", address="Siwan", contact="1",
                          receipt_footer="Bye", receipt_prefix="778")
    fee = FeeRecord(id="f9", student_id="gone", amount=1250.5, status="PENDING", receipt_id="778000001")
    html = render_receipt(fee, None, config, issued=date(2024, 4, 1))
    assert "&lt;RPS&gt;" in html
    assert "<RPS>" not in html
    assert "UID: N/A" in html
    assert "Period: N/A" in html
    assert "AMOUNT DUE" in html
    assert "01/04/2024" in html
    assert "1,250.50" in html


def test_format_inr_grouping():
    assert format_inr(5000) == "5,000"
    assert format_inr(123456) == "1,23,456"
    assert format_inr(12345678) == "1,23,45,678"
    assert format_inr(999) == "999"


def test_school_config_update_admin_only(client, login):
    assert client.put("/api/school/config", headers=login("TCH-001"),
                      json={"receipt_prefix": "1"}).status_code == 403
    response = client.put("/api/school/config", headers=login("ADM-001"),
                          json={"receipt_footer": "Thank you"})
    assert response.status_code == 200
    assert response.json()["receipt_footer"] == "Thank you"
    assert response.json()["receipt_prefix"] == "778"
    assert client.get("/api/school/config", headers=login("STD-001")).json()["receipt_footer"] == "Thank you"


def test_list_classes(client, login):
    classes = client.get("/api/school/classes", headers=login("STD-001")).json()
    assert classes[0] == {"id": "CLASS-001", "name": "Grade 1", "teacher_id": "2"}
    assert classes[-1]["name"] == "Grade 11-A"


def test_fees_listed_newest_first(client, login):
    admin = login("ADM-001")
    client.post("/api/fees", headers=admin, json={"student_id": "s1", "amount": 4500, "months": ["May"]})
    client.post("/api/fees", headers=admin, json={"student_id": "s2", "amount": 3000, "months": ["June"]})

    assert [f["months"] for f in client.get("/api/fees", headers=admin).json()] == [["June"], ["May"], ["April"]]
    assert [f["months"] for f in client.get("/api/fees", headers=login("STD-001")).json()] == [["May"], ["April"]]
