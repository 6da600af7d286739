"""Integration tests for API endpoints"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from nova_verte.api.dependencies import get_exporter, get_simulator
from nova_verte.domain.models import SessionSnapshot


def money(value) -> Decimal:
    """JSON money may come back as a string or a number"""
    return Decimal(str(value))


@pytest.fixture
def first_title_id(client: TestClient) -> str:
    """Id of the title seeded on first visit"""
    return client.get("/v1/simulator").json()["titles"][0]["id"]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "nova_verte_simulation_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_first_visit_state(client: TestClient):
    """One empty title dated today, default rate, no result"""
    response = client.get("/v1/simulator")

    assert response.status_code == 200
    data = response.json()
    assert len(data["titles"]) == 1
    assert data["titles"][0]["faceValue"] == ""
    assert data["titles"][0]["dueDate"] == "2025-01-10"
    assert data["monthlyRate"] == "5.00"
    assert data["result"] is None
    assert data["resultVisible"] is False
    assert data["notices"] == []


def test_fee_schedule(client: TestClient):
    data = client.get("/v1/simulator/fees").json()

    assert money(data["inclusionFee"]) == Decimal("25.00")
    assert money(data["wireFee"]) == Decimal("7.00")
    assert money(data["registrationFee"]) == Decimal("9.80")
    assert data["defaultMonthlyRate"] == "5.00"


def test_add_and_remove_title(client: TestClient, first_title_id: str):
    response = client.post("/v1/simulator/titles")

    assert response.status_code == 201
    data = response.json()
    assert len(data["titles"]) == 2
    assert data["notices"] == [{"level": "success", "message": "Duplicata adicionada com sucesso!"}]

    new_id = data["titles"][1]["id"]
    response = client.delete(f"/v1/simulator/titles/{new_id}")

    assert response.status_code == 200
    assert [t["id"] for t in response.json()["titles"]] == [first_title_id]
    assert response.json()["notices"][0]["message"] == "Duplicata removida com sucesso!"


def test_remove_unknown_title(client: TestClient):
    response = client.delete("/v1/simulator/titles/does-not-exist")
    assert response.status_code == 404


def test_update_title(client: TestClient, first_title_id: str):
    response = client.patch(
        f"/v1/simulator/titles/{first_title_id}",
        json={"field": "faceValue", "value": "R$ 1.000,00"},
    )

    assert response.status_code == 200
    assert response.json()["titles"][0]["faceValue"] == "R$ 1.000,00"

    # State survives across requests
    assert client.get("/v1/simulator").json()["titles"][0]["faceValue"] == "R$ 1.000,00"


def test_update_rejects_unknown_field(client: TestClient, first_title_id: str):
    response = client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "id", "value": "x"})
    assert response.status_code == 422


def test_set_rate(client: TestClient):
    response = client.put("/v1/simulator/rate", json={"monthlyRate": "3.75"})

    assert response.status_code == 200
    assert response.json()["monthlyRate"] == "3.75"


def test_calculate_single_title(client: TestClient, first_title_id: str):
    """R$ 1.000,00 due today at 5% -> R$ 953,20 net"""
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})

    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 200
    data = response.json()
    assert data["resultVisible"] is True
    assert data["notices"][0]["message"] == "Cálculo realizado com sucesso!"

    result = data["result"]
    assert money(result["grossTotal"]) == Decimal("1000.00")
    assert money(result["discountTotal"]) == Decimal("5.00")
    assert money(result["feesTotal"]) == Decimal("34.80")
    assert money(result["netAmount"]) == Decimal("953.20")
    assert result["lines"][0]["title"] == "Título 1"
    assert result["lines"][0]["days"] == 3


def test_calculate_with_missing_value(client: TestClient):
    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 422
    assert response.json()["detail"] == "Por favor, preencha todos os campos (Valor e Data) corretamente."


def test_calculate_with_past_due_date(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "100000"})
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "dueDate", "value": "2025-01-09"})

    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 422
    assert response.json()["detail"] == "A data de vencimento não pode ser no passado."
    assert client.get("/v1/simulator").json()["result"] is None


def test_calculate_with_no_titles(client: TestClient, first_title_id: str):
    client.delete(f"/v1/simulator/titles/{first_title_id}")

    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 422
    assert response.json()["detail"] == "Adicione pelo menos uma duplicata para calcular."


def test_report_before_calculation(client: TestClient):
    assert client.get("/v1/simulator/report").status_code == 409

    response = client.get("/v1/simulator/report.pdf")
    assert response.status_code == 409
    assert response.json()["detail"] == "Nenhum resultado para gerar PDF."


def test_report_after_calculation(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.post("/v1/simulator/calculate")

    response = client.get("/v1/simulator/report")

    assert response.status_code == 200
    data = response.json()
    assert data["simulationDate"] == "10/01/2025"
    assert data["monthlyRate"] == "5,00%"
    assert data["titleCount"] == 1
    assert data["lines"][0] == {
        "title": "Título 1",
        "days": "3",
        "faceValue": "R$ 1.000,00",
        "discount": "R$ 5,00",
        "netValue": "R$ 995,00",
    }
    assert data["expensesTotal"] == "R$ 46,80"
    assert data["netAmount"] == "R$ 953,20"


def test_pdf_download(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.post("/v1/simulator/calculate")

    response = client.get("/v1/simulator/report.pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="simulacao-nova-verte-2025-01-10.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")
    assert response.headers["x-notices"] == "Gerando PDF... | PDF gerado com sucesso!"


def test_reset(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.put("/v1/simulator/rate", json={"monthlyRate": "9.99"})
    second_id = client.post("/v1/simulator/titles").json()["titles"][1]["id"]
    client.patch(f"/v1/simulator/titles/{second_id}", json={"field": "faceValue", "value": "R$ 500,00"})
    calculated = client.post("/v1/simulator/calculate")
    assert calculated.status_code == 200
    assert calculated.json()["result"] is not None

    response = client.post("/v1/simulator/reset")

    assert response.status_code == 200
    data = response.json()
    assert len(data["titles"]) == 1
    assert data["titles"][0]["faceValue"] == ""
    assert data["titles"][0]["id"] != first_title_id
    assert data["monthlyRate"] == "5.00"
    assert data["result"] is None
    assert data["resultVisible"] is False
    assert data["notices"][0]["message"] == "Dados limpos com sucesso!"


def test_sessions_are_isolated(client: TestClient):
    client.put("/v1/simulator/rate", json={"monthlyRate": "2.00"}, headers={"X-Session-ID": "alice"})

    assert client.get("/v1/simulator", headers={"X-Session-ID": "alice"}).json()["monthlyRate"] == "2.00"
    assert client.get("/v1/simulator", headers={"X-Session-ID": "bob"}).json()["monthlyRate"] == "5.00"


def test_report_shows_fallback_rate(client: TestClient, first_title_id: str):
    """An unparseable rate is calculated at 5% and reported as 5,00%"""
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.put("/v1/simulator/rate", json={"monthlyRate": "abc"})
    client.post("/v1/simulator/calculate")

    data = client.get("/v1/simulator/report").json()

    assert data["monthlyRate"] == "5,00%"
    assert data["discountTotal"] == "R$ 5,00"


def test_calculate_rejects_non_dashed_due_date(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "dueDate", "value": "20250201"})

    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 422
    assert "preencha todos os campos" in response.json()["detail"]


class BrokenSimulator:
    """Simulator whose operations fail with an unexpected error"""

    snapshot = SessionSnapshot()

    def calculate(self):
        raise RuntimeError("disk on fire")

    def report(self):
        raise RuntimeError("disk on fire")


class BrokenExporter:
    media_type = "application/pdf"

    def render(self, blocks):
        raise RuntimeError("font missing")


def test_calculate_unexpected_error(client: TestClient):
    client.app.dependency_overrides[get_simulator] = lambda: BrokenSimulator()

    response = client.post("/v1/simulator/calculate")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_report_unexpected_error(client: TestClient):
    client.app.dependency_overrides[get_simulator] = lambda: BrokenSimulator()

    response = client.get("/v1/simulator/report")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"


def test_pdf_unexpected_error(client: TestClient, first_title_id: str):
    client.patch(f"/v1/simulator/titles/{first_title_id}", json={"field": "faceValue", "value": "R$ 1.000,00"})
    client.post("/v1/simulator/calculate")
    client.app.dependency_overrides[get_exporter] = lambda: BrokenExporter()

    response = client.get("/v1/simulator/report.pdf")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
