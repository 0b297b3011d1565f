from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import APIConnectionError

from app.config import Settings
from app.errors import GenerationError
from app.infra.storage import LocalStorage
from app.layout.document import PageGeometry
from app.main import app, get_download_storage, get_export_service, get_strategy_service
from app.models import StrategyContent
from app.services.export_service import ExportService
from app.services.strategy_service import StrategyService


STRATEGY = {
    "platform": "linkedin",
    "strategy": "Publish thought-leadership articles weekly.",
    "weeklyContentPlan": "Mon: article\nWed: case study\nFri: team spotlight",
    "algorithmKnowledge": "Dwell time and early comments drive distribution.",
}

FORM = {
    "businessDetails": "We are a startup selling eco-friendly handmade soaps.",
    "targetAudience": "Eco-conscious millennials aged 25-40.",
    "goals": "Increase online sales by 20%.",
    "platforms": ["linkedin"],
}


class DummyStrategyService:
    def __init__(self, fail: bool = False) -> None:
        self._fail = fail

    def create_strategy(self, request):
        if self._fail:
            raise GenerationError("AI failed to return a valid strategy.")
        return StrategyContent.model_validate({"strategies": [STRATEGY]})


@pytest.fixture
def client(tmp_path: Path):
    storage = LocalStorage(tmp_path)
    app.dependency_overrides[get_export_service] = lambda: ExportService(
        storage=storage,
        app_settings=Settings(data_dir=str(tmp_path)),
    )
    app.dependency_overrides[get_download_storage] = lambda: storage
    app.dependency_overrides[get_strategy_service] = lambda: DummyStrategyService()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_create_strategy(client: TestClient) -> None:
    resp = client.post("/strategies", json=FORM)

    assert resp.status_code == 200
    assert resp.json() == {"strategies": [STRATEGY]}


def test_create_strategy_rejects_short_fields(client: TestClient) -> None:
    resp = client.post("/strategies", json={**FORM, "goals": "sales", "platforms": []})

    assert resp.status_code == 422


def test_create_strategy_generation_failure(client: TestClient) -> None:
    app.dependency_overrides[get_strategy_service] = lambda: DummyStrategyService(fail=True)

    resp = client.post("/strategies", json=FORM)

    assert resp.status_code == 502


def test_export_returns_pdf_download(client: TestClient) -> None:
    resp = client.post("/export", params={"colorScheme": "dark"}, json={"strategies": [STRATEGY]})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="social-media-strategy.pdf"' in resp.headers["content-disposition"]
    assert resp.headers["x-page-count"] == "1"
    assert resp.content.startswith(b"%PDF")

    # 저장된 artifact 를 다시 받을 수 있다
    download = client.get(f"/download/{resp.headers['x-export-id']}")
    assert download.status_code == 200
    assert download.content == resp.content


def test_export_empty_content_is_no_content(client: TestClient) -> None:
    resp = client.post("/export", json={"strategies": []})

    assert resp.status_code == 204


def test_download_unknown_export(client: TestClient) -> None:
    resp = client.get("/download/does-not-exist")

    assert resp.status_code == 404


class UnreachableLLM:
    def generate_strategies(self, request):
        raise APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )


def test_create_strategy_when_openai_is_unreachable(client: TestClient) -> None:
    app.dependency_overrides[get_strategy_service] = lambda: StrategyService(llm=UnreachableLLM())

    resp = client.post("/strategies", json=FORM)

    assert resp.status_code == 502


def test_export_with_missing_font_metrics_fails_once(client: TestClient, tmp_path: Path) -> None:
    app.dependency_overrides[get_export_service] = lambda: ExportService(
        storage=LocalStorage(tmp_path),
        app_settings=Settings(data_dir=str(tmp_path)),
        geometry=PageGeometry(font_name="NoSuchFont-Regular"),
    )

    resp = client.post("/export", json={"strategies": [STRATEGY]})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "PDF 생성에 실패했습니다."}
    assert not (tmp_path / "exports").exists()
