"""Tests for API endpoints."""

import pytest
from fastapi.testclient import TestClient

from task_parser.config import Config
from task_parser.factory import create_app
from task_parser.models import ParserMode

REFERENCE = "2025-01-15T10:30:00"


@pytest.fixture
def test_config() -> Config:
    """Create test config with churn as default mode."""
    return Config(default_mode=ParserMode.CHURN, host="127.0.0.1", port=8000)


@pytest.fixture
def test_client(test_config: Config, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """Create test client with mocked config."""
    # Override factory config
    monkeypatch.setattr("task_parser.factory._config", test_config)

    return TestClient(create_app())


def test_health_endpoint(test_client: TestClient) -> None:
    """Test GET /api/health endpoint."""
    response = test_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_churn_endpoint(test_client: TestClient) -> None:
    """Test POST /api/parse in churn mode."""
    response = test_client.post(
        "/api/parse",
        json={
            "text": "every monday Deploy app @relay +urgent ~2h window:09:00-17:00 after:3,1",
            "mode": "churn",
            "reference": REFERENCE,
        },
    )

    assert response.status_code == 200
    task = response.json()
    assert task["mode"] == "churn"
    assert task["title"] == "Deploy app"
    assert task["project"] == "relay"
    assert task["tags"] == ["urgent"]
    assert task["duration"] == 120
    assert task["window"] == {"start": "09:00", "end": "17:00"}
    assert task["dependencies"] == [3, 1]
    assert task["recurrence"]["mode"] == "calendar"
    assert task["recurrence"]["type"] == "weekly"
    assert task["recurrence"]["day_of_week"] == 1
    assert task["recurrence"]["anchor"] == "2025-01-15"
    assert task["timestamp"] is None


def test_parse_tt_endpoint(test_client: TestClient) -> None:
    """Test POST /api/parse in tt mode."""
    response = test_client.post(
        "/api/parse",
        json={"text": "09:00 Standup @team ^2 # daily", "mode": "tt", "reference": REFERENCE},
    )

    assert response.status_code == 200
    task = response.json()
    assert task["mode"] == "tt"
    assert task["timestamp"] == "2025-01-15T09:00:00"
    assert task["title"] == "Standup"
    assert task["priority"] == 2
    assert task["remark"] == "daily"
    assert task["date"] is None


def test_parse_default_mode(
    test_client: TestClient, test_config: Config, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test requests without a mode use the configured default."""
    monkeypatch.setattr(test_config, "default_mode", ParserMode.TT)

    response = test_client.post("/api/parse", json={"text": "17:00 @end", "reference": REFERENCE})

    assert response.status_code == 200
    assert response.json()["mode"] == "tt"
    assert response.json()["state"] == "end"


@pytest.mark.parametrize(
    ("text", "detail"),
    [
        ("   ", "Task description cannot be empty"),
        ("@relay +urgent", "Task title is required"),
        ("Ship after:0", "Invalid dependency ID: 0 (must be positive integer) at position 5"),
    ],
)
def test_parse_endpoint_rejects(test_client: TestClient, text: str, detail: str) -> None:
    """Test POST /api/parse maps parse errors to 422."""
    response = test_client.post("/api/parse", json={"text": text, "mode": "churn"})

    assert response.status_code == 422
    assert response.json()["detail"] == detail


def test_parse_endpoint_unknown_mode(test_client: TestClient) -> None:
    """Test unknown modes fail request validation."""
    response = test_client.post("/api/parse", json={"text": "Task", "mode": "jira"})

    assert response.status_code == 422


def test_format_churn_endpoint(test_client: TestClient) -> None:
    """Test POST /api/format in churn mode."""
    response = test_client.post(
        "/api/format",
        json={
            "task": {
                "title": "Review inbox",
                "tags": ["mail"],
                "duration": 15,
                "bucket": "ops",
                "recurrence": {"mode": "calendar", "type": "weekly", "days_of_week": [5, 1, 3]},
            },
            "mode": "churn",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Mon,Wed,Fri Review inbox +mail ~15m $ops"}


def test_format_tt_endpoint(test_client: TestClient) -> None:
    """Test POST /api/format in tt mode."""
    response = test_client.post(
        "/api/format",
        json={
            "task": {
                "title": "Meeting",
                "timestamp": "2025-01-14T09:00:00",
                "explicit_duration": 45,
                "state_suffix": "completed",
            },
            "mode": "tt",
            "reference": REFERENCE,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"text": "2025-01-14 09:00 Meeting (45m) ->completed"}


def test_parse_format_roundtrip(test_client: TestClient) -> None:
    """Test a parse response can be posted back to /api/format."""
    text = "2025-01-10 Deploy app @relay +urgent ~2h $ProjectA"
    parsed = test_client.post("/api/parse", json={"text": text, "reference": REFERENCE}).json()

    response = test_client.post("/api/format", json={"task": parsed})

    assert response.json() == {"text": text}


def test_tokenize_endpoint(test_client: TestClient) -> None:
    """Test POST /api/tokenize endpoint."""
    response = test_client.post("/api/tokenize", json={"text": "Deploy @relay ~1h30m"})

    assert response.status_code == 200
    assert response.json() == [
        {"type": "description", "value": "Deploy", "position": 0},
        {"type": "project", "value": "relay", "position": 7},
        {"type": "duration", "value": "1h30m", "position": 14},
    ]


def test_tokenize_endpoint_empty(test_client: TestClient) -> None:
    """Test POST /api/tokenize rejects blank input."""
    response = test_client.post("/api/tokenize", json={"text": " ", "mode": "tt"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Input cannot be empty"


def test_format_endpoint_rejects_bad_weekday(test_client: TestClient) -> None:
    """Test weekday set entries are validated as 0-6."""
    response = test_client.post(
        "/api/format",
        json={
            "task": {
                "title": "Review",
                "recurrence": {"mode": "calendar", "type": "weekly", "days_of_week": [1, 9]},
            },
            "mode": "churn",
        },
    )

    assert response.status_code == 422
