from datetime import timedelta

from medikey.models import HealthMetric
from medikey.services.health_analytics import (
    TimeRange,
    build_analytics,
    calculate_bmi,
    height_in_m,
    parse_blood_pressure,
    window_start,
)
from medikey.utils.timezone import utcnow
from tests.conftest import API


def days_ago(days: int) -> str:
    return (utcnow() - timedelta(days=days)).isoformat()


def add_metric(client, headers, metric_type, value, unit="", recorded_at=None):
    payload = {"metricType": metric_type, "value": value, "unit": unit}
    if recorded_at:
        payload["recordedAt"] = recorded_at
    response = client.post(f"{API}/health-metrics/", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestMetricEntries:
    def test_create_scalar_and_compound_values(self, client, alice):
        scalar = add_metric(client, alice["headers"], "heart_rate", 72, "bpm")
        assert scalar["value"] == "72"
        assert scalar["metricType"] == "heart_rate"

        compound = add_metric(client, alice["headers"], "blood_pressure", {"systolic": 120, "diastolic": 80}, "mmHg")
        assert compound["value"] == '{"systolic": 120, "diastolic": 80}'

    def test_recorded_at_defaults_to_now(self, client, alice):
        metric = add_metric(client, alice["headers"], "weight", "70.5", "kg")
        assert metric["recordedAt"]

    def test_entries_newest_first_and_filtered(self, client, alice):
        add_metric(client, alice["headers"], "weight", 70, "kg", days_ago(3))
        add_metric(client, alice["headers"], "weight", 69, "kg", days_ago(1))
        add_metric(client, alice["headers"], "heart_rate", 70, "bpm", days_ago(2))

        weights = client.get(
            f"{API}/health-metrics/entries", headers=alice["headers"], params={"metricType": "weight"}
        ).json()
        assert [m["value"] for m in weights] == ["69", "70"]
        everything = client.get(f"{API}/health-metrics/entries", headers=alice["headers"]).json()
        assert len(everything) == 3

    def test_delete_respects_ownership(self, client, alice, bob):
        metric = add_metric(client, alice["headers"], "weight", 70, "kg")
        assert client.delete(f"{API}/health-metrics/{metric['id']}", headers=bob["headers"]).status_code == 403
        assert client.delete(f"{API}/health-metrics/999", headers=alice["headers"]).status_code == 404
        response = client.delete(f"{API}/health-metrics/{metric['id']}", headers=alice["headers"])
        assert response.status_code == 200

    def test_missing_value_is_rejected(self, client, alice):
        response = client.post(f"{API}/health-metrics/", headers=alice["headers"], json={"metricType": "weight"})
        assert response.status_code == 422


class TestAnalyticsEndpoint:
    def test_change_is_latest_minus_earliest(self, client, alice):
        add_metric(client, alice["headers"], "blood_sugar", 110, "mg/dL", days_ago(20))
        add_metric(client, alice["headers"], "blood_sugar", 108, "mg/dL", days_ago(10))
        add_metric(client, alice["headers"], "blood_sugar", 105, "mg/dL", days_ago(1))
        body = client.get(f"{API}/health-metrics/", headers=alice["headers"]).json()
        assert body["timeRange"] == "3m"
        assert body["bloodSugar"]["latest"] == "105 mg/dL"
        assert body["bloodSugar"]["change"] == -5
        assert [p["value"] for p in body["bloodSugar"]["data"]] == [110, 108, 105]

    def test_blood_pressure_series(self, client, alice):
        add_metric(client, alice["headers"], "blood_pressure", {"systolic": 132, "diastolic": 85}, "mmHg", days_ago(5))
        add_metric(client, alice["headers"], "blood_pressure", "128/82", "mmHg", days_ago(1))
        series = client.get(f"{API}/health-metrics/", headers=alice["headers"]).json()["bloodPressure"]
        assert series["latest"] == "128/82"
        assert series["change"] == -4
        assert series["data"][0]["systolic"] == 132
        assert series["data"][1]["diastolic"] == 82

    def test_time_range_excludes_old_readings(self, client, alice):
        add_metric(client, alice["headers"], "heart_rate", 80, "bpm", days_ago(60))
        add_metric(client, alice["headers"], "heart_rate", 70, "bpm", days_ago(2))
        one_month = client.get(f"{API}/health-metrics/", headers=alice["headers"], params={"timeRange": "1m"}).json()
        assert len(one_month["heartRate"]["data"]) == 1
        assert one_month["heartRate"]["change"] is None
        everything = client.get(f"{API}/health-metrics/", headers=alice["headers"], params={"timeRange": "all"}).json()
        assert everything["heartRate"]["change"] == -10

    def test_weight_carries_bmi_when_height_known(self, client, alice):
        add_metric(client, alice["headers"], "height", 175, "cm", days_ago(100))
        add_metric(client, alice["headers"], "weight", 70, "kg", days_ago(1))
        weight = client.get(f"{API}/health-metrics/", headers=alice["headers"]).json()["weight"]
        assert weight["data"][0]["bmi"] == 22.9
        assert weight["latest"] == "70 kg / 22.9"

    def test_empty_series(self, client, alice):
        body = client.get(f"{API}/health-metrics/", headers=alice["headers"]).json()
        assert body["weight"] == {"latest": None, "change": None, "data": []}

    def test_invalid_time_range_is_422(self, client, alice):
        response = client.get(f"{API}/health-metrics/", headers=alice["headers"], params={"timeRange": "2w"})
        assert response.status_code == 422


class TestAnalyticsHelpers:
    def test_parse_blood_pressure_forms(self):
        assert parse_blood_pressure('{"systolic": 120, "diastolic": 80}') == {"systolic": 120.0, "diastolic": 80.0}
        assert parse_blood_pressure("118/76 mmHg") == {"systolic": 118.0, "diastolic": 76.0}
        assert parse_blood_pressure("high") is None

    def test_height_units(self):
        assert height_in_m(180, "cm") == 1.8
        assert height_in_m(1.8, "m") == 1.8
        assert round(height_in_m(70, "in"), 3) == 1.778
        assert height_in_m(180, "") == 1.8

    def test_bmi_from_pounds(self):
        assert calculate_bmi(165, "lbs", 1.75) == 24.4
        assert calculate_bmi(70, "kg", None) is None

    def test_window_start(self):
        now = utcnow()
        assert window_start(TimeRange.ALL, now) is None
        assert window_start(TimeRange.ONE_YEAR, now) == now - timedelta(days=365)

    def test_non_numeric_values_are_skipped(self):
        now = utcnow()
        rows = [
            HealthMetric(id=1, metric_type="heart_rate", value="n/a", unit="bpm", recorded_at=now - timedelta(days=1)),
            HealthMetric(id=2, metric_type="heart_rate", value="64", unit="bpm", recorded_at=now),
        ]
        analytics = build_analytics(rows, TimeRange.ONE_MONTH)
        assert analytics["heart_rate"]["latest"] == "64 bpm"
        assert len(analytics["heart_rate"]["data"]) == 1
