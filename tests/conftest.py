from __future__ import annotations

import pytest


@pytest.fixture
def measurement_rows() -> list[dict]:
    return [
        {
            "measurement": "Hemoglobin",
            "answer_value": 13.2,
            "evaluation_date_time": "2024-01-15T10:30:00Z",
        },
        {
            "measurement": "Hemoglobin",
            "answer_value": 12.8,
            "evaluation_date_time": "2024-01-22T09:00:00Z",
        },
    ]
