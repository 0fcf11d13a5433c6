from unittest.mock import MagicMock, patch

import pytest
import requests

from tools.weather_api import describe_weather_code, get_weather_forecast


def open_meteo_response():
    response = MagicMock()
    response.json.return_value = {
        "daily": {
            "time": ["2026-10-19", "2026-10-20"],
            "weathercode": [0, 63],
            "temperature_2m_max": [32.0, 30.0],
            "temperature_2m_min": [22.0, 21.0],
            "precipitation_sum": [0.0, 12.4],
            "wind_speed_10m_max": [11.0, 18.3],
        }
    }
    return response


def test_forecast_is_formatted_per_day():
    with patch("tools.weather_api.requests.get", return_value=open_meteo_response()) as mock_get:
        result = get_weather_forecast.invoke({"latitude": 17.39, "longitude": 78.32})

    params = mock_get.call_args.kwargs["params"]
    assert params["latitude"] == 17.39
    assert params["forecast_days"] == 7
    assert "weathercode" in params["daily"]
    assert result.startswith("7-Day Weather Forecast:")
    assert "- Monday, Oct 19: 27.0°C, Clear sky (range 22.0°C to 32.0°C, rain 0.0mm, wind up to 11.0 km/h)" in result
    assert "- Tuesday, Oct 20: 25.5°C, Rain (range 21.0°C to 30.0°C, rain 12.4mm, wind up to 18.3 km/h)" in result


@pytest.mark.parametrize("code, condition", [
    (0, "Clear sky"),
    (2, "Partly cloudy"),
    (45, "Fog"),
    (55, "Drizzle"),
    (81, "Rain showers"),
    (95, "Thunderstorm"),
    (42, "Unknown"),
    (None, "Unknown"),
])
def test_weather_codes_map_to_conditions(code, condition):
    assert describe_weather_code(code) == condition


def test_request_failures_are_reported_as_text():
    with patch("tools.weather_api.requests.get", side_effect=requests.exceptions.ConnectionError("offline")):
        result = get_weather_forecast.invoke({"latitude": 17.39, "longitude": 78.32})
    assert result.startswith("Error fetching weather data")


def test_unexpected_payload_is_reported_as_text():
    response = MagicMock()
    response.json.return_value = {"error": True}
    with patch("tools.weather_api.requests.get", return_value=response):
        result = get_weather_forecast.invoke({"latitude": 17.39, "longitude": 78.32})
    assert result.startswith("Error processing weather data")


def test_empty_forecast_is_reported_as_text():
    response = open_meteo_response()
    response.json.return_value["daily"] = {key: [] for key in response.json.return_value["daily"]}
    with patch("tools.weather_api.requests.get", return_value=response):
        result = get_weather_forecast.invoke({"latitude": 17.39, "longitude": 78.32})
    assert result.startswith("Error processing weather data")
