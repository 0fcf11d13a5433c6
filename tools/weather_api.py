# tools/weather_api.py
import requests
from langchain_core.tools import tool
from datetime import datetime

from core.config import settings

# WMO weather interpretation codes as reported by Open-Meteo.
WEATHER_CONDITIONS = [
    ((0,), "Clear sky"),
    ((1, 2, 3), "Partly cloudy"),
    ((45, 48), "Fog"),
    ((51, 53, 55, 56, 57), "Drizzle"),
    ((61, 63, 65, 66, 67), "Rain"),
    ((71, 73, 75, 77), "Snow"),
    ((80, 81, 82), "Rain showers"),
    ((85, 86), "Snow showers"),
    ((95, 96, 99), "Thunderstorm"),
]


def describe_weather_code(code) -> str:
    for codes, condition in WEATHER_CONDITIONS:
        if code in codes:
            return condition
    return "Unknown"


def format_forecast_day(date: str, code, max_temp: float, min_temp: float, precip: float, wind: float) -> str:
    """One line per day: day label, mean temperature, condition, then the raw extremes."""
    day = datetime.strptime(date, '%Y-%m-%d').strftime('%A, %b %d')
    temp = round((max_temp + min_temp) / 2, 1)
    return (
        f"- {day}: {temp}°C, {describe_weather_code(code)} "
        f"(range {min_temp}°C to {max_temp}°C, rain {precip}mm, wind up to {wind} km/h)"
    )


@tool
def get_weather_forecast(latitude: float, longitude: float) -> str:
    """
    Fetches the 7-day weather forecast for a farm's coordinates.
    Each day lists its mean temperature and sky condition, followed by the
    temperature range, rainfall and peak wind speed.
    """
    print(f"---TOOL: Fetching weather for Lat={latitude}, Lon={longitude}---")
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "daily": "weathercode,temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max",
        "timezone": "auto",
        "forecast_days": 7
    }

    try:
        response = requests.get(settings.weather_api_url, params=params, timeout=10)
        response.raise_for_status()
        daily = response.json()['daily']

        lines = [
            format_forecast_day(*day)
            for day in zip(
                daily['time'],
                daily['weathercode'],
                daily['temperature_2m_max'],
                daily['temperature_2m_min'],
                daily['precipitation_sum'],
                daily['wind_speed_10m_max'],
            )
        ]
        if not lines:
            raise ValueError("forecast contained no days")
        return "7-Day Weather Forecast:\n" + "\n".join(lines) + "\n"
    except requests.exceptions.RequestException as e:
        return f"Error fetching weather data: {e}"
    except (KeyError, IndexError, TypeError, ValueError) as e:
        return f"Error processing weather data: {e}"
