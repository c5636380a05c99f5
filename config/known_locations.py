"""
BirthWindow - Fallback Location Table

Major world cities used when the online geocoder is unreachable or
returns nothing. Keys are lower-case search patterns matched as substrings
of the user's query.
"""

KNOWN_LOCATIONS = {
    # Major US cities
    "new york": {
        "latitude": 40.7128, "longitude": -74.0060,
        "city": "New York", "country": "United States",
        "formatted_address": "New York, NY, USA", "confidence": 0.9,
    },
    "los angeles": {
        "latitude": 34.0522, "longitude": -118.2437,
        "city": "Los Angeles", "country": "United States",
        "formatted_address": "Los Angeles, CA, USA", "confidence": 0.9,
    },
    "chicago": {
        "latitude": 41.8781, "longitude": -87.6298,
        "city": "Chicago", "country": "United States",
        "formatted_address": "Chicago, IL, USA", "confidence": 0.9,
    },
    "houston": {
        "latitude": 29.7604, "longitude": -95.3698,
        "city": "Houston", "country": "United States",
        "formatted_address": "Houston, TX, USA", "confidence": 0.9,
    },
    "san francisco": {
        "latitude": 37.7749, "longitude": -122.4194,
        "city": "San Francisco", "country": "United States",
        "formatted_address": "San Francisco, CA, USA", "confidence": 0.9,
    },
    # International cities
    "london": {
        "latitude": 51.5074, "longitude": -0.1278,
        "city": "London", "country": "United Kingdom",
        "formatted_address": "London, UK", "confidence": 0.9,
    },
    "paris": {
        "latitude": 48.8566, "longitude": 2.3522,
        "city": "Paris", "country": "France",
        "formatted_address": "Paris, France", "confidence": 0.9,
    },
    "tokyo": {
        "latitude": 35.6762, "longitude": 139.6503,
        "city": "Tokyo", "country": "Japan",
        "formatted_address": "Tokyo, Japan", "confidence": 0.9,
    },
    "sydney": {
        "latitude": -33.8688, "longitude": 151.2093,
        "city": "Sydney", "country": "Australia",
        "formatted_address": "Sydney, NSW, Australia", "confidence": 0.9,
    },
    "toronto": {
        "latitude": 43.6532, "longitude": -79.3832,
        "city": "Toronto", "country": "Canada",
        "formatted_address": "Toronto, ON, Canada", "confidence": 0.9,
    },
    "berlin": {
        "latitude": 52.5200, "longitude": 13.4050,
        "city": "Berlin", "country": "Germany",
        "formatted_address": "Berlin, Germany", "confidence": 0.9,
    },
    "madrid": {
        "latitude": 40.4168, "longitude": -3.7038,
        "city": "Madrid", "country": "Spain",
        "formatted_address": "Madrid, Spain", "confidence": 0.9,
    },
    "rome": {
        "latitude": 41.9028, "longitude": 12.4964,
        "city": "Rome", "country": "Italy",
        "formatted_address": "Rome, Italy", "confidence": 0.9,
    },
}

# Default location shown on the dashboard landing page
DEFAULT_LOCATION_KEY = "new york"
