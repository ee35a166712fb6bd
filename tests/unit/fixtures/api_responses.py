"""
Sample currency-api payloads shared by the provider and service tests.
"""

USD_RATES_RESPONSE = {
    "date": "2024-03-06",
    "usd": {
        "eur": 0.92,
        "jpy": 149.5,
    },
}

EUR_RATES_RESPONSE = {
    "date": "2024-03-06",
    "eur": {
        "usd": 1.087,
        "gbp": 0.855,
        "jpy": 162.4,
    },
}

GBP_RATES_RESPONSE = {
    "date": "2024-03-06",
    "gbp": {
        "usd": 1.271,
        "eur": 1.169,
    },
}

MISSING_FIELD_RESPONSE = {
    "date": "2024-03-06",
    "eur": {"usd": 1.087},
}

NON_NUMERIC_RATES_RESPONSE = {
    "date": "2024-03-06",
    "usd": {"eur": "not-a-number"},
}

CURRENCIES_RESPONSE = {
    "eur": "Euro",
    "gbp": "British Pound",
    "usd": "US Dollar",
    "1inch": "",
}

INVALID_JSON_BODY = "This is not valid JSON {{"
