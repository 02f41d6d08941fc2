"""
Test helpers and utilities for Formrelay tests.
"""

from typing import Any, Dict, Optional


class MockResponse:
    """Mock HTTP response object, quacks like the bits of httpx.Response we use"""

    def __init__(self, json_data: Optional[Dict[str, Any]] = None, status_code: int = 200, text: str = ''):
        self._json_data = json_data
        self.status_code = status_code
        self.text = text

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Dict[str, Any]:
        if self._json_data is None:
            raise ValueError('No JSON data')
        return self._json_data


def create_error_response(status_code: int = 500, text: str = 'Internal Server Error') -> MockResponse:
    """Helper to create an error response"""
    return MockResponse(json_data={'errors': [{'title': text}]}, status_code=status_code, text=text)


class FakeClock:
    """A clock for FieldIdCache that only moves when told to"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


AC_FIELDS = [
    {'id': '5', 'title': 'Garment Type'},
    {'id': '6', 'title': ' garment color '},
    {'id': '7', 'title': 'Print Type'},
    {'id': 8, 'title': 'Tax Exempt'},
    {'id': '9', 'title': 'Quote – Total'},
    {'id': '10', 'title': None},
]
