"""
Thin requests-based client for the asset-management REST API
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import requests

from .exceptions import ApiConnectionError, ApiError, AuthenticationError


DEFAULT_BASE_URL = "http://localhost:5000/api"


class AssetApiClient:
    """Session-backed client for the auth and asset-category endpoints"""

    def __init__(self, base_url=DEFAULT_BASE_URL, timeout=30, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.token: Optional[str] = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        self.logger.info(f"Making request: {method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"HTTP request failed: {e}")
            raise ApiConnectionError(str(e)) from e

        self.logger.debug(f"{method} {url} -> {response.status_code}")
        if not response.ok:
            raise ApiError(
                self._error_message(response),
                status_code=response.status_code,
                body=response.text
            )
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON in response: {e}",
                status_code=response.status_code,
                body=response.text
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the server's JSON 'message' field, fall back to the reason phrase"""
        try:
            data = response.json()
        except ValueError:
            return response.reason or f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("message"):
            return data["message"]
        return response.reason or f"HTTP {response.status_code}"

    def login(self, email: str, password: str) -> Dict:
        """Authenticate and attach the bearer token to the session"""
        try:
            data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        except ApiConnectionError:
            raise
        except ApiError as e:
            raise AuthenticationError(e.message, status_code=e.status_code, body=e.body) from e

        if not isinstance(data, dict):
            raise AuthenticationError("Login response was not a JSON object")
        # Token is either in the body or only in the jwt cookie, depending on server version
        token = data.get("token") or self.session.cookies.get("jwt")
        if not token:
            raise AuthenticationError("Login response carried no token")

        self.token = token
        self.session.headers["Authorization"] = f"Bearer {token}"
        self.logger.info(f"Logged in as {data.get('email', email)}")
        return data

    def list_categories(self) -> List[Dict]:
        return self._request("GET", "/asset-categories")

    def get_category_stats(self) -> List[Dict]:
        return self._request("GET", "/asset-categories/stats")

    def create_category(self, name: str) -> Dict:
        return self._request("POST", "/asset-categories", json={"name": name})

    def add_type(self, category_id: str, name: str) -> Dict:
        """Returns the updated category"""
        return self._request("POST", f"/asset-categories/{category_id}/types", json={"name": name})

    def add_product(self, category_id: str, type_name: str, name: str) -> Dict:
        """Returns the updated category"""
        path = f"/asset-categories/{category_id}/types/{quote(type_name, safe='')}/products"
        return self._request("POST", path, json={"name": name})

    def add_child_product(self, product_id: str, name: str) -> Dict:
        """Returns the updated category"""
        return self._request("POST", f"/asset-categories/products/{product_id}/children", json={"name": name})
