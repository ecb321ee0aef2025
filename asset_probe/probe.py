"""
Single-shot API probe for the local asset-management server
"""

import logging
from typing import Optional

import requests


DEFAULT_URL = "http://localhost:5000/api/asset-categories"
SNIPPET_LENGTH = 200


class ApiProbe:
    """Issue one GET and report status, body snippet or transport error on stdout"""

    def __init__(self, url=DEFAULT_URL, timeout=None, snippet_length=SNIPPET_LENGTH, session=None):
        self.url = url
        self.timeout = timeout
        self.snippet_length = snippet_length
        self._owns_session = session is None
        self.session = session or requests.Session()

        self.status_code: Optional[int] = None
        self.body: Optional[str] = None
        self.error: Optional[Exception] = None
        self._buffer = bytearray()

        # Setup logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        self.logger = logging.getLogger(__name__)

    def on_status(self, status_code: int):
        """Called once when response headers arrive"""
        print(f"Status: {status_code}", flush=True)

    def on_chunk(self, chunk: bytes):
        """Append one body chunk in arrival order"""
        self._buffer.extend(chunk)
        self.logger.debug(f"Received chunk of {len(chunk)} bytes ({len(self._buffer)} total)")

    def on_end(self, body: str):
        """Called once when the body stream is exhausted"""
        print(f"Data: {body[:self.snippet_length]}", flush=True)

    def on_error(self, error: Exception):
        """Called once on a transport-level failure"""
        print(f"Error: {error}", flush=True)

    def _fetch(self) -> int:
        """Issue the request and dispatch each outcome to its hook"""
        print("Testing API...", flush=True)
        self.logger.info(f"GET {self.url}")

        try:
            response = self.session.get(self.url, stream=True, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed before headers: {e}")
            self.error = e
            self.on_error(e)
            return 0

        with response:
            self.status_code = response.status_code
            self.on_status(response.status_code)

            try:
                for chunk in response.iter_content(chunk_size=None):
                    if chunk:
                        self.on_chunk(chunk)
            except requests.exceptions.RequestException as e:
                self.logger.error(f"Body stream failed after {len(self._buffer)} bytes: {e}")
                self.error = e
                self.on_error(e)
                return 0

        self.body = self._buffer.decode('utf-8', errors='replace')
        self.logger.info(f"Stream ended, {len(self._buffer)} bytes received")
        self.on_end(self.body)
        return 0

    def run(self) -> int:
        """Main entry point; always returns 0 unless the process itself fails"""
        try:
            return self._fetch()
        finally:
            if self._owns_session:
                self.session.close()
