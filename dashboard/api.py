import logging

import httpx

from config import API_BASE

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the task API failed.

    `message` is the server's own explanation when the response carried one,
    otherwise None (network failure, non-JSON body, ...).
    """

    def __init__(self, message=None, status_code=None):
        if message is None:
            message_text = (
                "Could not reach the task API" if status_code is None
                else f"API request failed (status {status_code})"
            )
        else:
            message_text = message
        super().__init__(message_text)
        self.message = message
        self.status_code = status_code


class ApiClient:
    def __init__(self, session, base_url=API_BASE, transport=None, timeout=10.0):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    def _headers(self):
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def _request(self, method, path, json_data=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            with httpx.Client(transport=self._transport, timeout=self._timeout) as client:
                response = client.request(method, url, headers=self._headers(), json=json_data)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError() from e

        if response.is_error:
            raise ApiError(_server_message(response), response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(None, response.status_code) from e

    # ---- auth ----

    def register(self, name, email, password):
        return self._request("POST", "/api/auth/register", {"name": name, "email": email, "password": password})

    def login(self, email, password):
        return self._request("POST", "/api/auth/login", {"email": email, "password": password})

    # ---- tasks ----

    def list_tasks(self):
        return self._request("GET", "/api/tasks")

    def create_task(self, fields):
        return self._request("POST", "/api/tasks", fields)

    def update_task(self, task_id, updates):
        return self._request("PUT", f"/api/tasks/{task_id}", updates)

    def delete_task(self, task_id):
        self._request("DELETE", f"/api/tasks/{task_id}")


def _server_message(response):
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
