"""Client for the public Greenhouse job board embed API."""

from __future__ import annotations

from typing import Any, Mapping

from .api import ApiClient
from .config import GreenhouseConfig, resolve_organization


class JobBoard(ApiClient):
    """Read a single organization's public job board and submit applications.

    Reads are unauthenticated. ``organization`` may be overridden per call; when
    neither the call nor the client supplies one, the slug segment of the path
    is left empty and the server decides what to do with it.
    """

    def __init__(
        self,
        api_token: str | None = None,
        *,
        organization: str | None = None,
        config: GreenhouseConfig | None = None,
    ):
        super().__init__(api_token, config=config)
        self.organization = resolve_organization(organization, self.config)

    @property
    def base_url(self) -> str:
        return self.config.job_board_url

    def offices(self, organization: str | None = None) -> Any:
        return self._request("GET", self._board_path("offices", organization))

    def office(self, office_id: int, organization: str | None = None) -> Any:
        return self._request(
            "GET", self._board_path("office", organization), params={"id": office_id}
        )

    def departments(self, organization: str | None = None) -> Any:
        return self._request("GET", self._board_path("departments", organization))

    def department(self, department_id: int, organization: str | None = None) -> Any:
        return self._request(
            "GET", self._board_path("department", organization), params={"id": department_id}
        )

    def jobs(self, organization: str | None = None, *, content: bool = False) -> Any:
        """List published jobs; ``content=True`` includes each job description."""
        params = {"content": "true"} if content else None
        return self._request("GET", self._board_path("jobs", organization), params=params)

    def job(self, job_id: int, organization: str | None = None, *, questions: bool = False) -> Any:
        """Fetch one job; ``questions=True`` includes the application form questions."""
        return self._request(
            "GET",
            self._board_path("job", organization),
            params={"id": job_id, "questions": _flag(questions)},
        )

    def apply_to_job(self, application: Mapping[str, Any]) -> Any:
        """Submit a job application as a form-encoded body."""
        auth = self._basic_auth() if self.api_token else None
        return self._request("POST", "applications", data=application, auth=auth)

    def _board_path(self, resource: str, organization: str | None) -> str:
        slug = organization or self.organization or ""
        return f"boards/{slug}/embed/{resource}"


def _flag(value: bool) -> str:
    return "true" if value else "false"
