"""HTTP client for the authenticated Greenhouse Harvest API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests.utils import parse_header_links

from .api import PAGINATION_OPTIONS, ApiClient, path_id, permitted_options
from .config import GreenhouseConfig

LOGGER = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
LINK_HEADER = "Link"

_CREATED = frozenset({"created_before", "created_after"})
_UPDATED = frozenset({"updated_before", "updated_after"})

CANDIDATE_OPTIONS = PAGINATION_OPTIONS | _CREATED | _UPDATED | {"job_id"}
APPLICATION_OPTIONS = PAGINATION_OPTIONS | _CREATED | {"job_id", "status", "last_activity_after"}
SCORECARD_OPTIONS = PAGINATION_OPTIONS | _CREATED | _UPDATED
INTERVIEW_OPTIONS = PAGINATION_OPTIONS | _CREATED | _UPDATED
JOB_OPTIONS = PAGINATION_OPTIONS | _CREATED | _UPDATED | {"status", "department_id", "office_id"}
OFFER_OPTIONS = PAGINATION_OPTIONS | _CREATED | _UPDATED | {"status"}

# Union of every per-endpoint whitelist.
PERMITTED_OPTIONS = (
    CANDIDATE_OPTIONS
    | APPLICATION_OPTIONS
    | SCORECARD_OPTIONS
    | INTERVIEW_OPTIONS
    | JOB_OPTIONS
    | OFFER_OPTIONS
)


@dataclass(slots=True, frozen=True)
class RateLimit:
    """Snapshot of the rate-limit headers last reported by the server."""

    limit: int | None = None
    remaining: int | None = None
    link: str | None = None


class HarvestClient(ApiClient):
    """Token-authenticated client for the Harvest API.

    Every call records the ``X-RateLimit-Limit``, ``X-RateLimit-Remaining`` and
    ``Link`` headers on the instance. A header missing from a response leaves
    the previous value in place. The client never throttles on its own.
    """

    def __init__(self, api_token: str | None = None, *, config: GreenhouseConfig | None = None):
        super().__init__(api_token, config=config)
        self.rate_limit: int | None = None
        self.rate_limit_remaining: int | None = None
        self.link: str | None = None

    @property
    def base_url(self) -> str:
        return self.config.harvest_url

    @property
    def rate_limit_state(self) -> RateLimit:
        return RateLimit(self.rate_limit, self.rate_limit_remaining, self.link)

    @property
    def links(self) -> Dict[str, str]:
        """The ``Link`` header as a ``{rel: url}`` mapping (``next``, ``last``, ...)."""
        if not self.link:
            return {}
        return {
            entry["rel"]: entry["url"]
            for entry in parse_header_links(self.link)
            if entry.get("rel") and entry.get("url")
        }

    # ------------------------------------------------------------------
    # Organization
    # ------------------------------------------------------------------
    def offices(self, office_id: int | None = None, **options: Any) -> Any:
        return self._get(f"offices{path_id(office_id)}", options, PAGINATION_OPTIONS)

    def departments(self, department_id: int | None = None, **options: Any) -> Any:
        return self._get(f"departments{path_id(department_id)}", options, PAGINATION_OPTIONS)

    def users(self, user_id: int | None = None, **options: Any) -> Any:
        return self._get(f"users{path_id(user_id)}", options, PAGINATION_OPTIONS)

    def sources(self, source_id: int | None = None, **options: Any) -> Any:
        return self._get(f"sources{path_id(source_id)}", options, PAGINATION_OPTIONS)

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------
    def candidates(self, candidate_id: int | None = None, **options: Any) -> Any:
        """List candidates, or fetch one when ``candidate_id`` is given."""
        return self._get(f"candidates{path_id(candidate_id)}", options, CANDIDATE_OPTIONS)

    def activity_feed(self, candidate_id: int, **options: Any) -> Any:
        return self._get(f"candidates/{candidate_id}/activity_feed", options, PAGINATION_OPTIONS)

    def edit_candidate(
        self, candidate_id: int, candidate: Mapping[str, Any], on_behalf_of: int | str
    ) -> Any:
        """Patch a candidate's fields (tags, custom fields, ...)."""
        return self._write("PATCH", f"candidates/{candidate_id}", candidate, on_behalf_of)

    def add_attachment_to_candidate(
        self, candidate_id: int, attachment: Mapping[str, Any], on_behalf_of: int | str
    ) -> Any:
        """Upload an attachment.

        ``attachment`` carries ``filename``, ``type``, base64 ``content`` and
        ``content_type``; see :func:`greenhouse_io.attachments.encode_attachment`.
        """
        return self._write("POST", f"candidates/{candidate_id}/attachments", attachment, on_behalf_of)

    def create_candidate_note(
        self, candidate_id: int, note: Mapping[str, Any], on_behalf_of: int | str
    ) -> Any:
        """Post a note (``user_id``, ``message``, ``visibility``) to the activity feed."""
        return self._write(
            "POST", f"candidates/{candidate_id}/activity_feed/notes", note, on_behalf_of
        )

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------
    def applications(self, application_id: int | None = None, **options: Any) -> Any:
        """List applications (filter with ``job_id``), or fetch one by id."""
        return self._get(
            f"applications{path_id(application_id)}", options, APPLICATION_OPTIONS
        )

    def offers_for_application(self, application_id: int, **options: Any) -> Any:
        return self._get(f"applications/{application_id}/offers", options, PAGINATION_OPTIONS)

    def current_offer_for_application(self, application_id: int) -> Any:
        return self._get(f"applications/{application_id}/offers/current_offer")

    def scorecards(self, application_id: int, **options: Any) -> Any:
        """All scorecards submitted for one application."""
        return self._get(
            f"scorecards/for_application/{application_id}", options, PAGINATION_OPTIONS
        )

    def all_scorecards(self, scorecard_id: int | None = None, **options: Any) -> Any:
        return self._get(f"scorecards{path_id(scorecard_id)}", options, SCORECARD_OPTIONS)

    def scheduled_interviews(self, application_id: int, **options: Any) -> Any:
        return self._get(
            f"applications/{application_id}/scheduled_interviews", options, PAGINATION_OPTIONS
        )

    def interviews(self, interview_id: int | None = None, **options: Any) -> Any:
        return self._get(f"interviews{path_id(interview_id)}", options, INTERVIEW_OPTIONS)

    # ------------------------------------------------------------------
    # Jobs and offers
    # ------------------------------------------------------------------
    def jobs(self, job_id: int | None = None, **options: Any) -> Any:
        return self._get(f"jobs{path_id(job_id)}", options, JOB_OPTIONS)

    def stages(self, job_id: int, **options: Any) -> Any:
        return self._get(f"jobs/{job_id}/stages", options, PAGINATION_OPTIONS)

    def job_post(self, job_id: int) -> Any:
        return self._get(f"jobs/{job_id}/job_post")

    def offers(self, offer_id: int | None = None, **options: Any) -> Any:
        return self._get(f"offers{path_id(offer_id)}", options, OFFER_OPTIONS)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get(
        self,
        path: str,
        options: Optional[Mapping[str, Any]] = None,
        permitted: frozenset = PAGINATION_OPTIONS,
    ) -> Any:
        return self._request(
            "GET",
            path,
            params=permitted_options(options, permitted),
            auth=self._basic_auth(),
        )

    def _write(
        self, method: str, path: str, body: Mapping[str, Any], on_behalf_of: int | str
    ) -> Any:
        return self._request(
            method,
            path,
            json_body=body,
            headers={"On-Behalf-Of": str(on_behalf_of)},
            auth=self._basic_auth(),
        )

    def _record_response(self, response: requests.Response) -> None:
        headers = response.headers
        limit = _int_header(headers, RATE_LIMIT_HEADER)
        if limit is not None:
            self.rate_limit = limit
        remaining = _int_header(headers, RATE_LIMIT_REMAINING_HEADER)
        if remaining is not None:
            self.rate_limit_remaining = remaining
        link = headers.get(LINK_HEADER)
        if link is not None:
            self.link = link


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        LOGGER.debug("Ignoring non-integer %s header: %r", name, value)
        return None
