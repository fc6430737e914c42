"""HTTP client for the SonarQube Web API.

Covers the three read endpoints the exporter needs:
- /api/metrics/search (metric catalog, first page only)
- /api/components/search_projects (all projects, paginated)
- /api/measures/component (measures of one project)

Every request carries the bearer token and is bounded by a fixed timeout.
Failed requests are not retried.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

import requests

from ..config.logging import get_logger
from .errors import DecodeError, UpstreamError
from .models import (
    Component,
    ComponentsResponse,
    Measure,
    MeasuresResponse,
    MetricsResponse,
)

logger = get_logger("sonarqube")

DEFAULT_TIMEOUT = 30
PAGE_SIZE = 500

T = TypeVar("T")


class SonarQubeClient:
    """HTTP client for a SonarQube server.

    Example:
        client = SonarQubeClient("https://sonar.example.com", "squ_xxx")
        catalog = client.get_metrics()
        for project in client.get_projects():
            measures = client.get_project_measures(project.key, ["bugs"])
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize API client.

        Args:
            base_url: SonarQube server URL
            token: Bearer token sent with every request
            timeout: Per-request timeout in seconds
            session: Optional preconfigured session
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        })

    def _get(
        self,
        path: str,
        params: Dict[str, Any],
        decode: Callable[[Any], T],
    ) -> T:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"request to {path} failed: {e}") from e

        if response.status_code != 200:
            body = (response.text or "")[:200]
            raise UpstreamError(
                f"unexpected status code {response.status_code} from {path}: {body}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"failed to decode response from {path}: {e}") from e

        return decode(payload)

    def get_metrics(self) -> MetricsResponse:
        """Fetch the metric catalog.

        Only the first page (up to PAGE_SIZE definitions) is requested.

        Raises:
            UpstreamError: Non-success response or transport failure
            DecodeError: Malformed response body
        """
        result = self._get(
            "/api/metrics/search",
            {"ps": PAGE_SIZE},
            MetricsResponse.from_dict,
        )
        logger.debug(f"Fetched {len(result.metrics)} metric definitions (total={result.total})")
        return result

    def get_projects(self) -> List[Component]:
        """Fetch all projects, following pagination.

        Stops once the number of collected projects reaches the total
        reported by the first page.

        Raises:
            UpstreamError: Non-success response on any page
            DecodeError: Malformed response body on any page
        """
        projects: List[Component] = []
        page_index = 1
        total: Optional[int] = None

        while True:
            page = self._get(
                "/api/components/search_projects",
                {"ps": PAGE_SIZE, "p": page_index},
                ComponentsResponse.from_dict,
            )
            projects.extend(page.components)

            if total is None:
                total = page.paging.total
            logger.debug(f"Fetched projects page {page_index}: {len(projects)}/{total}")

            if len(projects) >= total:
                break

            page_index += 1

        return projects

    def get_project_measures(
        self,
        project_key: str,
        metric_keys: Sequence[str],
    ) -> List[Measure]:
        """Fetch measures of one project for the given metric keys.

        Returns an empty list without calling the server when no metric
        keys are given.

        Raises:
            UpstreamError: Non-success response or transport failure
            DecodeError: Malformed response body
        """
        if not metric_keys:
            return []

        result = self._get(
            "/api/measures/component",
            {"component": project_key, "metricKeys": ",".join(metric_keys)},
            MeasuresResponse.from_dict,
        )
        return result.measures
