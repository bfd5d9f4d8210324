"""
Company directory integration
Loads the performer roster when a caller does not pass one in
"""
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from cast_scheduler.error_handlers.exceptions import (
    ConfigurationException,
    ExternalAPIException,
    ValidationException,
)
from cast_scheduler.models import CastMember

logger = logging.getLogger(__name__)


class CompanyDirectory(ABC):
    """Source of the company roster"""

    @abstractmethod
    def get_cast_members(self) -> List[CastMember]:
        """Active cast members, in roster order"""


class StaticCompanyDirectory(CompanyDirectory):
    """In-process roster, used by callers that already hold the cast list"""

    def __init__(self, members: Iterable):
        self.members = [CastMember.from_dict(m) for m in members]

    def get_cast_members(self) -> List[CastMember]:
        return [m for m in self.members if m.is_active]


class HttpCompanyDirectory(CompanyDirectory):
    """Service class for the company directory's JSON API"""

    def __init__(self, base_url: str, timeout: int = 30, max_retries: int = 3):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.logger = logging.getLogger(__name__)
        self._setup_session()

    def _setup_session(self):
        """Setup requests session with retry strategy"""
        self.session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=1
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            "accept": "application/json",
            "user-agent": "cast-scheduler/1.0 (+requests)",
        })

    def get_cast_members(self) -> List[CastMember]:
        """
        Fetch the roster from GET {base_url}/cast-members

        Returns:
            Active cast members in the order the directory lists them

        Raises:
            ExternalAPIException: If the request fails or the payload is not a roster
        """
        url = f"{self.base_url}/cast-members"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Company directory request failed: {str(e)}")
            raise ExternalAPIException(
                'Company directory request failed',
                details={'url': url, 'reason': str(e)}
            )
        except ValueError as e:
            raise ExternalAPIException(
                'Company directory returned invalid JSON',
                details={'url': url, 'reason': str(e)}
            )

        records = payload.get('castMembers') if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise ExternalAPIException(
                'Company directory response has no castMembers list',
                details={'url': url}
            )

        try:
            members = [CastMember.from_dict(record) for record in records]
        except ValidationException as e:
            raise ExternalAPIException(
                f"Company directory returned a malformed cast member: {e.message}",
                details={'url': url, **e.details}
            )

        active = [m for m in members if m.is_active]
        self.logger.info(f"Loaded {len(active)} active cast member(s) from company directory")
        return active


def get_default_directory(config) -> CompanyDirectory:
    """
    Build the HTTP directory from configuration

    Raises:
        ConfigurationException: If COMPANY_DIRECTORY_URL is not set
    """
    if not config.COMPANY_DIRECTORY_URL:
        raise ConfigurationException(
            'COMPANY_DIRECTORY_URL not configured - pass cast_members explicitly or set it',
            details={'setting': 'COMPANY_DIRECTORY_URL'}
        )
    return HttpCompanyDirectory(
        config.COMPANY_DIRECTORY_URL,
        timeout=config.COMPANY_DIRECTORY_TIMEOUT,
        max_retries=config.COMPANY_DIRECTORY_MAX_RETRIES,
    )
