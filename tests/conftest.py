"""Pytest configuration and fixtures."""

from typing import Any, Dict, List, Optional

import pytest

from catasto.config import Settings
from catasto.extractor import TABLE_SCRIPT
from catasto.models import Credentials, SearchCriteria, SubjectKind
from catasto.navigation import MATCHES_SCRIPT, PROVINCE_OPTIONS_SCRIPT, PROVINCE_SELECT_SCRIPT

HEADERS = [
    "Catasto", "Titolarità", "Ubicazione", "Foglio", "Particella", "Sub",
    "Classamento", "Classe", "Consistenza", "Rendita", "Partita", "Altri Dati",
]

ROW_1 = [
    "F", "Proprieta' per 1/1", "ROMA VIA APPIA NUOVA n. 10 piano: 2", "512", "87", "4",
    "A/2", "3", "5,5 vani", "Euro:781,14", "1001234", "Annotazione",
]

ROW_2 = [
    "T", "Proprieta' per 1/2", "ROMA", "1020", "33", "",
    "SEMINATIVO", "2", "1.200 m²", "R.D. Euro:10,25", "", "",
]


class FakePage:
    """
    PortalPage scriptada.

    `failures` mapea una clave ("goto:<url>", "wait:<selector>", "click:<selector>",
    "nav:<selector>", "type:<selector>", "eval:<name>") al número de veces que
    debe fallar; -1 falla siempre.
    """

    def __init__(
        self,
        province_options: Optional[List[str]] = None,
        summary: Optional[Dict[str, Any]] = None,
        table: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[str, int]] = None,
        cookies: Optional[List[Dict[str, Any]]] = None,
    ):
        self.province_options = province_options if province_options is not None else ["RM01-RM", "MI02-MI"]
        self.summary = summary if summary is not None else {"region": True, "matches": "1"}
        self.table = table if table is not None else {"headers": HEADERS, "rows": [[], ROW_1, ROW_2]}
        self.failures = dict(failures or {})
        self.session_cookies = cookies if cookies is not None else [{"name": "JSESSIONID", "value": "abc"}]
        self.calls: List[tuple] = []
        self.added_cookies: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}
        self.selected_option: Optional[str] = None
        self.closed = 0

    def _maybe_fail(self, key: str) -> None:
        remaining = self.failures.get(key, 0)
        if remaining == 0:
            return
        if remaining > 0:
            self.failures[key] = remaining - 1
        raise RuntimeError(f"simulated failure on {key}")

    def called(self, method: str, target: str) -> bool:
        return (method, target) in self.calls

    async def set_extra_http_headers(self, headers):
        self.calls.append(("headers", None))
        self.headers.update(headers)

    async def goto(self, url):
        self.calls.append(("goto", url))
        self._maybe_fail(f"goto:{url}")

    async def wait_for_selector(self, selector):
        self.calls.append(("wait", selector))
        self._maybe_fail(f"wait:{selector}")

    async def click(self, selector):
        self.calls.append(("click", selector))
        self._maybe_fail(f"click:{selector}")

    async def type(self, selector, text):
        self.calls.append(("type", selector))
        self._maybe_fail(f"type:{selector}")

    async def click_and_wait_for_navigation(self, selector):
        self.calls.append(("nav", selector))
        self._maybe_fail(f"nav:{selector}")

    async def evaluate(self, script, arg=None):
        if script == PROVINCE_OPTIONS_SCRIPT:
            self.calls.append(("eval", "province_options"))
            self._maybe_fail("eval:province_options")
            return self.province_options
        if script == PROVINCE_SELECT_SCRIPT:
            self.calls.append(("eval", "province_select"))
            self._maybe_fail("eval:province_select")
            self.selected_option = arg[1]
            return None
        if script == MATCHES_SCRIPT:
            self.calls.append(("eval", "matches"))
            self._maybe_fail("eval:matches")
            return self.summary
        if script == TABLE_SCRIPT:
            self.calls.append(("eval", "table"))
            self._maybe_fail("eval:table")
            return self.table
        raise AssertionError("unexpected script")

    async def cookies(self):
        return list(self.session_cookies)

    async def add_cookies(self, cookies):
        self.added_cookies.extend(cookies)

    async def close(self):
        self.closed += 1


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.pages_opened = 0
        self.closed = 0

    async def new_page(self):
        self.pages_opened += 1
        return self.page

    async def close(self):
        self.closed += 1


class FakeRuntime:
    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.launches = 0

    async def launch_browser(self, settings=None):
        self.launches += 1
        return self.browser


@pytest.fixture
def fast_settings():
    """Settings sin esperas para que los tests no duerman."""
    return Settings(
        retry_delay_seconds=0,
        post_login_pause_seconds=0,
        _env_file=None,
    )


@pytest.fixture
def credentials():
    return Credentials(username="MRARSS80A01H501U", password="segreto")


@pytest.fixture
def individual_criteria(credentials):
    return SearchCriteria(
        subject_id="RSSMRA80A01H501U",
        province="rm",
        subject_kind=SubjectKind.INDIVIDUAL,
        credentials=credentials,
    )


@pytest.fixture
def company_criteria(credentials):
    return SearchCriteria(
        subject_id="01234567890",
        province="MI",
        subject_kind=SubjectKind.COMPANY,
        credentials=credentials,
    )


@pytest.fixture
def fake_page():
    return FakePage()
