"""
Pasos de navegación del portal SISTER.
Implementa el flujo: login → consenso → provincia → búsqueda → listado → tabla → logout.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from catasto.config import Settings, settings as default_settings
from catasto.driver import PortalPage
from catasto.errors import (
    AuthenticationError, CleanupError, JurisdictionNotFoundError, NavigationError,
    StructuralError, wrap_step
)
from catasto.extractor import TableExtractor
from catasto.models import Credentials, EstateRecord, SearchOutcome, SubjectKind
from catasto.retry import retry_async
from config.sister_selectors import SISTER_LOCATORS

logger = logging.getLogger(__name__)


PROVINCE_OPTIONS_SCRIPT = """
(selector) => {
    const select = document.querySelector(selector);
    if (!select) {
        return null;
    }
    return Array.from(select.options).map((option) => option.value);
}
"""

PROVINCE_SELECT_SCRIPT = """
([selector, value]) => {
    const select = document.querySelector(selector);
    if (!select) {
        throw new Error('Province select element not found');
    }
    select.value = value;
    select.dispatchEvent(new Event('change', { bubbles: true }));
}
"""

# Busca el <strong> que sigue al texto "Omonimi individuati" dentro del resumen
MATCHES_SCRIPT = """
([selector, label]) => {
    const region = document.querySelector(selector);
    if (!region) {
        return { region: false, matches: null };
    }
    const walker = document.createTreeWalker(region, NodeFilter.SHOW_TEXT);
    let node;
    while ((node = walker.nextNode())) {
        if (!node.textContent || !node.textContent.includes(label)) {
            continue;
        }
        let next = node.nextSibling;
        while (next) {
            if (next.nodeType === Node.ELEMENT_NODE && next.nodeName === 'STRONG') {
                return { region: true, matches: next.textContent ? next.textContent.trim() : '' };
            }
            next = next.nextSibling;
        }
    }
    return { region: true, matches: null };
}
"""


def match_province_option(values: Iterable[str], province: str) -> Optional[str]:
    """
    Primera opción cuyo valor termina en "-<PROVINCIA>".

    Los valores del portal son compuestos ("<ufficio>-<sigla>"), por eso la
    comparación es por sufijo y sin distinguir mayúsculas.
    """
    suffix = f"-{province.strip().upper()}"
    for value in values:
        if value and value.upper().endswith(suffix):
            return value
    return None


class SisterNavigator:
    """Ejecuta los pasos del portal sobre una PortalPage."""

    def __init__(
        self,
        page: PortalPage,
        settings: Optional[Settings] = None,
        locators: Optional[Mapping[str, Mapping[str, str]]] = None
    ):
        self.page = page
        self.settings = settings or default_settings
        self.locators = locators or SISTER_LOCATORS
        self.extractor = TableExtractor(self._loc("results", "results_table"))

    def _loc(self, group: str, key: str) -> str:
        try:
            return self.locators[group][key]
        except KeyError:
            raise StructuralError(f"No locator configured for {group}.{key}")

    async def _require(self, selector: str) -> None:
        """Espera un elemento obligatorio; si no aparece la página no es la esperada."""
        try:
            await self.page.wait_for_selector(selector)
        except Exception as e:
            raise StructuralError(f"Element not found: {selector} ({e})") from e

    async def _goto(self, url: str, attempts: int) -> None:
        try:
            await retry_async(
                lambda: self.page.goto(url),
                attempts=attempts,
                delay_seconds=self.settings.retry_delay_seconds,
                label=f"goto {url}"
            )
        except Exception as e:
            raise NavigationError(f"Could not open {url} after {attempts} attempts: {e}") from e

    async def _submit(self, selector: str, attempts: int) -> None:
        """Click que dispara navegación, con reintento acotado."""
        try:
            await retry_async(
                lambda: self.page.click_and_wait_for_navigation(selector),
                attempts=attempts,
                delay_seconds=self.settings.retry_delay_seconds,
                label=f"click {selector}"
            )
        except Exception as e:
            raise NavigationError(f"Navigation from {selector} failed after {attempts} attempts: {e}") from e

    @wrap_step("login")
    async def login(self, credentials: Credentials) -> List[Dict[str, Any]]:
        """
        Login en el portal Agenzia delle Entrate con credenciales SISTER.

        Returns:
            Cookies de la sesión autenticada
        """
        logger.info(f"🔐 Iniciando login SISTER (usuario {credentials.username})")
        await self._goto(self.settings.login_url, self.settings.login_attempts)

        sister_tab = self._loc("login", "sister_tab")
        await self._require(sister_tab)
        await self.page.click(sister_tab)

        await self.page.type(self._loc("login", "username_input"), credentials.username)
        await self.page.type(self._loc("login", "password_input"), credentials.password.get_secret_value())

        submit_button = self._loc("login", "submit_button")
        await self._require(submit_button)
        try:
            await self._submit(submit_button, self.settings.login_attempts)
        except NavigationError as e:
            raise AuthenticationError(f"Login never completed: {e}") from e

        cookies = await self.page.cookies()

        if self.settings.post_login_pause_seconds > 0:
            await asyncio.sleep(self.settings.post_login_pause_seconds)

        logger.info(f"✅ Login exitoso ({len(cookies)} cookies)")
        return cookies

    @wrap_step("accept_personal_data")
    async def accept_personal_data(self) -> None:
        """Acepta el aviso de tratamiento de datos personales, obligatorio para continuar."""
        confirm_button = self._loc("personal_data", "confirm_button")
        await self._require(confirm_button)
        await self._submit(confirm_button, self.settings.confirm_attempts)
        logger.info("✅ Aviso de datos personales aceptado")

    @wrap_step("select_province")
    async def select_province(self, province: str) -> str:
        """
        Selecciona la provincia en la página de elección de servicio.

        Returns:
            Valor de la opción elegida
        """
        logger.info(f"🗺️  Seleccionando provincia {province}...")
        await self._goto(self.settings.province_selection_url, self.settings.province_attempts)

        select = self._loc("province", "province_select")
        values = await self.page.evaluate(PROVINCE_OPTIONS_SCRIPT, select)
        if values is None:
            raise StructuralError("Province select element not found")

        option = match_province_option(values, province)
        if option is None:
            raise JurisdictionNotFoundError(f"Province {province.upper()} not found among {len(values)} options")

        await self.page.evaluate(PROVINCE_SELECT_SCRIPT, [select, option])
        await self._submit(self._loc("province", "apply_button"), self.settings.province_attempts)

        logger.info(f"✅ Provincia seleccionada: {option}")
        return option

    def _kind_group(self, kind: SubjectKind) -> str:
        return "search_company" if kind == SubjectKind.COMPANY else "search_individual"

    @wrap_step("search_subject")
    async def search_subject(self, subject_id: str, kind: SubjectKind) -> SearchOutcome:
        """
        Busca el sujeto por codice fiscale / partita IVA.

        Returns:
            SearchOutcome con found=False si el portal indica 0 homónimos
        """
        logger.info(f"🔍 Buscando {kind.value} {subject_id}...")
        group = self._kind_group(kind)

        if kind == SubjectKind.COMPANY:
            menu_tab = self._loc(group, "menu_tab")
            await self._require(menu_tab)
            await self.page.click(menu_tab)

        radio_button = self._loc(group, "radio_button")
        await self._require(radio_button)
        await self.page.click(radio_button)

        fiscal_code_input = self._loc("search", "fiscal_code_input")
        await self._require(fiscal_code_input)
        await self.page.type(fiscal_code_input, subject_id)

        await self._submit(self._loc(group, "search_button"), self.settings.search_attempts)

        summary = await self.page.evaluate(
            MATCHES_SCRIPT,
            [self._loc("search", "summary_region"), self._loc("search", "matches_label")]
        )
        if not summary or not summary.get("region"):
            raise StructuralError("Summary region not found")

        matches = summary.get("matches")
        if matches is None:
            raise StructuralError("Number of subjects found not present in the page")

        matches = matches.strip()
        if matches in ("", "0"):
            logger.info(f"ℹ️  Ningún sujeto encontrado para {subject_id}")
            return SearchOutcome(found=False, matches=matches)

        logger.info(f"✅ Homónimos encontrados: {matches}")
        return SearchOutcome(found=True, matches=matches)

    @wrap_step("open_property_listing")
    async def open_property_listing(self, kind: SubjectKind) -> None:
        """Selecciona el primer resultado y abre su listado de inmuebles."""
        first_result = self._loc(self._kind_group(kind), "first_result")
        await self._require(first_result)
        await self.page.click(first_result)

        await self._submit(self._loc("search", "property_button"), self.settings.search_attempts)
        logger.info("✅ Listado de inmuebles abierto")

    @wrap_step("extract_records")
    async def extract_records(self) -> List[EstateRecord]:
        return await self.extractor.extract(self.page)

    @wrap_step("logout")
    async def logout(self) -> None:
        """Cierra la sesión SISTER. Cualquier fallo se reporta como CleanupError."""
        try:
            logout_link = self._loc("logout", "logout_link")
            await self._require(logout_link)
            await self._submit(logout_link, self.settings.logout_attempts)
        except Exception as e:
            raise CleanupError(str(e)) from e
        logger.info("👋 Logout completado")
