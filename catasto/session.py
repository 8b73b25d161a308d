"""Controlador de sesión: ciclo de vida del navegador alrededor del flujo SISTER."""

import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from catasto.config import Settings, settings as default_settings
from catasto.driver import PlaywrightRuntime, PortalPage, as_portal_browser, runtime as default_runtime
from catasto.errors import CleanupError, prefix_error
from catasto.models import EstateRecord, SearchCriteria
from catasto.navigation import SisterNavigator

logger = logging.getLogger(__name__)


class SisterSession:
    """
    Ejecuta una visura catastal completa por llamada.

    Cada llamada abre su propia página (y su propio BrowserContext), de modo
    que varias llamadas concurrentes pueden compartir un navegador inyectado
    sin compartir cookies. La instancia no guarda estado entre llamadas.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        locators: Optional[Mapping[str, Mapping[str, str]]] = None,
        runtime: Optional[PlaywrightRuntime] = None
    ):
        self.settings = settings or default_settings
        self.locators = locators
        self.runtime = runtime or default_runtime

    async def get_real_estate_data(self, criteria: SearchCriteria, browser: Any = None) -> List[EstateRecord]:
        """
        Obtiene los inmuebles del sujeto en la provincia indicada.

        Args:
            criteria: Sujeto, provincia, tipo de sujeto y credenciales
            browser: Navegador externo opcional (no se cierra al terminar)

        Returns:
            Lista de EstateRecord; vacía si el sujeto no existe en el catastro

        Raises:
            CatastoError: con el paso que falló antepuesto al mensaje
        """
        try:
            return await self._run(criteria, browser)
        except Exception as e:
            error = prefix_error("get_real_estate_data", e)
            if error is e:
                raise
            raise error from e

    async def _run(self, criteria: SearchCriteria, browser: Any) -> List[EstateRecord]:
        owns_browser = browser is None
        if owns_browser:
            portal_browser = await self.runtime.launch_browser(self.settings)
        else:
            portal_browser = as_portal_browser(browser, self.settings)

        logger.info(f"🚀 Visura SISTER para {criteria.subject_id} en provincia {criteria.province} iniciando...")

        try:
            page = await portal_browser.new_page()
            try:
                navigator = SisterNavigator(page, self.settings, self.locators)
                try:
                    await page.set_extra_http_headers({"Accept-Language": self.settings.accept_language})
                    return await self._pipeline(navigator, page, criteria)
                finally:
                    await self._logout(navigator)
            finally:
                await self._release(page.close, "page")
        finally:
            if owns_browser:
                await self._release(portal_browser.close, "browser")

    async def _pipeline(
        self,
        navigator: SisterNavigator,
        page: PortalPage,
        criteria: SearchCriteria
    ) -> List[EstateRecord]:
        cookies = await navigator.login(criteria.credentials)
        await page.add_cookies(cookies)

        await navigator.accept_personal_data()
        await navigator.select_province(criteria.province)

        outcome = await navigator.search_subject(criteria.subject_id, criteria.subject_kind)
        if not outcome.found:
            logger.info(
                f"✅ Visura SISTER para {criteria.subject_id} en provincia {criteria.province} completada: "
                f"ningún sujeto con ese codice fiscale / partita IVA"
            )
            return []

        await navigator.open_property_listing(criteria.subject_kind)
        records = await navigator.extract_records()

        logger.info(
            f"✅ Visura SISTER para {criteria.subject_id} en provincia {criteria.province} completada: "
            f"{len(records)} inmuebles"
        )
        return records

    async def _logout(self, navigator: SisterNavigator) -> None:
        """Logout best-effort: su error se registra y nunca reemplaza el resultado."""
        try:
            await navigator.logout()
        except CleanupError as e:
            logger.warning(f"⚠️  {e}")
        except Exception as e:
            logger.warning(f"⚠️  Logout interrumpido: {e}")

    async def _release(self, close: Callable[[], Awaitable[None]], what: str) -> None:
        try:
            await close()
        except Exception as e:
            logger.warning(f"⚠️  No se pudo cerrar {what}: {e}")


async def get_real_estate_data(criteria: SearchCriteria, browser: Any = None) -> List[EstateRecord]:
    """Atajo con la configuración por defecto."""
    return await SisterSession().get_real_estate_data(criteria, browser=browser)
