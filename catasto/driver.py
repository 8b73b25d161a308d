"""
Superficie mínima del navegador que usa el flujo SISTER.

El resto del paquete depende solo de los protocolos PortalBrowser / PortalPage;
PlaywrightBrowser y PlaywrightPage los implementan sobre playwright.async_api.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Protocol

from playwright.async_api import Browser, Page, Playwright, async_playwright

from catasto.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class PortalPage(Protocol):
    """Página con las primitivas de interacción que necesita el flujo."""

    async def set_extra_http_headers(self, headers: Dict[str, str]) -> None: ...

    async def goto(self, url: str) -> None: ...

    async def wait_for_selector(self, selector: str) -> None: ...

    async def click(self, selector: str) -> None: ...

    async def type(self, selector: str, text: str) -> None: ...

    async def click_and_wait_for_navigation(self, selector: str) -> None: ...

    async def evaluate(self, script: str, arg: Any = None) -> Any: ...

    async def cookies(self) -> List[Dict[str, Any]]: ...

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None: ...

    async def close(self) -> None: ...


class PortalBrowser(Protocol):
    """Navegador capaz de abrir páginas aisladas."""

    async def new_page(self) -> PortalPage: ...

    async def close(self) -> None: ...


class PlaywrightPage:
    """Adaptador de playwright Page. Cada página tiene su propio BrowserContext."""

    def __init__(self, page: Page, timeout_ms: int = 30000):
        self._page = page
        self._page.set_default_timeout(timeout_ms)
        self._page.set_default_navigation_timeout(timeout_ms)

    @property
    def raw(self) -> Page:
        return self._page

    async def set_extra_http_headers(self, headers: Dict[str, str]) -> None:
        await self._page.set_extra_http_headers(headers)

    async def goto(self, url: str) -> None:
        await self._page.goto(url, wait_until="load")

    async def wait_for_selector(self, selector: str) -> None:
        await self._page.wait_for_selector(selector, state="attached")

    async def click(self, selector: str) -> None:
        await self._page.click(selector)

    async def type(self, selector: str, text: str) -> None:
        await self._page.locator(selector).press_sequentially(text)

    async def click_and_wait_for_navigation(self, selector: str) -> None:
        async with self._page.expect_navigation():
            await self._page.click(selector)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return await self._page.evaluate(script, arg)

    async def cookies(self) -> List[Dict[str, Any]]:
        return await self._page.context.cookies()

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        await self._page.context.add_cookies(cookies)

    async def close(self) -> None:
        context = self._page.context
        await self._page.close()
        await context.close()


class PlaywrightBrowser:
    """Adaptador de playwright Browser."""

    def __init__(self, browser: Browser, settings: Optional[Settings] = None):
        self._browser = browser
        self.settings = settings or default_settings

    @property
    def raw(self) -> Browser:
        return self._browser

    async def new_page(self) -> PlaywrightPage:
        context = await self._browser.new_context(locale=self.settings.browser_locale)
        page = await context.new_page()
        return PlaywrightPage(page, timeout_ms=self.settings.navigation_timeout_ms)

    async def close(self) -> None:
        await self._browser.close()


def as_portal_browser(browser: Any, settings: Optional[Settings] = None) -> PortalBrowser:
    """Acepta un Browser de Playwright crudo o cualquier PortalBrowser."""
    if isinstance(browser, Browser):
        return PlaywrightBrowser(browser, settings)
    return browser


class PlaywrightRuntime:
    """
    Proceso de Playwright compartido por todo el programa.

    start() es idempotente: la primera llamada arranca el driver, las
    siguientes no hacen nada. Se puede usar como `async with runtime:`.
    """

    def __init__(self):
        self._playwright: Optional[Playwright] = None

    @property
    def started(self) -> bool:
        return self._playwright is not None

    async def start(self) -> Playwright:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
            logger.info("🎭 Playwright iniciado")
        return self._playwright

    async def stop(self) -> None:
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.info("🎭 Playwright detenido")

    async def launch_browser(self, settings: Optional[Settings] = None) -> PlaywrightBrowser:
        """Lanza un Chromium configurado para el portal (idioma italiano)."""
        settings = settings or default_settings
        playwright = await self.start()

        env = dict(os.environ)
        env["LANGUAGE"] = settings.browser_locale.replace("-", "_")

        browser = await playwright.chromium.launch(
            headless=settings.headless,
            args=[f"--lang={settings.browser_locale}"],
            env=env
        )
        return PlaywrightBrowser(browser, settings)

    async def __aenter__(self) -> "PlaywrightRuntime":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()


# Singleton
runtime = PlaywrightRuntime()
