from __future__ import annotations

from ..constants import LOGIN_URL_PATTERN
from ..models import LoginCredentials
from ..playwright_probes import url_matches
from ..probes import ConditionProbe
from .base import BasePage


class LoginPage(BasePage):
    async def navigate_to(self, url: str) -> None:
        await self.goto(url, wait_until="domcontentloaded")

    def loaded_probes(self) -> tuple[ConditionProbe, ...]:
        return (url_matches("login_page_loaded", self.page, LOGIN_URL_PATTERN),)

    async def login(self, credentials: LoginCredentials) -> None:
        await self.fill_text_by_role("Username", credentials.username)
        await self.fill_text_by_role("Password", credentials.password)
        await self.select_option_by_label("App Name:", credentials.app_name)
        await self.click_button("Login")
