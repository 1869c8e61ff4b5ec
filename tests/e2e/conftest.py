from __future__ import annotations

import os

import pytest
import pytest_asyncio

from bankcheck.config import load_config
from bankcheck.flows import BankingFlow
from bankcheck.models import HarnessConfig

E2E_ENABLED = os.getenv("BANKCHECK_E2E") == "1"


def pytest_collection_modifyitems(config, items) -> None:
    if E2E_ENABLED:
        return
    skip = pytest.mark.skip(reason="set BANKCHECK_E2E=1 to drive the demo banking app")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def harness_config() -> HarnessConfig:
    return load_config()


@pytest_asyncio.fixture
async def page():
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=os.getenv("BANKCHECK_HEADED") != "1")
        context = await browser.new_context()
        page = await context.new_page()
        try:
            yield page
        finally:
            await browser.close()


@pytest_asyncio.fixture
async def flow(page, harness_config: HarnessConfig) -> BankingFlow:
    flow = BankingFlow(page, harness_config)
    await flow.login()
    return flow
