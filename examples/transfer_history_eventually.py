"""
Transfer $100, then wait for it to show up in Transaction History.

This example shows:
- login + transfer through BankingFlow
- history verification as ordered probes (section -> entries -> amount -> type -> reference)
- structured verification events in a JSONL trace

Env vars:
  - BANKCHECK_CONFIG (path to config.json, see config.example.json)
  - BANKCHECK_PASSWORD (optional override)
"""

import asyncio
import logging

from playwright.async_api import async_playwright

from bankcheck import JsonlTraceSink, RetryVerifier, TransactionData, Tracer
from bankcheck.config import load_config
from bankcheck.flows import BankingFlow


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = load_config()
    tracer = Tracer(run_id="transfer-history", sink=JsonlTraceSink("trace_transfer.jsonl"))

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        page = await browser.new_page()

        flow = BankingFlow(page, config, verifier=RetryVerifier(tracer=tracer))
        await flow.login()

        result = await flow.transfer(
            TransactionData(
                amount="100", to_account="123456789", description="We are transferring $100"
            ),
            current_balance="10000",
            expected_balance="9900",
        )
        await flow.open_history()
        outcome = await flow.verify_history(result.transaction, reference=result.reference)

        print("reference:", result.reference)
        print("history outcome:", outcome.model_dump())

        await browser.close()
    tracer.close()


if __name__ == "__main__":
    asyncio.run(main())
