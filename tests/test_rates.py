import copy
import unittest

import httpx

from amadeus_mcp.client import DEFAULT_RATES, ExchangeRateCache, annotate_prices
from amadeus_mcp.errors import RefreshError
from tests.fakes import RATES_PATH, RATES_URL, FakeClock, FakeUpstream

DAY = 24 * 60 * 60


class TestAnnotatePrices(unittest.TestCase):
    def test_known_currency_is_converted(self):
        body = {"data": [{"id": "1", "price": {"amount": "20.00", "currencyCode": "GBP"}}]}

        price = annotate_prices(body, DEFAULT_RATES)["data"][0]["price"]

        self.assertEqual(price["usdAmount"], 25.4)
        self.assertEqual(price["originalAmount"], 20.0)
        self.assertEqual(price["originalCurrency"], "GBP")
        # the native fields stay as the provider sent them
        self.assertEqual(price["amount"], "20.00")
        self.assertEqual(price["currencyCode"], "GBP")

    def test_every_table_entry(self):
        expected = {"EUR": 1358.02, "GBP": 1567.89, "JPY": 8.77, "IDR": 0.08, "USD": 1234.56}
        for code in DEFAULT_RATES:
            body = {"data": [{"price": {"amount": "1234.56", "currencyCode": code}}]}
            price = annotate_prices(body, DEFAULT_RATES)["data"][0]["price"]
            self.assertEqual(price["usdAmount"], expected[code], code)

    def test_half_cent_rounds_up(self):
        cases = [
            ("10.125", "CHF", DEFAULT_RATES, 10.13),
            ("0.125", "USD", DEFAULT_RATES, 0.13),
            ("0.25", "EUR", {"EUR": 0.5}, 0.13),
            ("2.675", "USD", DEFAULT_RATES, 2.67),
        ]
        for amount, code, rates, usd in cases:
            body = {"data": [{"price": {"amount": amount, "currencyCode": code}}]}
            price = annotate_prices(body, rates)["data"][0]["price"]
            self.assertEqual(price["usdAmount"], usd, amount)

    def test_unknown_currency_uses_rate_of_one(self):
        body = {"data": [{"price": {"amount": "80", "currencyCode": "CHF"}}]}

        price = annotate_prices(body, DEFAULT_RATES)["data"][0]["price"]

        self.assertEqual(price["usdAmount"], 80.0)
        self.assertEqual(price["originalCurrency"], "CHF")

    def test_items_without_price_pass_through(self):
        body = {"data": [
            {"id": "1", "name": "Louvre tour"},
            {"id": "2", "price": {"currencyCode": "EUR"}},
            {"id": "3", "price": {"amount": "n/a", "currencyCode": "EUR"}},
            {"id": "4", "price": {"amount": "Infinity", "currencyCode": "EUR"}},
        ]}
        expected = copy.deepcopy(body)

        self.assertEqual(annotate_prices(body, DEFAULT_RATES), expected)

    def test_bodies_without_data_list_pass_through(self):
        self.assertIsNone(annotate_prices(None, DEFAULT_RATES))
        self.assertEqual(annotate_prices({"meta": {}}, DEFAULT_RATES), {"meta": {}})
        self.assertEqual(annotate_prices({"data": {"id": 1}}, DEFAULT_RATES), {"data": {"id": 1}})


class TestExchangeRateCache(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.upstream = FakeUpstream()
        self.clock = FakeClock()
        self.http = self.upstream.http()
        self.cache = ExchangeRateCache(self.http, url=RATES_URL, clock=self.clock)

    async def asyncTearDown(self):
        await self.http.aclose()

    async def test_starts_with_defaults(self):
        self.assertEqual(self.cache.rates, DEFAULT_RATES)
        self.assertTrue(self.cache.is_stale())

    async def test_refresh_inverts_usd_table(self):
        result = await self.cache.refresh_if_stale()

        self.assertIsNone(result)
        self.assertEqual(self.cache.rates, {"USD": 1.0, "EUR": 1.25, "GBP": 2.0})
        self.assertEqual(self.cache.last_updated, self.clock.now)

    async def test_skips_unusable_entries(self):
        self.upstream.route(RATES_PATH, json={"rates": {"EUR": 0.8, "XXX": 0, "BAD": "x"}})

        await self.cache.refresh_if_stale()

        self.assertEqual(self.cache.rates, {"EUR": 1.25, "USD": 1.0})

    async def test_at_most_one_fetch_per_day(self):
        await self.cache.refresh_if_stale()
        self.clock.advance(DAY - 1)
        await self.cache.refresh_if_stale()

        self.assertEqual(len(self.upstream.calls(RATES_PATH)), 1)

        self.clock.advance(1)
        await self.cache.refresh_if_stale()
        self.assertEqual(len(self.upstream.calls(RATES_PATH)), 2)

    async def test_failed_fetch_keeps_previous_rates(self):
        self.upstream.route(RATES_PATH, status=503)

        result = await self.cache.refresh_if_stale()

        self.assertIsInstance(result, RefreshError)
        self.assertEqual(self.cache.rates, DEFAULT_RATES)
        self.assertIsNone(self.cache.last_updated)

    async def test_failure_after_success_keeps_last_known_rates(self):
        await self.cache.refresh_if_stale()
        self.upstream.fail(RATES_PATH, httpx.ConnectError("connection refused"))
        self.clock.advance(DAY)

        result = await self.cache.refresh_if_stale()

        self.assertIsInstance(result, RefreshError)
        self.assertEqual(self.cache.rates["EUR"], 1.25)

    async def test_malformed_body_is_a_refresh_error(self):
        self.upstream.route(RATES_PATH, json={"result": "error", "error-type": "unsupported-code"})

        result = await self.cache.refresh_if_stale()

        self.assertIsInstance(result, RefreshError)
        self.assertEqual(self.cache.rates, DEFAULT_RATES)

if __name__ == "__main__":
    unittest.main()
