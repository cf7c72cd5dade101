"""
Jito Adapter Tests
==================
Status mapping, submission errors, endpoint rotation and tip cache.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from jito_swap.shared.execution.execution_result import BundleState, ErrorCode, SwapError
from jito_swap.shared.infrastructure.jito_adapter import JITO_TIP_ACCOUNTS, JitoAdapter


def relay_response(body, status=200) -> httpx.Response:
    return httpx.Response(status, json=body, request=httpx.Request("POST", "https://relay.test"))


@pytest.fixture
def http():
    client = MagicMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def adapter(http):
    return JitoAdapter(http, region="ny")


class TestBundleStatus:

    @pytest.mark.asyncio
    async def test_landed_carries_slot(self, adapter, http):
        http.post.return_value = relay_response({"result": {"context": {"slot": 200}, "value": [
            {"bundle_id": "b1", "status": "Landed", "landed_slot": 123}
        ]}})

        status = await adapter.get_bundle_status("b1")

        assert status.state == BundleState.LANDED
        assert status.landed_slot == 123
        assert adapter.get_stats()["bundles_landed"] == 1
        payload = http.post.await_args.kwargs["json"]
        assert payload["method"] == "getInflightBundleStatuses"
        assert payload["params"] == [["b1"]]

    @pytest.mark.asyncio
    async def test_failed(self, adapter, http):
        http.post.return_value = relay_response({"result": {"value": [{"bundle_id": "b1", "status": "Failed"}]}})
        assert (await adapter.get_bundle_status("b1")).state == BundleState.FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"result": {"value": [{"bundle_id": "b1", "status": "Pending"}]}},
        {"result": {"value": [{"bundle_id": "b1", "status": "Invalid"}]}},
        {"result": {"value": []}},
        {"result": None},
    ])
    async def test_everything_else_is_pending(self, adapter, http, body):
        http.post.return_value = relay_response(body)
        assert (await adapter.get_bundle_status("b1")).state == BundleState.PENDING

    @pytest.mark.asyncio
    async def test_transport_error_is_pending_and_rotates(self, adapter, http):
        http.post.side_effect = httpx.ReadTimeout("slow")
        first_url = adapter.api_url

        status = await adapter.get_bundle_status("b1")

        assert status.state == BundleState.PENDING
        assert adapter.api_url != first_url


class TestSubmitBundle:

    @pytest.mark.asyncio
    async def test_returns_bundle_id(self, adapter, http):
        http.post.return_value = relay_response({"jsonrpc": "2.0", "id": 1, "result": "bundle-xyz"})

        assert await adapter.submit_bundle(["AQID"]) == "bundle-xyz"
        payload = http.post.await_args.kwargs["json"]
        assert payload["method"] == "sendBundle"
        assert payload["params"] == [["AQID"], {"encoding": "base64"}]
        assert adapter.get_stats()["bundles_submitted"] == 1

    @pytest.mark.asyncio
    async def test_relay_error_is_rejected(self, adapter, http):
        http.post.return_value = relay_response({"error": {"code": -32602, "message": "bundle contains an expired blockhash"}})

        with pytest.raises(SwapError) as exc:
            await adapter.submit_bundle(["AQID"])
        assert exc.value.code == ErrorCode.BUNDLE_REJECTED

    @pytest.mark.asyncio
    async def test_rate_limit_rotates_and_rejects(self, adapter, http):
        http.post.return_value = relay_response({}, status=429)
        first_url = adapter.api_url

        with pytest.raises(SwapError) as exc:
            await adapter.submit_bundle(["AQID"])
        assert exc.value.code == ErrorCode.BUNDLE_REJECTED
        assert adapter.api_url != first_url
        http.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_bundle_rejected_without_request(self, adapter, http):
        with pytest.raises(SwapError):
            await adapter.submit_bundle([])
        http.post.assert_not_awaited()


class TestEndpoints:

    def test_preferred_region_first(self, http):
        adapter = JitoAdapter(http, region="tokyo")
        assert adapter.api_url == JitoAdapter.REGIONAL_ENDPOINTS["tokyo"]

    def test_explicit_url_disables_rotation(self, http):
        adapter = JitoAdapter(http, bundle_url="https://relay.test/api/v1/bundles")
        adapter._rotate_endpoint()
        assert adapter.api_url == "https://relay.test/api/v1/bundles"


class TestTipAccounts:

    @pytest.mark.asyncio
    async def test_cached_after_first_fetch(self, adapter, http):
        http.post.return_value = relay_response({"result": ["TipA", "TipB"]})

        assert await adapter.get_tip_accounts() == ["TipA", "TipB"]
        assert await adapter.get_tip_accounts() == ["TipA", "TipB"]
        http.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_falls_back_to_known_accounts(self, adapter, http):
        http.post.side_effect = httpx.ConnectError("down")

        account = await adapter.get_random_tip_account()
        assert account in JITO_TIP_ACCOUNTS
