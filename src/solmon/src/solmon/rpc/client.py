import asyncio
import itertools
from typing import Any

from aiohttp import ClientError, ClientSession
from loguru import logger
from pydantic import ValidationError

from solmon import settings
from solmon.exceptions import RPCError
from solmon.rpc.models import BlockProduction, EpochInfo, PerformanceSample, VoteAccounts


class SolanaRPCClient:
    """Minimal Solana JSON-RPC client.

    Every call opens its own session and makes exactly one attempt. Failures of any kind
    surface as ``RPCError`` so callers only have to handle one exception type.
    """

    def __init__(self, endpoint: str | None = None):
        self.endpoint = endpoint or settings.RPC_URL
        self._ids = itertools.count(1)

    async def request(self, method: str, params: list | None = None) -> Any:
        """Send a JSON-RPC 2.0 request and return its ``result`` member."""
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}
        logger.opt(colors=True).debug(f"<magenta>RPC request | method: {method} | params: {payload['params']}</magenta>")

        try:
            async with ClientSession() as session:
                async with session.post(self.endpoint, json=payload) as response:
                    if response.status != 200:
                        response_text = await response.text()
                        raise RPCError(method, f"HTTP {response.status} - {response_text[:200]}")
                    body = await response.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RPCError(method, f"{type(e).__name__}: {e}") from e

        if not isinstance(body, dict):
            raise RPCError(method, f"unexpected response body: {body!r}")
        if body.get("error") is not None:
            raise RPCError(method, f"RPC error: {body['error']}")
        if "result" not in body:
            raise RPCError(method, "response has no result")
        return body["result"]

    async def fetch_epoch_info(self) -> EpochInfo:
        result = await self.request("getEpochInfo")
        return _decode("getEpochInfo", EpochInfo, result)

    async def fetch_performance_samples(self, limit: int = 1) -> list[PerformanceSample]:
        result = await self.request("getRecentPerformanceSamples", [limit])
        if not isinstance(result, list):
            raise RPCError("getRecentPerformanceSamples", f"expected a list, got {type(result).__name__}")
        return [_decode("getRecentPerformanceSamples", PerformanceSample, sample) for sample in result]

    async def fetch_block_production(self) -> BlockProduction:
        result = await self.request("getBlockProduction")
        # getBlockProduction wraps its payload in an RpcResponse context
        value = result.get("value") if isinstance(result, dict) else None
        return _decode("getBlockProduction", BlockProduction, value)

    async def fetch_vote_accounts(self) -> VoteAccounts:
        result = await self.request("getVoteAccounts")
        return _decode("getVoteAccounts", VoteAccounts, result)


def _decode(method: str, model, data: Any):
    if data is None:
        raise RPCError(method, "empty result")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RPCError(method, f"could not decode result: {e.error_count()} validation error(s)") from e
