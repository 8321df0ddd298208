from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from sui_wallet.clients.sui_rpc import SuiBalanceClient, SuiRpcError

OWNER = "0x" + "ab" * 32


def _response(body) -> Mock:
    response = Mock()
    response.raise_for_status = Mock()
    response.json = Mock(return_value=body)
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.mark.asyncio
async def test_get_balance_posts_json_rpc_request(session):
    session.post.return_value = _response(
        {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {
                "coinType": "0x2::sui::SUI",
                "coinObjectCount": 3,
                "totalBalance": "2500000000",
                "lockedBalance": {},
            },
        }
    )
    client = SuiBalanceClient("https://rpc.example", request_timeout=4, session=session)

    balance = await client.get_balance(OWNER)

    assert balance == 2_500_000_000
    session.post.assert_called_once_with(
        "https://rpc.example",
        json={
            "jsonrpc": "2.0",
            "id": 1,
            "method": "suix_getBalance",
            "params": [OWNER, "0x2::sui::SUI"],
        },
        timeout=4,
    )


@pytest.mark.asyncio
async def test_request_ids_increase(session):
    session.post.return_value = _response({"result": {"totalBalance": "0"}})
    client = SuiBalanceClient("https://rpc.example", session=session)

    await client.get_balance(OWNER)
    await client.get_balance(OWNER)

    ids = [call.kwargs["json"]["id"] for call in session.post.call_args_list]
    assert ids == [1, 2]


@pytest.mark.asyncio
async def test_rpc_error_object_raises(session):
    session.post.return_value = _response(
        {"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid params"}}
    )
    client = SuiBalanceClient("https://rpc.example", session=session)

    with pytest.raises(SuiRpcError, match=r"suix_getBalance failed \(-32602\): Invalid params"):
        await client.get_balance(OWNER)


@pytest.mark.asyncio
async def test_missing_result_raises(session):
    session.post.return_value = _response({"jsonrpc": "2.0", "id": 1})
    client = SuiBalanceClient("https://rpc.example", session=session)

    with pytest.raises(ValueError, match="has no result"):
        await client.get_balance(OWNER)


@pytest.mark.asyncio
@pytest.mark.parametrize("result", [{}, {"totalBalance": "1.5"}, {"totalBalance": None}])
async def test_invalid_total_balance_raises(session, result):
    session.post.return_value = _response({"result": result})
    client = SuiBalanceClient("https://rpc.example", session=session)

    with pytest.raises(ValueError, match="Invalid totalBalance"):
        await client.get_balance(OWNER)


@pytest.mark.asyncio
async def test_http_error_propagates(session):
    response = _response({})
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("429")
    session.post.return_value = response
    client = SuiBalanceClient("https://rpc.example", session=session)

    with pytest.raises(requests.exceptions.HTTPError):
        await client.get_balance(OWNER)
