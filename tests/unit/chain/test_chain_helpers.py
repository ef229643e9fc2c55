"""Tests for ABI event helpers, networks and the local signer."""

import pytest
from eth_account import Account
from eth_utils import keccak

from intent_router.chain.abi import INTENT_CHANNEL_ABI
from intent_router.chain.client import Web3ChainClient, event_signature, event_topics
from intent_router.chain.networks import NETWORKS, get_network, get_network_by_chain_id
from intent_router.chain.signer import LocalAccountSigner
from tests.helpers import CHANNEL, make_log
from tests.helpers.constants import TEST_PRIVATE_KEY


class TestEventHelpers:
    def test_event_signature(self):
        executed = next(item for item in INTENT_CHANNEL_ABI if item.get("name") == "IntentExecuted")
        assert event_signature(executed) == "IntentExecuted(bytes32,bool,uint256)"

    def test_topics_cover_all_events(self):
        topics = event_topics(INTENT_CHANNEL_ABI)
        names = {item["name"] for item in INTENT_CHANNEL_ABI if item["type"] == "event"}
        assert set(topics.values()) == names
        assert topics["0x" + keccak(text="IntentRefunded(bytes32)").hex()] == "IntentRefunded"

    def test_log_key_is_tx_hash_and_index(self):
        upper = make_log("IntentExecuted", tx_hash="0x" + "AB" * 32, log_index=3)
        lower = make_log("IntentExecuted", tx_hash="0x" + "ab" * 32, log_index=3)
        assert upper.key == lower.key == ("0x" + "ab" * 32, 3)
        assert make_log("IntentExecuted", log_index=4).key != lower.key


class TestNetworks:
    def test_known_networks(self):
        assert {n.chain_id for n in NETWORKS.values()} == {1, 8453, 42161, 10}

    def test_lookup(self):
        base = get_network("Base")
        assert base is not None and base.chain_id == 8453
        assert get_network_by_chain_id(42161) == NETWORKS["Arbitrum"]
        assert get_network_by_chain_id(999) is None
        assert get_network("Solana") is None


class TestLocalAccountSigner:
    def test_address_from_key(self):
        signer = LocalAccountSigner.from_key(TEST_PRIVATE_KEY)
        assert signer.address == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class _StubCall:
    def __init__(self, tx: dict) -> None:
        self.tx = tx

    async def build_transaction(self, params: dict) -> dict:
        return {**self.tx, **params}


class _StubFunctions:
    def __init__(self, tx: dict) -> None:
        self.tx = tx
        self.calls: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        def call(*args):
            self.calls.append((name, args))
            return _StubCall(self.tx)

        return call


class _StubContract:
    def __init__(self, tx: dict) -> None:
        self.functions = _StubFunctions(tx)


class _StubEth:
    def __init__(self) -> None:
        self.sent: list[bytes] = []

    async def get_transaction_count(self, address: str) -> int:
        return 7

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        self.sent.append(bytes(raw))
        return b"\x99" * 32


class _StubWeb3:
    def __init__(self) -> None:
        self.eth = _StubEth()


class TestWeb3ChainClientWrites:
    BASE_TX = {"to": CHANNEL, "data": "0x", "gas": 100_000, "gasPrice": 10**9}

    @pytest.mark.asyncio
    async def test_sends_signed_raw_transaction(self, monkeypatch):
        account = Account.from_key(TEST_PRIVATE_KEY)
        client = Web3ChainClient("http://localhost:8545", account=account)
        contract = _StubContract(self.BASE_TX)
        client._w3 = _StubWeb3()

        async def chain_id() -> int:
            return 1

        monkeypatch.setattr(client, "_contract", lambda address, abi: contract)
        monkeypatch.setattr(client, "get_chain_id", chain_id)

        tx_hash = await client.write_contract(CHANNEL, [], "cancelIntent", [b"\x01" * 32], value=5)

        expected = account.sign_transaction(
            {**self.BASE_TX, "from": account.address, "nonce": 7, "value": 5, "chainId": 1}
        )
        assert client._w3.eth.sent == [bytes(expected.raw_transaction)]
        assert contract.functions.calls == [("cancelIntent", (b"\x01" * 32,))]
        assert tx_hash == "0x" + "99" * 32

    @pytest.mark.asyncio
    async def test_write_requires_account(self):
        client = Web3ChainClient("http://localhost:8545")
        with pytest.raises(RuntimeError):
            await client.write_contract(CHANNEL, [], "cancelIntent", [])
