"""Session facade tests with an in-memory transport."""

from __future__ import annotations

import dataclasses
import json

import httpx
import pytest

from harmony_rpc.config import ClientConfig
from harmony_rpc.errors import ConfigError, UnknownMethodError
from harmony_rpc.rpc.transport import EmptyResponse, HttpTransport, RawResponse, TransportError
from harmony_rpc.session import CLEAN, DIRTY, ErrorAccumulator, Session, ValidatedCall

ONE_ADDRESS = "one1pdv9lrdwl0rg5vglh4xtyrv3wjk3wsqket7zxy"
HEX_HASH = "0x" + "ab" * 32
MAINNET_S0 = "https://a.api.s0.t.hmny.io/"


class FakeTransport:
    """Records request bodies and answers with a canned result."""

    def __init__(self, result: object = None) -> None:
        self.sent: list[tuple[str, dict]] = []
        self.result = result if result is not None else RawResponse('{"jsonrpc":"2.0","id":1,"result":"0x0"}')

    def send(self, url: str, body: str) -> object:
        self.sent.append((url, json.loads(body)))
        return self.result


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def session(transport: FakeTransport) -> Session:
    return Session("mainnet", 0, transport=transport)


class TestConstruction:
    """Endpoint resolution happens once, at construction."""

    def test_defaults(self, transport: FakeTransport) -> None:
        session = Session(transport=transport)
        assert session.network == "mainnet"
        assert session.shard == 0
        assert session.endpoint == MAINNET_S0
        assert session.default_page_size == 10
        assert session.max_page_size == 100
        assert session.state == CLEAN

    def test_testnet_shard(self, transport: FakeTransport) -> None:
        session = Session("testnet", 2, transport=transport)
        assert session.endpoint == "https://rpc.s2.b.hmny.io/"

    def test_unknown_network(self) -> None:
        with pytest.raises(ConfigError, match="Unknown network"):
            Session("nonexistent", 0)

    def test_unknown_shard(self) -> None:
        with pytest.raises(ConfigError, match="Shard 9"):
            Session("mainnet", 9)

    def test_custom_nodes(self, transport: FakeTransport) -> None:
        nodes = {"localnet": {0: "http://127.0.0.1:9500/"}}
        session = Session("localnet", 0, nodes=nodes, transport=transport)
        assert session.endpoint == "http://127.0.0.1:9500/"

    def test_from_config(self, transport: FakeTransport) -> None:
        config = ClientConfig(network="testnet", shard=1, default_page_size=5, max_page_size=20)
        session = Session.from_config(config, transport=transport)
        assert session.endpoint == "https://rpc.s1.b.hmny.io/"
        assert session.default_page_size == 5
        assert session.max_page_size == 20

    def test_invalid_page_settings(self) -> None:
        with pytest.raises(ConfigError):
            Session(default_page_size=50, max_page_size=20)


class TestValidation:
    """Composite validation and error accumulation."""

    def test_one_bad_field_gives_one_diagnostic(self, session: Session) -> None:
        assert not session.validate_get_balance_by_block_number("not-an-address", "26943165")
        errors = session.get_errors()
        assert len(errors) == 1
        assert errors[0].startswith("address:")
        assert session.state == DIRTY

    def test_valid_arguments_leave_session_clean(self, session: Session) -> None:
        assert session.validate_get_balance_by_block_number(ONE_ADDRESS, 26943165)
        assert session.is_clean
        assert session.get_errors() == ()

    def test_errors_accumulate_until_reset(self, session: Session) -> None:
        session.validate_get_balance("bad")
        session.validate_get_transaction_by_hash("0x12")
        assert len(session.get_errors()) == 2
        session.reset()
        assert session.state == CLEAN
        session.reset()
        assert session.get_errors() == ()

    def test_reset_keeps_settings(self, session: Session) -> None:
        session.validate_get_balance("bad")
        session.reset()
        assert session.endpoint == MAINNET_S0
        assert session.max_page_size == 100

    def test_page_size_limit(self, session: Session) -> None:
        assert session.validate_get_transactions_history(ONE_ADDRESS, 1, 100)
        assert not session.validate_get_transactions_history(ONE_ADDRESS, 1, 101)
        assert session.get_errors() == ("page size: exceeds maximum page size of 100",)

    def test_hash_is_case_insensitive(self, session: Session) -> None:
        assert session.validate_get_transaction_receipt("0x" + "AB" * 32)

    def test_flags_are_type_strict(self, session: Session) -> None:
        assert session.validate_get_block_by_number(1, full_tx=True)
        assert not session.validate_get_block_by_number(1, full_tx=1)

    def test_unknown_method(self, session: Session) -> None:
        with pytest.raises(UnknownMethodError):
            session.validate("hmyv2_doesNotExist")

    def test_wrong_argument_count(self, session: Session) -> None:
        with pytest.raises(TypeError):
            session.validate_get_balance(ONE_ADDRESS, 1, 2)


class TestCall:
    """Unvalidated calls send arguments as given."""

    def test_call_sends_envelope(self, session: Session, transport: FakeTransport) -> None:
        result = session.call_get_balance(ONE_ADDRESS)
        assert isinstance(result, RawResponse)
        url, body = transport.sent[0]
        assert url == MAINNET_S0
        assert body == {"jsonrpc": "2.0", "id": 1, "method": "hmyv2_getBalance", "params": [ONE_ADDRESS]}

    def test_call_does_not_validate_or_touch_errors(self, session: Session, transport: FakeTransport) -> None:
        session.call_get_balance("not-an-address")
        assert session.is_clean
        assert transport.sent[0][1]["params"] == ["not-an-address"]

    def test_no_argument_method_sends_empty_params(self, session: Session, transport: FakeTransport) -> None:
        session.call_block_number()
        assert transport.sent[0][1]["params"] == []

    def test_rpc_name_is_accepted(self, session: Session, transport: FakeTransport) -> None:
        session.call("net_peerCount")
        assert transport.sent[0][1]["method"] == "net_peerCount"

    def test_history_uses_session_page_size(self, transport: FakeTransport) -> None:
        session = Session(default_page_size=25, transport=transport)
        session.call_get_transactions_history(ONE_ADDRESS, page_number=2)
        params = transport.sent[0][1]["params"][0]
        assert params["pageIndex"] == 1
        assert params["pageSize"] == 25

    def test_build_request_sends_nothing(self, session: Session, transport: FakeTransport) -> None:
        request = session.build_request("get_epoch")
        assert request["method"] == "hmyv2_getEpoch"
        assert transport.sent == []

    def test_empty_response(self, transport: FakeTransport) -> None:
        transport.result = EmptyResponse()
        session = Session(transport=transport)
        result = session.call_get_epoch()
        assert result.ok and result.empty

    def test_unreachable_endpoint(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        nodes = {"localnet": {0: "http://127.0.0.1:1/"}}
        session = Session(
            "localnet",
            0,
            nodes=nodes,
            transport=HttpTransport(transport=httpx.MockTransport(handler)),
        )
        result = session.call_block_number()
        assert isinstance(result, TransportError)
        assert result.url == "http://127.0.0.1:1/"
        assert session.is_clean

    def test_malformed_node_url(self) -> None:
        session = Session(
            "broken",
            0,
            nodes={"broken": {0: "http://[::1"}},
            transport=HttpTransport(transport=httpx.MockTransport(lambda request: httpx.Response(200))),
        )
        result = session.call_block_number()
        assert isinstance(result, TransportError)
        assert isinstance(result.cause, httpx.InvalidURL)


class TestPrepareDispatch:
    """The checked path only sends arguments that passed validation."""

    def test_prepare_and_dispatch(self, session: Session, transport: FakeTransport) -> None:
        prepared = session.prepare("get_cx_receipt_by_hash", HEX_HASH)
        assert isinstance(prepared, ValidatedCall)
        assert prepared.method == "hmyv2_getCXReceiptByHash"
        session.dispatch(prepared)
        assert transport.sent[0][1]["params"] == [HEX_HASH]

    def test_prepare_failure_returns_none(self, session: Session, transport: FakeTransport) -> None:
        assert session.prepare("get_balance", "nope") is None
        assert len(session.get_errors()) == 1
        assert transport.sent == []

    def test_dispatch_rejects_other_values(self, session: Session) -> None:
        with pytest.raises(TypeError):
            session.dispatch({"method": "hmyv2_getBalance", "params": ["x"]})

    def test_validated_call_cannot_be_forged(self, session: Session) -> None:
        with pytest.raises(TypeError):
            ValidatedCall(session.describe("get_balance"), ("x",))

    def test_replaced_copy_is_rejected(self, session: Session, transport: FakeTransport) -> None:
        prepared = session.prepare("get_balance", ONE_ADDRESS)
        tampered = dataclasses.replace(prepared, params=("bogus",))
        with pytest.raises(TypeError):
            session.dispatch(tampered)
        assert transport.sent == []

    def test_call_from_another_session_is_rejected(self, session: Session, transport: FakeTransport) -> None:
        prepared = Session("testnet", 0, transport=transport).prepare("get_balance", ONE_ADDRESS)
        with pytest.raises(TypeError):
            session.dispatch(prepared)
        assert transport.sent == []

    def test_prepared_call_can_be_sent_twice(self, session: Session, transport: FakeTransport) -> None:
        prepared = session.prepare("get_epoch")
        session.dispatch(prepared)
        session.dispatch(prepared)
        assert len(transport.sent) == 2


class TestDynamicMethods:
    """validate_<name> / call_<name> pairs exist for every registered method."""

    def test_every_method_has_a_pair(self, session: Session) -> None:
        names = dir(session)
        for descriptor in session.methods():
            assert f"validate_{descriptor.name}" in names
            assert f"call_{descriptor.name}" in names
            assert callable(getattr(session, f"call_{descriptor.name}"))

    def test_unknown_attribute(self, session: Session) -> None:
        with pytest.raises(AttributeError):
            session.call_not_a_method()
        with pytest.raises(AttributeError):
            session.something_else

    def test_bound_method_metadata(self, session: Session) -> None:
        method = session.validate_get_balance
        assert method.__name__ == "validate_get_balance"
        assert "get_balance(address)" in method.__doc__


class TestErrorAccumulator:
    """Tests for the accumulator container."""

    def test_add_and_clear(self) -> None:
        errors = ErrorAccumulator()
        assert not errors
        errors.add("one")
        errors.extend(["two", "three"])
        assert len(errors) == 3
        assert list(errors) == ["one", "two", "three"]
        errors.clear()
        assert errors.messages == ()
