import pytest

from fakes import FakeLedgerReader, FakeRecordSink, make_payload, make_print_event


@pytest.fixture
def fake_ledger() -> FakeLedgerReader:
    return FakeLedgerReader()


@pytest.fixture
def fake_sink() -> FakeRecordSink:
    return FakeRecordSink()


@pytest.fixture
def print_event():
    return make_print_event


@pytest.fixture
def payload_builder():
    return make_payload
