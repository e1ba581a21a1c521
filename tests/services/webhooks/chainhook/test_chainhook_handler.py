"""Tests for the chainhook webhook pipeline."""

from unittest.mock import AsyncMock, Mock

import pytest

from app.services.integrations.webhooks.chainhook.handler import (
    SUCCESS_MESSAGE,
    ChainhookHandler,
)
from app.services.integrations.webhooks.chainhook.parser import ChainhookParser
from app.services.integrations.webhooks.chainhook.service import ChainhookService
from app.services.reporting.models import ReportError, ReportOutcome, ReportStage
from app.services.reporting.report_generator import ReportGenerator
from fakes import FakeLedgerReader, FakeRecordSink


def outcome_for(proposal_id: int, success: bool = True) -> ReportOutcome:
    if success:
        return ReportOutcome(proposal_id=proposal_id, success=True)
    return ReportOutcome(
        proposal_id=proposal_id,
        success=False,
        error=ReportError(
            proposal_id=proposal_id, stage=ReportStage.LEDGER_READ, message="down"
        ),
    )


@pytest.fixture
def generator_mock() -> Mock:
    generator = Mock(spec=ReportGenerator)
    generator.generate_report = AsyncMock(side_effect=lambda pid: outcome_for(pid))
    return generator


@pytest.mark.asyncio
async def test_empty_payload_succeeds(generator_mock: Mock) -> None:
    """Test an empty block list succeeds with zero reports."""
    service = ChainhookService(report_generator=generator_mock)

    result = await service.process({"chainhook": {"blocks": []}})

    assert result.success
    assert result.message == SUCCESS_MESSAGE
    assert result.processed == []
    generator_mock.generate_report.assert_not_called()


@pytest.mark.asyncio
async def test_partial_failure_attempts_every_proposal(
    generator_mock: Mock, print_event, payload_builder
) -> None:
    """Test a failing proposal does not stop the ones after it."""
    generator_mock.generate_report.side_effect = lambda pid: outcome_for(
        pid, success=pid != 2
    )
    handler = ChainhookHandler(report_generator=generator_mock)
    parsed = ChainhookParser().parse(
        payload_builder([[print_event(1)], [print_event(2)], [print_event(3)]])
    )

    result = await handler.handle(parsed)

    assert [c.args[0] for c in generator_mock.generate_report.await_args_list] == [1, 2, 3]
    assert not result.success
    assert result.processed == [1, 3]
    assert [error.proposal_id for error in result.failed] == [2]
    assert result.partial
    assert result.message == "1 of 3 proposal reports failed"


@pytest.mark.asyncio
async def test_generator_exception_is_contained(
    generator_mock: Mock, print_event, payload_builder
) -> None:
    """Test an exception escaping the generator becomes a failed outcome."""

    async def generate(pid):
        if pid == 1:
            raise RuntimeError("unexpected")
        return outcome_for(pid)

    generator_mock.generate_report.side_effect = generate
    service = ChainhookService(report_generator=generator_mock)

    result = await service.process(payload_builder([[print_event(1), print_event(2)]]))

    assert not result.success
    assert result.processed == [2]
    assert result.failed[0].stage == ReportStage.REPORT
    assert result.failed[0].message == "unexpected"


@pytest.mark.asyncio
async def test_parser_failure_becomes_pipeline_result(generator_mock: Mock) -> None:
    """Test the service never raises even when parsing blows up."""
    service = ChainhookService(report_generator=generator_mock)
    service.parser = Mock()
    service.parser.parse.side_effect = ValueError("bad payload")

    result = await service.process({"chainhook": {}})

    assert not result.success
    assert "bad payload" in result.message
    assert result.failed == []


@pytest.mark.asyncio
async def test_skipped_proposals_count_as_success(generator_mock: Mock, print_event, payload_builder) -> None:
    """Test already-reported proposals do not fail the delivery."""
    generator_mock.generate_report.side_effect = lambda pid: ReportOutcome(
        proposal_id=pid, success=True, skipped=True
    )
    service = ChainhookService(report_generator=generator_mock)

    result = await service.process(payload_builder([[print_event(8)]]))

    assert result.success
    assert result.skipped == [8]
    assert result.processed == []


@pytest.mark.asyncio
async def test_duplicate_matches_report_twice(print_event, payload_builder) -> None:
    """Test duplicate ids in one payload run two read+append cycles end to end."""
    ledger = FakeLedgerReader()
    sink = FakeRecordSink()
    generator = ReportGenerator(ledger, sink, ledger_timeout=1, sink_timeout=1)
    service = ChainhookService(report_generator=generator)

    result = await service.process(payload_builder([[print_event(5)], [print_event(5)]]))

    assert result.success
    assert result.processed == [5, 5]
    assert ledger.calls == [5, 5]
    assert [row.to_values()[:4] for row in sink.rows] == [
        [5, "SP000000000000000000002Q6VF78", 50, 5],
        [5, "SP000000000000000000002Q6VF78", 50, 5],
    ]


@pytest.mark.asyncio
async def test_ledger_failure_end_to_end(print_event, payload_builder) -> None:
    """Test proposals [1, 2] where 2's read fails: 1 is appended, 2 is reported failed."""
    ledger = FakeLedgerReader(failing=[2])
    sink = FakeRecordSink()
    generator = ReportGenerator(ledger, sink, ledger_timeout=1, sink_timeout=1)
    service = ChainhookService(report_generator=generator)

    result = await service.process(payload_builder([[print_event(1), print_event(2)]]))

    assert not result.success
    assert ledger.calls == [1, 2]
    assert [row.proposal_id for row in sink.rows] == [1]
    assert result.failed[0].proposal_id == 2
    assert result.failed[0].stage == ReportStage.LEDGER_READ


@pytest.mark.asyncio
async def test_oversized_id_does_not_block_other_reports(print_event, payload_builder) -> None:
    """Test an unconvertible id is skipped and the valid proposal is still reported."""
    ledger = FakeLedgerReader()
    sink = FakeRecordSink()
    generator = ReportGenerator(ledger, sink, ledger_timeout=1, sink_timeout=1)
    service = ChainhookService(report_generator=generator)

    result = await service.process(
        payload_builder([[print_event(7), print_event("9" * 5000)]])
    )

    assert result.success
    assert ledger.calls == [7]
    assert result.processed == [7]
