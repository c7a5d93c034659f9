"""Tests for the sequential research batch harness."""

import csv
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from conftest import make_mock_response, make_mock_session

from storyweave.infrastructure.csv_logger import CSVLogger
from storyweave.services.batch_test import BatchTestReport, BatchTestRunner, CallResult


def _patched_session(mock_session):
    """Patch aiohttp.ClientSession to yield mock_session from `async with`."""
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=mock_session)
    session_cm.__aexit__ = AsyncMock(return_value=False)
    return patch(
        "storyweave.services.batch_test.aiohttp.ClientSession", return_value=session_cm
    )


class TestBatchTestReport:
    """Tests for result aggregation."""

    def test_from_results(self):
        results = [
            CallResult(index=0, success=True, duration=100),
            CallResult(index=1, success=False, duration=51, error="quota_exceeded"),
            CallResult(index=2, success=True, duration=150),
        ]
        report = BatchTestReport.from_results(results)

        assert report.total == 3
        assert report.successful == 2
        assert report.failed == 1
        assert report.avg_duration == 100

    def test_empty(self):
        report = BatchTestReport.from_results([])
        assert report.total == 0
        assert report.avg_duration == 0

    def test_to_dict(self):
        report = BatchTestReport.from_results([CallResult(index=0, success=True, duration=5)])
        data = report.to_dict()
        assert data["results"] == [{"index": 0, "success": True, "duration": 5, "error": None}]


class TestBatchTestRunner:
    """Tests for BatchTestRunner.run."""

    @pytest.mark.asyncio
    async def test_sequential_calls_with_delay(self):
        responses = [make_mock_response(200, {"summary": "s"}) for _ in range(5)]
        mock_session = make_mock_session(responses=responses)
        runner = BatchTestRunner("http://fake/api/v1/research", calls=5, delay_ms=100, content="Mars")

        with (
            _patched_session(mock_session),
            patch("storyweave.services.batch_test.asyncio.sleep", new_callable=AsyncMock) as sleep,
        ):
            report = await runner.run()

        assert report.total == 5
        assert report.successful == 5
        assert [r.index for r in report.results] == [0, 1, 2, 3, 4]
        assert mock_session.post.call_count == 5
        assert mock_session.post.call_args.kwargs["json"] == {"content": "Mars"}
        # No delay after the last call
        assert sleep.await_count == 4
        sleep.assert_awaited_with(0.1)

    @pytest.mark.asyncio
    async def test_records_failures_and_errors(self):
        responses = [
            make_mock_response(200, {"summary": "s"}),
            make_mock_response(429, {"error": "quota_exceeded"}),
            aiohttp.ClientError("connection reset"),
            make_mock_response(500, json_error=ValueError("not json")),
        ]
        mock_session = make_mock_session(responses=responses)
        runner = BatchTestRunner("http://fake", calls=4, delay_ms=0)

        with (
            _patched_session(mock_session),
            patch("storyweave.services.batch_test.asyncio.sleep", new_callable=AsyncMock),
        ):
            report = await runner.run()

        assert report.successful == 1
        assert report.failed == 3
        assert report.results[1].error == "quota_exceeded"
        assert "connection reset" in report.results[2].error
        assert report.results[3].error == "HTTP 500"

    @pytest.mark.asyncio
    async def test_writes_csv_rows(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            filepath = Path(tmpdir) / "batch.csv"
            responses = [make_mock_response(200, {}), make_mock_response(402, {"error": "x"})]
            runner = BatchTestRunner(
                "http://fake", calls=2, delay_ms=0, csv_logger=CSVLogger(filepath)
            )

            with (
                _patched_session(make_mock_session(responses=responses)),
                patch("storyweave.services.batch_test.asyncio.sleep", new_callable=AsyncMock),
            ):
                await runner.run()

            with open(filepath) as f:
                rows = list(csv.reader(f))

            assert len(rows) == 3
            assert rows[1][1] == "research_batch"
            assert rows[1][3] == "True"
            assert rows[2][3] == "False"
            assert rows[2][5] == "x"
