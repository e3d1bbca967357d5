"""Tests for scheduler job tracking and retry functionality."""

from unittest.mock import AsyncMock, patch

import pytest

from src.core.scheduler_tracker import JobTracker, retry_job_with_backoff


@pytest.fixture
def job_tracker() -> JobTracker:
    """Create a job tracker instance for testing."""
    return JobTracker()


@pytest.fixture(autouse=True)
def no_backoff_sleep():
    """Skip real backoff delays."""
    with patch("src.core.scheduler_tracker.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.mark.unit
async def test_record_job_start(job_tracker: JobTracker) -> None:
    """Test recording job start."""
    await job_tracker.record_job_start("test_job")

    status = await job_tracker.get_job_status("test_job")
    assert status["currently_running"] is True
    assert status["current_run_started"] is not None


@pytest.mark.unit
async def test_record_job_success(job_tracker: JobTracker) -> None:
    """Test recording successful job execution."""
    await job_tracker.record_job_start("test_job")
    await job_tracker.record_job_success("test_job")

    status = await job_tracker.get_job_status("test_job")
    assert status["last_success"] is not None
    assert status["consecutive_failures"] == 0
    assert status["success_count"] == 1
    assert status["currently_running"] is False


@pytest.mark.unit
async def test_consecutive_failures_reset_on_success(job_tracker: JobTracker) -> None:
    """Test that consecutive failures are tracked and reset by a success."""
    assert await job_tracker.record_job_failure("test_job", "Error 1") == 1
    assert await job_tracker.record_job_failure("test_job", "Error 2") == 2

    await job_tracker.record_job_success("test_job")

    status = await job_tracker.get_job_status("test_job")
    assert status["consecutive_failures"] == 0
    assert status["failure_count"] == 2  # Total failures still tracked
    assert status["last_error"] == "Error 2"


@pytest.mark.unit
async def test_long_errors_are_truncated(job_tracker: JobTracker) -> None:
    """Test that stored errors are capped at 500 characters."""
    await job_tracker.record_job_failure("test_job", "x" * 2000)

    status = await job_tracker.get_job_status("test_job")
    assert len(status["last_error"]) == 500


@pytest.mark.unit
async def test_dead_letter_queue_max_size(job_tracker: JobTracker) -> None:
    """Test that dead letter queue keeps only the most recent items."""
    for i in range(150):
        await job_tracker.add_to_dead_letter_queue(f"job_{i}", f"error_{i}", "context")

    dlq = job_tracker.get_dead_letter_queue()
    assert len(dlq) == 100
    assert dlq[-1] == {"job_name": "job_149", "error": "error_149", "context": "context"}


@pytest.mark.unit
async def test_retry_job_with_backoff_success_after_retry(job_tracker: JobTracker) -> None:
    """Test successful job execution after retries."""
    mock_job = AsyncMock(side_effect=[Exception("Error 1"), Exception("Error 2"), None])

    with patch("src.core.scheduler_tracker.job_tracker", job_tracker):
        await retry_job_with_backoff(mock_job, "test_job", max_retries=3)

    assert mock_job.call_count == 3
    status = await job_tracker.get_job_status("test_job")
    assert status["success_count"] == 1
    assert status["failure_count"] == 0


@pytest.mark.unit
async def test_retry_job_with_backoff_all_retries_exhausted(job_tracker: JobTracker, no_backoff_sleep) -> None:
    """Test job failure after all retries exhausted."""
    mock_job = AsyncMock(side_effect=Exception("Persistent error"))

    with patch("src.core.scheduler_tracker.job_tracker", job_tracker):
        await retry_job_with_backoff(mock_job, "test_job", max_retries=3)

    assert mock_job.call_count == 3
    assert no_backoff_sleep.await_count == 2
    status = await job_tracker.get_job_status("test_job")
    assert status["consecutive_failures"] == 1
    assert status["last_error"] == "Failed after 3 attempts: Persistent error"
    assert job_tracker.get_dead_letter_queue() == []


@pytest.mark.unit
async def test_retry_job_with_backoff_adds_to_dlq_after_consecutive_failures(job_tracker: JobTracker) -> None:
    """Test that a job lands in the dead letter queue after 3 consecutive failed runs."""
    mock_job = AsyncMock(side_effect=Exception("Persistent error"))

    with patch("src.core.scheduler_tracker.job_tracker", job_tracker):
        for _ in range(3):
            await retry_job_with_backoff(mock_job, "test_job", max_retries=1)

    dlq = job_tracker.get_dead_letter_queue()
    assert len(dlq) == 1
    assert dlq[0]["job_name"] == "test_job"
    assert dlq[0]["context"] == "Failed 3 consecutive times"


@pytest.mark.unit
async def test_get_job_status_for_nonexistent_job(job_tracker: JobTracker) -> None:
    """Test getting status for a job that hasn't run yet."""
    status = await job_tracker.get_job_status("nonexistent_job")

    assert status["job_name"] == "nonexistent_job"
    assert status["last_success"] is None
    assert status["consecutive_failures"] == 0
    assert status["currently_running"] is False
