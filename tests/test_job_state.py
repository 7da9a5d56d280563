"""Tests for clip job models and the state machine."""

import pytest

from hookclip.errors import ConfigurationError
from hookclip.jobs import state
from hookclip.jobs.models import (
    AspectRatio,
    ClipJob,
    ClipOptions,
    FailureReason,
    JobFailure,
    JobStatus,
    Resolution,
)
from hookclip.models.moment import Moment


def _make_job(entered_at: float = 0.0) -> ClipJob:
    moment = Moment(label="Funny reaction", start=15, end=23, score=88, tags=["funny"])
    return ClipJob(moment=moment, state_entered_at=entered_at)


class TestClipOptions:
    def test_defaults(self) -> None:
        opts = ClipOptions()
        assert opts.aspect_ratio is AspectRatio.LANDSCAPE
        assert opts.resolution is Resolution.P1080

    def test_parse_strings(self) -> None:
        opts = ClipOptions.parse("9:16", "720p")
        assert opts.aspect_ratio is AspectRatio.PORTRAIT
        assert opts.resolution is Resolution.P720

    def test_parse_fills_defaults(self) -> None:
        assert ClipOptions.parse(None, "480p") == ClipOptions(resolution=Resolution.P480)

    @pytest.mark.parametrize("aspect, res", [("21:9", "1080p"), ("16:9", "4k"), ("", "720p")])
    def test_rejects_unknown_values(self, aspect: str, res: str) -> None:
        with pytest.raises(ConfigurationError):
            ClipOptions.parse(aspect, res)

    def test_from_mapping(self) -> None:
        opts = ClipOptions.from_value({"aspect_ratio": "1:1"})
        assert opts == ClipOptions(aspect_ratio=AspectRatio.SQUARE)

    def test_from_mapping_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError):
            ClipOptions.from_value({"aspect": "1:1"})

    def test_to_dict(self) -> None:
        assert ClipOptions.parse("4:5", "720p").to_dict() == {
            "aspect_ratio": "4:5",
            "resolution": "720p",
        }


class TestClipJob:
    def test_new_job_is_queued(self) -> None:
        job = _make_job()
        assert job.status is JobStatus.QUEUED
        assert job.result_ref is None
        assert job.error is None
        assert not job.is_terminal

    def test_ids_unique(self) -> None:
        assert len({_make_job().id for _ in range(50)}) == 50


class TestTransitions:
    def test_happy_path(self) -> None:
        job = _make_job()
        assert state.mark_processing(job, 1.0)
        assert job.status is JobStatus.PROCESSING
        assert job.state_entered_at == 1.0
        assert state.mark_done(job, "memory://clip.mp4", 2.0)
        assert job.status is JobStatus.DONE
        assert job.result_ref == "memory://clip.mp4"
        assert job.completed_at is not None

    def test_queued_can_fail(self) -> None:
        job = _make_job()
        failure = JobFailure(FailureReason.TIMEOUT, "no ack")
        assert state.mark_failed(job, failure, 1.0)
        assert job.status is JobStatus.FAILED
        assert job.error == failure
        assert job.result_ref is None

    def test_done_from_queued_dropped(self) -> None:
        job = _make_job()
        assert not state.mark_done(job, "memory://clip.mp4", 1.0)
        assert job.status is JobStatus.QUEUED
        assert job.result_ref is None

    def test_done_without_ref_dropped(self) -> None:
        job = _make_job()
        state.mark_processing(job, 1.0)
        assert not state.mark_done(job, "", 2.0)
        assert job.status is JobStatus.PROCESSING

    def test_terminal_done_is_immutable(self) -> None:
        job = _make_job()
        state.mark_processing(job, 1.0)
        state.mark_done(job, "memory://a.mp4", 2.0)
        assert not state.mark_failed(job, JobFailure(FailureReason.BACKEND_ERROR), 3.0)
        assert not state.mark_done(job, "memory://b.mp4", 3.0)
        assert not state.mark_processing(job, 3.0)
        assert job.status is JobStatus.DONE
        assert job.result_ref == "memory://a.mp4"
        assert job.error is None

    def test_terminal_failed_is_immutable(self) -> None:
        job = _make_job()
        failure = JobFailure(FailureReason.CANCELLED)
        state.mark_failed(job, failure, 1.0)
        assert not state.mark_processing(job, 2.0)
        assert not state.mark_failed(job, JobFailure(FailureReason.TIMEOUT), 2.0)
        assert job.error == failure

    def test_dropped_signal_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        job = _make_job()
        state.mark_failed(job, JobFailure(FailureReason.CANCELLED), 1.0)
        with caplog.at_level("WARNING", logger="hookclip.jobs.state"):
            state.mark_processing(job, 2.0)
        assert "Dropped processing signal" in caplog.text

    def test_can_transition_table(self) -> None:
        assert state.can_transition(JobStatus.QUEUED, JobStatus.PROCESSING)
        assert state.can_transition(JobStatus.PROCESSING, JobStatus.FAILED)
        assert not state.can_transition(JobStatus.PROCESSING, JobStatus.QUEUED)
        assert not state.can_transition(JobStatus.DONE, JobStatus.FAILED)


class TestDeadlines:
    def test_queued_deadline(self) -> None:
        job = _make_job(entered_at=100.0)
        assert state.deadline_for(job, 10.0, 50.0) == 110.0
        assert not state.is_overdue(job, 109.9, 10.0, 50.0)
        assert state.is_overdue(job, 110.0, 10.0, 50.0)

    def test_processing_deadline_restarts_on_entry(self) -> None:
        job = _make_job(entered_at=100.0)
        state.mark_processing(job, 105.0)
        assert state.deadline_for(job, 10.0, 50.0) == 155.0

    def test_terminal_has_no_deadline(self) -> None:
        job = _make_job()
        state.mark_failed(job, JobFailure(FailureReason.CANCELLED), 1.0)
        assert state.deadline_for(job, 10.0, 50.0) is None
        assert not state.is_overdue(job, 1e9, 10.0, 50.0)
