"""
Test Proctoring Monitor Module

Tests event recording, suspiciousness, listings and summaries of the
proctoring log.

Dependencies:
- pytest: For testing framework
- interview_core.services.proctoring_monitor: The module being tested
"""

import uuid
import pytest
from interview_core.constants.proctoring_events import SESSION_START_EVENT, SuspiciousEventType, is_suspicious
from interview_core.errors.exceptions import Forbidden, InvalidInput, SessionNotFound, Unauthorized
from interview_core.models.interview_models import InterviewSession, ProctoringEvent, SessionStatus, Severity
from interview_core.schemas.proctoring_schemas import ProctoringPermissions
from interview_core.services.proctoring_monitor import parse_severity, summarize_events
from conftest import CANDIDATE, OTHER_CANDIDATE


@pytest.fixture
def interview_session(session_factory, job):
    """Session created directly in the database, no state machine involved."""
    with session_factory() as db:
        interview_session = InterviewSession(candidate_id=CANDIDATE, job_id=job.id, status=SessionStatus.IN_PROGRESS)
        db.add(interview_session)
        db.commit()
        return interview_session


class TestSuspiciousness:
    """Test the suspicious event classification."""

    @pytest.mark.parametrize("event_type", [event.value for event in SuspiciousEventType])
    def test_closed_set_is_suspicious(self, event_type):
        assert is_suspicious(event_type)

    @pytest.mark.parametrize("event_type", ["session_start", "heartbeat", "TAB_SWITCH", ""])
    def test_other_types_are_not(self, event_type):
        assert not is_suspicious(event_type)

    def test_tab_switch_with_low_severity_is_still_suspicious(self, proctoring_monitor, interview_session):
        result = proctoring_monitor.record(interview_session.id, "tab_switch", CANDIDATE, severity="low")

        assert result.logged is True
        assert result.suspicious is True
        assert result.message == "Suspicious activity detected and logged"

    def test_unknown_type_with_high_severity_is_not_suspicious(self, proctoring_monitor, interview_session):
        result = proctoring_monitor.record(interview_session.id, "heartbeat", CANDIDATE, severity="high")

        assert result.suspicious is False
        assert result.message == "Event logged successfully"


class TestRecord:
    """Test appending events to the log."""

    def test_payload_is_enriched(self, proctoring_monitor, session_factory, interview_session):
        proctoring_monitor.record(
            interview_session.id, "window_blur", CANDIDATE, payload={"duration": 3}, user_agent="pytest-agent"
        )

        with session_factory() as db:
            event = db.query(ProctoringEvent).one()
            assert event.data["duration"] == 3
            assert event.data["user_agent"] == "pytest-agent"
            assert "recorded_at" in event.data
            assert event.severity == Severity.LOW

    def test_missing_user_agent_recorded_as_unknown(self, proctoring_monitor, session_factory, interview_session):
        proctoring_monitor.record(interview_session.id, "heartbeat", CANDIDATE)
        with session_factory() as db:
            assert db.query(ProctoringEvent).one().data["user_agent"] == "unknown"

    def test_unknown_severity_rejected(self, proctoring_monitor, interview_session):
        with pytest.raises(InvalidInput):
            proctoring_monitor.record(interview_session.id, "tab_switch", CANDIDATE, severity="critical")

    def test_blank_event_type_rejected(self, proctoring_monitor, interview_session):
        with pytest.raises(InvalidInput):
            proctoring_monitor.record(interview_session.id, "  ", CANDIDATE)

    def test_non_object_payload_rejected(self, proctoring_monitor, interview_session):
        with pytest.raises(InvalidInput):
            proctoring_monitor.record(interview_session.id, "tab_switch", CANDIDATE, payload=["not", "a", "dict"])

    def test_unknown_session(self, proctoring_monitor):
        with pytest.raises(SessionNotFound):
            proctoring_monitor.record(uuid.uuid4(), "tab_switch", CANDIDATE)

    def test_other_candidates_session(self, proctoring_monitor, session_factory, interview_session):
        with pytest.raises(Forbidden):
            proctoring_monitor.record(interview_session.id, "tab_switch", OTHER_CANDIDATE)
        with session_factory() as db:
            assert db.query(ProctoringEvent).count() == 0

    def test_missing_requester(self, proctoring_monitor, interview_session):
        with pytest.raises(Unauthorized):
            proctoring_monitor.record(interview_session.id, "tab_switch", None)


class TestStart:
    """Test starting proctoring."""

    def test_start_logs_session_start(self, proctoring_monitor, interview_session):
        response = proctoring_monitor.start(
            interview_session.id,
            CANDIDATE,
            device_info={"os": "linux"},
            permissions=ProctoringPermissions(camera=True, microphone=True, screen=False),
        )

        assert response.config.video_enabled is True
        assert response.config.audio_enabled is True
        assert response.config.screen_recording is False

        logs = proctoring_monitor.list_events(interview_session.id, CANDIDATE).logs
        assert [log.event_type for log in logs] == [SESSION_START_EVENT]
        assert logs[0].data["device_info"] == {"os": "linux"}


class TestSummaries:
    """Test listings and summaries."""

    def test_events_listed_most_recent_first(self, proctoring_monitor, interview_session):
        for event_type in ["heartbeat", "tab_switch", "window_blur"]:
            proctoring_monitor.record(interview_session.id, event_type, CANDIDATE)

        logs = proctoring_monitor.list_events(interview_session.id, CANDIDATE).logs

        assert [log.event_type for log in logs] == ["window_blur", "tab_switch", "heartbeat"]

    def test_summary_counts(self, proctoring_monitor, interview_session):
        proctoring_monitor.record(interview_session.id, "tab_switch", CANDIDATE, severity="high")
        proctoring_monitor.record(interview_session.id, "tab_switch", CANDIDATE, severity="medium")
        proctoring_monitor.record(interview_session.id, "multiple_faces", CANDIDATE, severity="high")

        summary = proctoring_monitor.summarize(interview_session.id, CANDIDATE)

        assert summary.total == 3
        assert (summary.high, summary.medium, summary.low) == (2, 1, 0)
        assert summary.event_types == {"tab_switch": 2, "multiple_faces": 1}

    def test_counts_never_decrease(self, proctoring_monitor, interview_session):
        previous = proctoring_monitor.summarize(interview_session.id, CANDIDATE)
        for severity in ["low", "high", "medium", "high"]:
            proctoring_monitor.record(interview_session.id, "fullscreen_exit", CANDIDATE, severity=severity)
            current = proctoring_monitor.summarize(interview_session.id, CANDIDATE)
            assert current.total == previous.total + 1
            assert current.high >= previous.high
            assert current.medium >= previous.medium
            assert current.low >= previous.low
            previous = current

    def test_listing_summary_matches_logs(self, proctoring_monitor, interview_session):
        proctoring_monitor.record(interview_session.id, "copy_paste_detected", CANDIDATE, severity="medium")
        proctoring_monitor.record(interview_session.id, "heartbeat", CANDIDATE)

        listing = proctoring_monitor.list_events(interview_session.id, CANDIDATE)

        assert listing.summary.total == len(listing.logs)

    def test_empty_log(self, proctoring_monitor, interview_session):
        summary = proctoring_monitor.summarize(interview_session.id, CANDIDATE)
        assert summary.total == 0
        assert summary.event_types == {}

    def test_summarize_events_is_a_pure_fold(self):
        events = [
            ProctoringEvent(event_type="tab_switch", severity=Severity.HIGH),
            ProctoringEvent(event_type="tab_switch", severity=Severity.LOW),
        ]
        summary = summarize_events(events)
        assert summary.total == 2
        assert summary.high == 1 and summary.low == 1
        assert summary.event_types == {"tab_switch": 2}

    def test_parse_severity_defaults_to_low(self):
        assert parse_severity(None) == Severity.LOW
        assert parse_severity("medium") == Severity.MEDIUM
