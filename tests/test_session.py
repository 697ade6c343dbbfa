import pytest

from session import NoTestAvailable, TypingSession, format_countdown


class TestTypingSession:
    @pytest.mark.parametrize("passage, minutes", [("", 1), ("   ", 1), (None, 1), ("text", 0), ("text", -2)])
    def test_rejects_missing_test(self, passage, minutes):
        with pytest.raises(NoTestAvailable):
            TypingSession(passage, minutes)

    def test_countdown_from_monotonic_clock(self, fake_clock):
        session = TypingSession("the quick brown fox", 1, clock=fake_clock)
        assert session.remaining_seconds() == 60
        session.start()
        fake_clock.advance(15.5)
        assert session.remaining_seconds() == 45
        assert not session.is_expired()
        fake_clock.advance(45)
        assert session.remaining_seconds() == 0
        assert session.is_expired()

    def test_submit_scores_elapsed_time(self, fake_clock):
        session = TypingSession("the quick brown fox", 2, clock=fake_clock)
        session.start()
        fake_clock.advance(30)
        score = session.submit("the quick brown fox")
        assert session.submitted
        assert score.elapsed_minutes == 0.5
        assert score.gross_wpm == 8.0
        assert score.errors == 0

    def test_clock_stops_at_submit(self, fake_clock):
        session = TypingSession("a b", 1, clock=fake_clock)
        session.start()
        fake_clock.advance(12)
        session.submit("a b")
        fake_clock.advance(100)
        assert session.elapsed_seconds() == 12

    def test_second_submit_returns_first_score(self, fake_clock):
        session = TypingSession("a b", 1, clock=fake_clock)
        session.start()
        first = session.submit("a b")
        fake_clock.advance(20)
        assert session.submit("something else") is first

    def test_immediate_submit_uses_minimum_time(self, fake_clock):
        session = TypingSession("a b", 1, clock=fake_clock)
        session.start()
        score = session.submit("a")
        assert score.elapsed_minutes == 0.01
        assert score.gross_wpm == 100.0

    def test_submit_before_start(self, fake_clock):
        session = TypingSession("a b", 1, clock=fake_clock)
        with pytest.raises(NoTestAvailable):
            session.submit("a b")


@pytest.mark.parametrize("seconds, expected", [(60, "Time: 01:00"), (125, "Time: 02:05"), (0, "Time: 00:00"), (-3, "Time: 00:00")])
def test_format_countdown(seconds, expected):
    assert format_countdown(seconds) == expected
