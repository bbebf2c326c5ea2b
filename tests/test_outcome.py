# Area: Engine Tests
"""Tests for the Outcome Evaluator."""

from dataclasses import replace

from mandate_engine._engine.enums import Difficulty, EndReason
from mandate_engine._engine.indicators import Indicators
from mandate_engine._engine.outcome import OpportunistStanding, evaluate

STABLE = Indicators(
    economy=5, education=5, wellbeing=5, popular_support=5, hunger=2, military_religion=5,
)


class TestCollapse:
    """Collapse is checked first."""

    def test_hunger_at_max_collapses(self):
        """Test that hunger at 10 collapses the nation."""
        end = evaluate(replace(STABLE, hunger=10), 3)
        assert end.reason is EndReason.COLLAPSE

    def test_zero_indicator_collapses(self):
        """Test that any other indicator at zero collapses the nation."""
        end = evaluate(replace(STABLE, military_religion=0), 3)
        assert end.reason is EndReason.COLLAPSE

    def test_zero_hunger_is_fine(self):
        """Test that zero hunger does not collapse."""
        assert evaluate(replace(STABLE, hunger=0), 3) is None

    def test_collapse_beats_board_victory(self):
        """Test that collapse takes precedence over board victory."""
        end = evaluate(replace(STABLE, hunger=10), 25)
        assert end.reason is EndReason.COLLAPSE

    def test_collapse_beats_opportunist(self):
        """Test that collapse takes precedence over the Opportunist."""
        end = evaluate(
            replace(STABLE, education=0),
            3,
            opportunist=OpportunistStanding("Ana", 500),
        )
        assert end.reason is EndReason.COLLAPSE


class TestBoardVictory:
    """Reaching the finish line."""

    def test_finish_line_victory(self):
        """Test victory at the finish line."""
        end = evaluate(STABLE, 25, Difficulty.HARD)
        assert end.reason is EndReason.VICTORY
        assert end.winner is None

    def test_high_hunger_ends_mandate(self):
        """Test that hunger 9 at the finish line ends the mandate."""
        end = evaluate(replace(STABLE, hunger=9), 30)
        assert end.reason is EndReason.MANDATE_ENDED
        assert "inequality" in end.message

    def test_below_finish_line_continues(self):
        """Test that the game continues below the finish line."""
        assert evaluate(STABLE, 24) is None

    def test_board_victory_beats_opportunist(self):
        """Test that board victory takes precedence over the Opportunist."""
        end = evaluate(
            replace(STABLE, education=1),
            25,
            opportunist=OpportunistStanding("Ana", 150),
        )
        assert end.reason is EndReason.VICTORY


class TestOpportunistVictory:
    """Hidden win condition."""

    def test_capital_and_low_education_wins(self):
        """Test the Opportunist win with capital and low education."""
        end = evaluate(
            replace(STABLE, education=2),
            0,
            opportunist=OpportunistStanding("Bruno", 105),
        )
        assert end.reason is EndReason.OPPORTUNIST
        assert end.winner == "Bruno"
        assert "Bruno" in end.message

    def test_education_three_blocks_win(self):
        """Test that education 3 blocks the Opportunist win."""
        end = evaluate(
            replace(STABLE, education=3),
            0,
            opportunist=OpportunistStanding("Bruno", 105),
        )
        assert end is None

    def test_capital_below_goal_continues(self):
        """Test that capital below the goal continues."""
        end = evaluate(
            replace(STABLE, education=1),
            0,
            opportunist=OpportunistStanding("Bruno", 99),
        )
        assert end is None


class TestTimeout:
    """Timed-out collapse after the round limit."""

    def test_exceeding_limit_ends_game(self):
        """Test that exceeding the round limit times out."""
        end = evaluate(STABLE, 10, turn_number=16, max_turns=15)
        assert end.reason is EndReason.TIMEOUT

    def test_at_limit_continues(self):
        """Test that reaching the round limit continues."""
        assert evaluate(STABLE, 10, turn_number=15, max_turns=15) is None

    def test_disabled_limit(self):
        """Test that a disabled limit never times out."""
        assert evaluate(STABLE, 10, turn_number=999, max_turns=None) is None
        assert evaluate(STABLE, 10, turn_number=999, max_turns=0) is None

    def test_victory_beats_timeout(self):
        """Test that victory takes precedence over timeout."""
        end = evaluate(STABLE, 25, turn_number=16, max_turns=15)
        assert end.reason is EndReason.VICTORY
