from enum import IntEnum

class TradeOutcome(IntEnum):
    """Outcome bucket of a closed trade, ordered from best to worst."""
    WINNER = 1
    BREAKEVEN = 2
    LOSER = 3

    def get_color(self) -> str:
        """
        Returns the Pine Script color token used to draw this outcome.

        Returns:
            A string naming a `color.*` constant.
        """
        if self == TradeOutcome.WINNER:
            return "green"
        elif self == TradeOutcome.LOSER:
            return "red"
        else:
            return "blue"

    def get_label(self) -> str:
        if self == TradeOutcome.WINNER:
            return "Winners"
        elif self == TradeOutcome.LOSER:
            return "Losers"
        else:
            return "Break Even"
