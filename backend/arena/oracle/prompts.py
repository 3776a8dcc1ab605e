"""Prompts for move generation."""

MOVE_SYSTEM_PROMPT = """You are an AI player in a Rock Paper Scissors match.
Reply with exactly one lowercase word: rock, paper, or scissors.
Do not explain your choice."""


def build_move_prompt(player: str) -> str:
    """User prompt asking `player` for a single move."""
    return (
        f"You are {player} playing Rock Paper Scissors. "
        "Respond with ONLY ONE of these words: rock, paper, or scissors."
    )
