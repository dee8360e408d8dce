"""Prompt construction: recent context + mode preamble, worded so the model never prints a fake transcript."""
from enum import Enum
from typing import Optional, Sequence, Union

from .shared_services.history import Turn


class Mode(str, Enum):
    """Assistant mode selected by the client. Unknown values fall back to GENERAL."""
    GENERAL = "general"
    TUTOR = "tutor"
    CODING = "coding"
    CONCISE = "concise"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Mode":
        """Exact, case-sensitive match; anything else (including None) is GENERAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.GENERAL


MODE_PREAMBLES: dict[Mode, str] = {
    Mode.GENERAL: "You are a friendly general purpose assistant.",
    Mode.TUTOR: "You are a patient tutor. Explain ideas clearly and simply.",
    Mode.CODING: "You are a helpful coding assistant. Provide short, correct examples.",
    Mode.CONCISE: (
        "You are extremely concise. Reply in one or two short sentences "
        "unless the user explicitly asks for detail."
    ),
}

RULES = (
    "Important rules:\n"
    "1. Answer only the user's latest message.\n"
    "2. Do not write a script or a transcript.\n"
    "3. Do not include lines that start with labels like User or Assistant.\n"
    "4. Keep your reply to at most 2–3 short sentences, unless the user explicitly asks for a "
    "detailed explanation, list, or multiple options.\n"
    "5. Just respond as yourself in a single and coherent answer.\n\n"
)

CONTEXT_HEADER = "Here is a summary of the recent conversation between you and the user:\n"
CONTEXT_FOOTER = "\nUse this context only if it clearly helps answer the latest question.\n\n"
CLOSING = "Give your best answer to this latest message."


def _context_block(previous: Sequence[Turn]) -> str:
    if not previous:
        return ""
    lines = []
    for turn in previous:
        if turn.role == "user":
            lines.append(f"- The user said: {turn.content}\n")
        elif turn.role == "assistant":
            lines.append(f"- You answered: {turn.content}\n")
    return CONTEXT_HEADER + "".join(lines) + CONTEXT_FOOTER


def build_prompt(window: Sequence[Turn], mode: Union[Mode, str, None] = None) -> str:
    """
    Build a single text prompt from the context window (oldest first) and mode.
    The last turn is the message being answered; if it is not a user turn the
    quoted latest message is empty.
    """
    preamble = MODE_PREAMBLES[Mode.parse(mode)]
    latest = window[-1] if window else None
    previous = window[:-1]
    latest_user = latest.content if latest is not None and latest.role == "user" else ""

    return (
        preamble + "\n"
        + RULES
        + _context_block(previous)
        + f'The user has now said: "{latest_user}"\n\n'
        + CLOSING
    )
