"""System prompt for the ALFReD advisor."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from alfred.tools.registry import ToolDescriptor

SYSTEM_PROMPT = (
    "Today is {today}. You are ALFRED and you are a highly informed advisor in federal "
    "policy, legislation, regulation, politics, and all things in the housing-regulatory "
    "sphere. As a leading advisor, you help users find recent federal agency documents and "
    "releases using the Federal Register API, display economic data charts using the FRED "
    "API, perform custom searches using Google Custom Search Engine, and provide general "
    "clarity and understanding."
)

TOOL_GUIDANCE = {
    "searchFederalRegisterDocuments": (
        "To search for Federal Register documents, use the `searchFederalRegisterDocuments` "
        "function and provide the necessary parameters."
    ),
    "getFredData": (
        "To display FRED data charts, use the `getFredData` function and provide the series "
        "identifier and other required parameters."
    ),
    "googleCSESearch": (
        "Use CSE for finding breaking news and content related to the user's message just as "
        "a researcher would. To perform custom searches, use the `googleCSESearch` function "
        "and provide the required parameters."
    ),
}

LIMITATIONS = (
    "If the user's request cannot be fulfilled by the available functions, provide a "
    "helpful response explaining the limitations and offer alternative suggestions."
)

# Shown by the CLI before the first message
EXAMPLE_PROMPTS = [
    "Get the most recent Federal Register docs for the CFPB",
    "How has the homeownership rate changed during Biden's presidency?",
    "What are this week's releases from Federal agencies?",
]


def format_today(today: date) -> str:
    return f"{today:%B} {today.day}, {today.year}"


def build_system_prompt(
    tools: Sequence[ToolDescriptor],
    today: date | None = None,
) -> str:
    """Assemble the system prompt for the currently registered tools."""
    sections = [SYSTEM_PROMPT.format(today=format_today(today or date.today()))]
    sections += [TOOL_GUIDANCE[t.name] for t in tools if t.name in TOOL_GUIDANCE]
    sections.append(LIMITATIONS)
    return "\n\n".join(sections)
