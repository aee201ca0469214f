"""
Assistant system prompt.

The prompt always opens with the literal current date and time so that
relative references ("this month", "next week") resolve correctly. When
retrieved ground truth is supplied it replaces the persona block.

Dependencies: langchain_core.prompts
System role: Prompt template for the concierge assistant
"""

import json
from datetime import datetime
from typing import Any

from langchain_core.prompts import PromptTemplate

DATE_BLOCK = PromptTemplate.from_template(
    """## Current date and time
Today is {weekday}, {date} ({year}-{month}). The current time is {time}.
- "This month" means {year}-{month}; "this year" means {year}.
- Resolve "today", "tomorrow", "this week" and "next week" from the date above.
- Events that ended before {date} are in the past; never describe them as upcoming."""
)

PERSONA_BLOCK = PromptTemplate.from_template(
    """You are the friendly AI assistant of {site_name}.

Site information: {site_info}"""
)

GROUNDED_BLOCK = PromptTemplate.from_template(
    """You are the AI assistant of {site_name}. Answer using the reference information below.

## Reference information
{ground_truth}

If a passage is marked as an exact answer, repeat it verbatim."""
)

RULES_BLOCK = """## Rules
- Use the provided information exactly; never guess or invent details.
- Quote prices, dates, times and quantities exactly as they appear in the context.
- If the context does not contain the answer, say so and suggest contacting the shop.
- When instructor information is available, introduce their name, specialties and region.
- Keep answers concise and easy to read."""


def build_system_prompt(
    site_name: str,
    now: datetime,
    ground_truth: str | None = None,
    site_info: dict[str, Any] | None = None,
) -> str:
    """
    Build the system prompt for one turn.

    Args:
        site_name: Name used in the persona
        now: Local time to anchor relative dates
        ground_truth: Retrieved context; replaces the persona when present
        site_info: Static site facts used when no ground truth is available

    Returns:
        str: Deterministic prompt for the given inputs
    """
    date_block = DATE_BLOCK.format(
        weekday=now.strftime("%A"),
        date=now.strftime("%Y-%m-%d"),
        year=now.year,
        month=f"{now.month:02d}",
        time=now.strftime("%H:%M"),
    )

    if ground_truth:
        context_block = GROUNDED_BLOCK.format(site_name=site_name, ground_truth=ground_truth)
    else:
        context_block = PERSONA_BLOCK.format(
            site_name=site_name,
            site_info=json.dumps(site_info or {}, ensure_ascii=False, indent=2, sort_keys=True),
        )

    return "\n\n".join([date_block, context_block, RULES_BLOCK])
