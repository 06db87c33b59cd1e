"""Prompt construction for section generation."""

from __future__ import annotations

import json
from typing import Dict, List

from .schema import SentenceType

__all__ = [
    "STYLE_GUIDELINES",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_prompt",
    "schema_example",
]

SYSTEM_PROMPT = (
    "You are an expert documentation writer for Elastic integrations. "
    "Follow the user's instructions exactly and answer with JSON only."
)

STYLE_GUIDELINES = """\
Overview: The overview section explains what the integration is, defines the
third-party product that is providing data, establishes its relationship to
the larger ecosystem of Elastic products, and helps the reader understand how
it can be used to solve a tangible problem. The overview should answer the
following questions:
* What is the integration?
* What is the third-party product that is providing data?
* What can you do with it?
* General description
* Basic example

Setup: This section should include only setup instructions on the vendor
side. For example, for the Cisco ASA integration, users need to configure
their Cisco device following the steps found in the Cisco documentation.
When possible, use links to point to third-party documentation for
configuring non-Elastic products since workflows may change without notice.
"""


def schema_example() -> str:
    """Return the JSON example embedded in every prompt."""

    example = {
        "overview": [
            {"order": 1, "content": "Section heading", "type": "bold"},
            {"order": 2, "content": "Descriptive text.", "type": "paragraph"},
        ],
        "setup": [
            {"order": 1, "content": "First step.", "type": "list_item"},
            {"order": 2, "content": "command --flag", "type": "code_block"},
        ],
    }
    return json.dumps(example, indent=2)


def build_prompt(package_name: str) -> str:
    """Build the instruction prompt for ``package_name``."""

    types = ", ".join(
        member.value
        for member in SentenceType
        if member is not SentenceType.UNKNOWN
    )
    return "\n".join(
        [
            "You are creating documentation for a new Elastic integration "
            f"named '{package_name}'.",
            "Reference the vendor documentation and write 1) an overview and "
            "2) setup instructions for the README following the Elastic "
            "writing guidelines.",
            "",
            "Guidelines:",
            STYLE_GUIDELINES,
            "Response format:",
            "Return a single JSON object with the keys \"overview\" and "
            "\"setup\". Each key holds an array of sentences. Every sentence "
            "is an object with an integer \"order\" starting at 1, a string "
            "\"content\" holding plain text without markdown formatting, and "
            f"a string \"type\" that is one of: {types}.",
            "List sentences in ascending order. Do not wrap the JSON in "
            "markdown fences and do not add any text outside the JSON.",
            "",
            "Example:",
            schema_example(),
        ]
    )


def build_messages(prompt: str) -> List[Dict[str, str]]:
    """Wrap ``prompt`` into chat messages."""

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
