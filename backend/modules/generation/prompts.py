"""Prompt text for the mentor's generation calls."""

SYSTEM_INSTRUCTION = """\
You are a direct, pragmatic mentor. Help the user turn goals into concrete \
plans and next actions. Ask clarifying questions when the goal is vague, \
challenge weak assumptions, and keep answers focused on execution rather \
than theory. Prefer short paragraphs and numbered steps."""


MENTAL_MAP_TEMPLATE = """\
Create a STRUCTURED MENTAL MAP as an ASCII TEXT TREE about: "{topic}".

VISUAL RULES:
- Use ASCII connectors: ├──, └──, │.
- Do not use Markdown code blocks (```), plain text only.
- Be hierarchical, direct and focused on EXECUTION.
- Limit the tree to 3 levels of depth.
- "Hacker/Terminal" style.

Example of the expected format:

CENTRAL GOAL
│
├── 01. FUNDAMENTALS
│   ├── Critical Action A
│   └── Critical Action B
│
├── 02. STRATEGY
│   ├── Tactical Step 1
│   └── Tactical Step 2
│
└── 03. EXECUTION
    └── The Big Leap
"""


def build_mental_map_prompt(topic: str) -> str:
    """Fill the mental map template with a topic."""
    return MENTAL_MAP_TEMPLATE.format(topic=topic.strip())
