"""
Prompt templates for chunked summarization.
"""

# =========================
# Section summarization prompt
# =========================
SECTION_SUMMARY_PROMPT = """
Summarize the following text section concisely:

Text (part {part_number} of {total_parts}):
{text}

Key points only, be brief.
"""


# =========================
# Final combination prompt
# =========================
FINAL_COMBINE_PROMPT = """
Combine these section summaries into one coherent summary:

{summaries}

Provide a clear, concise final summary.
"""

SECTION_SEPARATOR = "\n\n"


def get_section_summary_prompt(text: str, ordinal: int, total: int) -> str:
    """Generate prompt for one section. ordinal is zero-based."""
    return SECTION_SUMMARY_PROMPT.format(
        part_number=ordinal + 1,
        total_parts=total,
        text=text
    )


def get_final_combine_prompt(joined_summaries: str) -> str:
    """Generate prompt for merging section summaries already joined in order."""
    return FINAL_COMBINE_PROMPT.format(summaries=joined_summaries)
