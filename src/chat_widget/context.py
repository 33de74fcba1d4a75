"""
Static context sent with every request as the hidden first turn.
"""
from pathlib import Path
from typing import Optional

COMPANY_INFO = """
Introduction:
You are the assistant embedded on our website. Answer visitors' questions
about the company, its products and how to get in touch. Keep answers short
and friendly, and say so when you do not know something.

Contact:
Visitors can reach the team through the contact form on the website.
"""


def load_context(path: Optional[str] = None) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8").strip()
    return COMPANY_INFO.strip()
