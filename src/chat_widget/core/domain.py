"""
Wire format of the chat endpoint and the transcript projection onto it.
"""

from typing import Iterable, List, Literal, TypedDict


class WirePart(TypedDict):
    text: str


class WireContent(TypedDict):
    role: Literal['user', 'model']
    parts: List[WirePart]


class ChatRequest(TypedDict):
    contents: List[WireContent]


class CandidateContent(TypedDict, total=False):
    parts: List[WirePart]


class Candidate(TypedDict, total=False):
    content: CandidateContent


class ErrorBody(TypedDict, total=False):
    message: str
    code: int
    status: str


class ChatResponse(TypedDict, total=False):
    candidates: List[Candidate]
    error: ErrorBody


def project_history(turns: Iterable) -> List[WireContent]:
    """
    Serialize turns in transcript order, hidden context turn included.

    Pending placeholders are skipped: they are what the request is answering.
    Only role and text go over the wire.
    """
    return [
        {'role': t.role, 'parts': [{'text': t.text}]}
        for t in turns
        if not t.is_pending
    ]


def build_request(turns: Iterable) -> ChatRequest:
    return {'contents': project_history(turns)}
