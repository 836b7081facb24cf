import pytest
from pydantic import ValidationError

from imgswap.models import ClassifyRequest, UrlDecision


def test_classify_request_requires_input() -> None:
    ClassifyRequest(urls=["https://example.com/a.jpg"])
    ClassifyRequest(html="<img src='https://example.com/a.jpg'>")
    with pytest.raises(ValidationError):
        ClassifyRequest()
    with pytest.raises(ValidationError):
        ClassifyRequest(urls=[], html="")


def test_classify_request_parses_context() -> None:
    req = ClassifyRequest(**{"urls": ["x"], "context": {"is_admin": True, "query": {"preview": "true"}}})
    assert req.context is not None
    assert req.context.is_admin is True
    assert req.context.query == {"preview": "true"}


def test_url_decision_keeps_absent_dimensions_false() -> None:
    decision = UrlDecision(url="u", eligible=True, normalized_url="u")
    assert decision.width is False
    assert decision.height is False
    dumped = UrlDecision(url="u", eligible=True, normalized_url="u", width=300, height=200).model_dump()
    assert (dumped["width"], dumped["height"]) == (300, 200)
