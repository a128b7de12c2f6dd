import pytest

from scraper.extraction.strategies import BODY_TEXT_JS, LABEL_SEARCH_JS
from scraper.interfaces.models import Target
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG


def _next(responses):
    # last response sticks
    if len(responses) > 1:
        return responses.pop(0)
    return responses[0] if responses else None


class FakeSession:
    """
    Scripted stand-in for PageSession.

    texts:    selector -> text returned by query_text (and found by wait_for_element)
    elements: selector -> [{"text", "tagName"}] returned by query_all_matching
    labels:   successive results of the label search
    body:     document.body.innerText
    """

    def __init__(self, texts=None, elements=None, labels=None, body="", ready=True,
                 navigate_error=None, evaluate_error=None):
        self.texts = dict(texts or {})
        self.elements = dict(elements or {})
        self.labels = list(labels or [])
        self.body = body
        self.ready = ready
        self.navigate_error = navigate_error
        self.evaluate_error = evaluate_error
        self.calls = []
        self.slept = []

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    async def navigate(self, url, timeout_ms):
        self.calls.append(("navigate", url))
        if self.navigate_error is not None:
            raise self.navigate_error

    async def wait_for_condition(self, js, timeout_ms, arg=None):
        self.calls.append(("wait_for_condition", arg))
        return self.ready

    async def wait_for_element(self, selector, timeout_ms):
        self.calls.append(("wait_for_element", selector))
        return selector in self.texts

    async def query_text(self, selector):
        self.calls.append(("query_text", selector))
        return self.texts.get(selector)

    async def query_all_matching(self, selector):
        self.calls.append(("query_all_matching", selector))
        return self.elements.get(selector, [])

    async def evaluate(self, js, arg=None):
        self.calls.append(("evaluate", arg))
        if self.evaluate_error is not None:
            raise self.evaluate_error
        if js == LABEL_SEARCH_JS:
            return _next(self.labels)
        if js == BODY_TEXT_JS:
            return self.body
        raise AssertionError(f"unexpected script: {js[:40]}")

    async def sleep(self, ms):
        self.slept.append(ms)


@pytest.fixture
def target():
    return Target("Testklubben", "https://clubs.example.se/test/")


@pytest.fixture
def config():
    return DEFAULT_EXTRACTION_CONFIG.with_overrides(jitter_ms=(0, 0))
