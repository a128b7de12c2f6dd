import pytest

from scraper.extraction.orchestrator import extract_pot, worst_case_wait_ms
from scraper.interfaces.models import NOT_FOUND
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG, SCRAPER_SETTINGS
from tests.conftest import FakeSession

HARD_SEL = 'h6.font-bold:has-text(" kr")'
LABEL = r"aktuell\s+vinstsumma"


@pytest.mark.asyncio
async def test_emphasis_marker_scenario(config, target):
    session = FakeSession(
        elements={".animate-pulse": [
            {"text": "Total vinstpott: 123 456 kr", "tagName": "h6"},
        ]},
        body="Total vinstpott: 123 456 kr\nAvgift: +5 kr",
    )

    outcome = await extract_pot(session, target, config)

    assert outcome.found
    assert outcome.strategy == "pulse"
    assert outcome.parsed.amount == 123456
    assert "123 456 kr" in outcome.parsed.text


@pytest.mark.asyncio
async def test_hard_override_short_circuits(config, target):
    config = config.with_overrides(hard_selectors={target.url: HARD_SEL})
    session = FakeSession(
        texts={HARD_SEL: "55 000 kr"},
        elements={".animate-pulse": [{"text": "999 999 kr", "tagName": "h6"}]},
        body="999 999 kr",
    )

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == f"hard:{HARD_SEL}"
    assert outcome.parsed.amount == 55000
    assert session.called("query_all_matching") == []
    assert session.called("evaluate") == []


@pytest.mark.asyncio
async def test_nothing_found_is_not_found(config, target):
    session = FakeSession()

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == NOT_FOUND
    assert outcome.parsed is None
    assert not outcome.found
    # settle delay, then one retry pass
    assert session.slept == [config.settle_ms, 1500]


@pytest.mark.asyncio
async def test_label_beats_larger_body_amount(config, target):
    session = FakeSession(
        labels=[{"phrase": LABEL, "texts": ["Avgift: +5 kr", "75 000 kr"]}],
        body="Säsongens total 900 000 kr\n75 000 kr",
    )

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == "near-label:aktuell vinstsumma"
    assert outcome.parsed.amount == 75000


@pytest.mark.asyncio
async def test_generic_sweep_rejects_sub_floor_amount(config, target):
    session = FakeSession(
        texts={'h6:has-text(" kr")': "Vinstpott 20 kr"},
        body="Vinstpott 20 kr",
    )

    outcome = await extract_pot(session, target, config)

    # generic is strict, body-max may fall back to small pots
    assert outcome.strategy == "body-max"
    assert outcome.parsed.amount == 20


@pytest.mark.asyncio
async def test_generic_sweep_result(config, target):
    session = FakeSession(
        texts={'.font-bold.text-2xl:has-text(" kr")': "Vinst 12 300 kr"},
        body="Vinst 12 300 kr\n50 000 kr",
    )

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == 'generic:.font-bold.text-2xl:has-text(" kr")'
    assert outcome.parsed.amount == 12300


@pytest.mark.asyncio
async def test_retry_pass_finds_late_label(config, target):
    session = FakeSession(labels=[None, {"phrase": LABEL, "texts": ["42 000 kr"]}])

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == "retry-near-label:aktuell vinstsumma"
    assert outcome.parsed.amount == 42000
    assert len(session.called("query_all_matching")) == 2


@pytest.mark.asyncio
async def test_readiness_gate_runs_once_and_timeout_is_not_fatal(config, target):
    session = FakeSession(ready=False, labels=[None, {"phrase": LABEL, "texts": ["42 000 kr"]}])

    outcome = await extract_pot(session, target, config)

    assert outcome.parsed.amount == 42000
    assert len(session.called("wait_for_condition")) == 1


@pytest.mark.asyncio
async def test_retry_schedule_from_config(config, target):
    session = FakeSession()
    outcome = await extract_pot(session, target, config.with_overrides(retry_delays_ms=(100, 200)))

    assert outcome.strategy == NOT_FOUND
    assert session.slept == [config.settle_ms, 100, 200]
    assert len(session.called("query_all_matching")) == 3

    session = FakeSession()
    await extract_pot(session, target, config.with_overrides(retry_delays_ms=()))
    assert session.slept == [config.settle_ms]
    assert len(session.called("query_all_matching")) == 1


@pytest.mark.asyncio
async def test_strategy_misses_are_logged_as_debug(config, target):
    lines = []
    await extract_pot(FakeSession(), target, config, logger=lines.append)

    assert any("hard-override -> no match" in l for l in lines)
    assert lines[-1].endswith("not-found")


def test_worst_case_wait_is_bounded():
    assert worst_case_wait_ms(DEFAULT_EXTRACTION_CONFIG) == 60000 + 1800 + 1800 + 8000 + 8000 + 1500
    fast = DEFAULT_EXTRACTION_CONFIG.with_overrides(retry_delays_ms=(1000, 2000))
    assert worst_case_wait_ms(fast) == worst_case_wait_ms() - 1500 + 3000


@pytest.mark.asyncio
@pytest.mark.parametrize("heading,container,expected", [
    ("Köp lotter nu - 100 kr", "Total vinstpott: 123 456 kr", 123456),
    ("Vinst 10 kr", "Total vinstpott: 75 000 kr", 75000),
])
async def test_pulse_container_used_when_heading_is_no_pot(config, target, heading, container, expected):
    session = FakeSession(elements={".animate-pulse": [
        {"text": heading, "tagName": "h6"},
        {"text": container, "tagName": "div"},
    ]})

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == "pulse"
    assert outcome.parsed.amount == expected


@pytest.mark.asyncio
async def test_pulse_heading_wins_over_larger_container(config, target):
    session = FakeSession(elements={".animate-pulse": [
        {"text": "Vinst 500 kr", "tagName": "div"},
        {"text": "Total vinstpott: 300 kr", "tagName": "h6"},
    ]})

    outcome = await extract_pot(session, target, config)

    assert outcome.parsed.amount == 300


@pytest.mark.asyncio
async def test_pulse_sub_floor_amount_when_nothing_clears_floor(config, target):
    session = FakeSession(elements={".animate-pulse": [
        {"text": "Vinst 10 kr", "tagName": "h6"},
        {"text": "Vinst 20 kr", "tagName": "div"},
    ]})

    outcome = await extract_pot(session, target, config)

    assert outcome.strategy == "pulse"
    assert outcome.parsed.amount == 10


def test_navigation_timeout_comes_from_scraper_settings():
    assert DEFAULT_EXTRACTION_CONFIG.navigation_timeout_ms == SCRAPER_SETTINGS["TIMEOUT"]
