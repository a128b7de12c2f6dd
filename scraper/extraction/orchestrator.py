# scraper/extraction/orchestrator.py

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from scraper.extraction import strategies
from scraper.extraction.selector import select_best
from scraper.interfaces.models import ExtractionState, RawFragment, StrategyOutcome, Target
from scraper.sources.scraper_config import DEFAULT_EXTRACTION_CONFIG, ExtractionConfig
from scraper.utils.logging_utils import Logger, debug

Collector = Callable[..., Awaitable[List[RawFragment]]]

# Body text mentions the currency or one of the label phrases.
READINESS_JS = """
([markerSource, phrases, hostSelector]) => {
    const marker = new RegExp(markerSource, 'i');
    if (marker.test(document.body ? document.body.innerText : '')) return true;
    const res = phrases.map(p => new RegExp(p, 'i'));
    return Array.from(document.querySelectorAll(hostSelector))
        .some(el => res.some(re => re.test(el.textContent || '')));
}
"""


@dataclass(frozen=True)
class Step:
    state: ExtractionState
    collect: Collector
    # strict: sub-floor amounts are never accepted
    strict: bool = False
    # splits fragments into groups scored in order, e.g. headings before containers
    tiers: Optional[Callable[[List[RawFragment]], List[List[RawFragment]]]] = None


FIRST_PASS = (
    Step(ExtractionState.HARD_OVERRIDE, strategies.collect_hard_override),
    Step(ExtractionState.PULSE, strategies.collect_pulse, tiers=strategies.pulse_tiers),
    Step(ExtractionState.LABEL, strategies.collect_near_label),
    Step(ExtractionState.GENERIC, strategies.collect_generic, strict=True),
    Step(ExtractionState.BODY_MAX, strategies.collect_body_max),
)

RETRY_PASS = (
    Step(ExtractionState.PULSE, strategies.collect_pulse, tiers=strategies.pulse_tiers),
    Step(ExtractionState.LABEL, strategies.collect_near_label),
)


def strategy_tag(fragments: List[RawFragment], retry: bool = False) -> str:
    """Tags look like hard:<selector>, near-label:<phrase>, pulse or retry-pulse."""
    first = fragments[0]
    tag = first.strategy
    if first.strategy == strategies.NEAR_LABEL and first.origin:
        tag = f"{tag}:{strategies.label_text(first.origin)}"
    elif first.strategy in (strategies.HARD, strategies.GENERIC) and first.origin:
        tag = f"{tag}:{first.origin}"
    return f"retry-{tag}" if retry else tag


def worst_case_wait_ms(config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG) -> int:
    """
    Upper bound on the fixed delays and wait timeouts spent on one page,
    navigation included. DOM query time itself is not counted.
    """
    return (
        config.navigation_timeout_ms
        + config.jitter_ms[1]
        + config.settle_ms
        + config.hard_selector_timeout_ms
        + config.readiness_timeout_ms
        + sum(config.retry_delays_ms)
    )


async def wait_until_ready(session, config: ExtractionConfig) -> bool:
    return await session.wait_for_condition(
        READINESS_JS,
        config.readiness_timeout_ms,
        [
            rf"\b{config.currency_marker}\b",
            list(config.label_phrases),
            config.label_host_selector,
        ],
    )


async def attempt(
    session,
    target: Target,
    config: ExtractionConfig,
    step: Step,
    retry: bool = False,
) -> Optional[StrategyOutcome]:
    """Run one collector and score its fragments. None when nothing is accepted."""
    fragments = await step.collect(session, config, target)
    if not fragments:
        return None

    tiers = step.tiers(fragments) if step.tiers else [fragments]
    # a pot above the floor in any tier beats a sub-floor amount in an earlier one
    floors = (False,) if step.strict else (False, True)
    for allow_below_floor in floors:
        for tier in tiers:
            best = select_best(tier, config, allow_below_floor=allow_below_floor)
            if best is not None:
                return StrategyOutcome(strategy=strategy_tag(tier, retry), parsed=best)
    return None


async def extract_pot(
    session,
    target: Target,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
    logger: Optional[Logger] = None,
) -> StrategyOutcome:
    """
    Walk the strategies in priority order and return the first accepted
    amount. Later strategies never override an earlier result.

    After the first pass, each entry of `config.retry_delays_ms` buys one
    more round of the dynamic strategies (pulse, label). Running out of
    strategies is not an error: the outcome is "not-found".
    """
    # Seiten laden die Summe per JS nach, kurz warten
    await session.sleep(config.settle_ms)

    state = ExtractionState.INIT
    for step in FIRST_PASS:
        state = step.state
        if state is ExtractionState.LABEL:
            if not await wait_until_ready(session, config):
                debug(logger, f"{target.name}: readiness wait timed out")

        outcome = await attempt(session, target, config, step)
        if outcome is not None:
            debug(logger, f"{target.name}: {state.value} -> {ExtractionState.FOUND.value}")
            return outcome
        debug(logger, f"{target.name}: {state.value} -> no match")

    for n, delay in enumerate(config.retry_delays_ms, start=1):
        state = ExtractionState.RETRY
        await session.sleep(delay)
        for step in RETRY_PASS:
            outcome = await attempt(session, target, config, step, retry=True)
            if outcome is not None:
                debug(logger, f"{target.name}: {state.value} #{n} {step.state.value} -> {ExtractionState.FOUND.value}")
                return outcome
        debug(logger, f"{target.name}: {state.value} #{n} -> no match")

    debug(logger, f"{target.name}: {ExtractionState.NOT_FOUND.value}")
    return StrategyOutcome.not_found()
