# scraper/extraction/strategies.py

"""
Candidate collectors.

Each strategy is a coroutine `(session, config, target) -> List[RawFragment]`
and knows nothing about the others; the orchestrator decides the order.
An empty list means "no match", never an error.
"""

import re
from typing import List, Optional

from scraper.extraction.amounts import amount_pattern, has_currency_marker, marker_pattern, normalize_text
from scraper.extraction.relevance import is_acceptable
from scraper.interfaces.models import RawFragment, Target
from scraper.sources.scraper_config import ExtractionConfig

HARD = "hard"
PULSE = "pulse"
NEAR_LABEL = "near-label"
GENERIC = "generic"
BODY_MAX = "body-max"

_HEADING = re.compile(r"^h[1-6]$", re.IGNORECASE)

# Innermost host element whose text matches a label phrase; then up to
# `maxHops` following siblings (and their descendants), else the label's
# parent subtree. Phrases are tried in order.
LABEL_SEARCH_JS = """
([phrases, hostSelector, markerSource, maxHops]) => {
    const getTxt = el => (el?.textContent || '').replace(/\\u00A0/g, ' ').trim();
    const marker = new RegExp(markerSource, 'i');
    const hosts = Array.from(document.querySelectorAll(hostSelector));

    for (const phrase of phrases) {
        const re = new RegExp(phrase, 'i');
        const matching = hosts.filter(el => re.test(getTxt(el)));
        const label = matching.find(el => !matching.some(o => o !== el && el.contains(o)));
        if (!label) continue;

        const texts = [];
        let n = label.nextElementSibling;
        for (let hops = 0; n && hops < maxHops; hops++, n = n.nextElementSibling) {
            const t = getTxt(n);
            if (marker.test(t)) texts.push(t);
            for (const kid of n.querySelectorAll('*')) {
                const k = getTxt(kid);
                if (marker.test(k)) texts.push(k);
            }
        }

        if (!texts.length) {
            const parent = label.parentElement || document.body;
            for (const el of parent.querySelectorAll('*')) {
                const t = getTxt(el);
                if (marker.test(t)) texts.push(t);
            }
        }

        if (texts.length) return { phrase, texts };
    }
    return null;
}
"""

BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"


async def collect_hard_override(session, config: ExtractionConfig, target: Target) -> List[RawFragment]:
    selector = config.hard_selector_for(target.url)
    if not selector:
        return []

    if not await session.wait_for_element(selector, config.hard_selector_timeout_ms):
        return []

    text = normalize_text(await session.query_text(selector))
    if not text:
        return []
    return [RawFragment(text=text, strategy=HARD, origin=selector)]


def is_heading(fragment: RawFragment) -> bool:
    return bool(fragment.tag_name and _HEADING.match(fragment.tag_name))


def pulse_tiers(fragments: List[RawFragment]) -> List[List[RawFragment]]:
    """Headings are scored first; containers only count when no heading yields a pot."""
    headings = [f for f in fragments if is_heading(f)]
    others = [f for f in fragments if not is_heading(f)]
    return [tier for tier in (headings, others) if tier]


async def collect_pulse(session, config: ExtractionConfig, target: Target) -> List[RawFragment]:
    """
    Elements carrying the "live total" emphasis class, headings first.
    Nothing is dropped here; see `pulse_tiers` for the ranking.
    """
    elements = await session.query_all_matching(config.pulse_selector)

    fragments: List[RawFragment] = []
    for el in elements or []:
        text = normalize_text(el.get("text"))
        if not has_currency_marker(text, config.currency_marker):
            continue
        tag = (el.get("tagName") or "").lower() or None
        fragments.append(RawFragment(text=text, strategy=PULSE, tag_name=tag, origin=config.pulse_selector))

    return sorted(fragments, key=lambda f: not is_heading(f))


async def collect_near_label(session, config: ExtractionConfig, target: Target) -> List[RawFragment]:
    found = await session.evaluate(
        LABEL_SEARCH_JS,
        [
            list(config.label_phrases),
            config.label_host_selector,
            marker_pattern(config.currency_marker).pattern,
            config.label_max_hops,
        ],
    )
    if not found or not found.get("texts"):
        return []

    phrase = found.get("phrase")
    return [
        RawFragment(text=normalize_text(t), strategy=NEAR_LABEL, origin=phrase)
        for t in found["texts"]
        if normalize_text(t)
    ]


async def collect_generic(session, config: ExtractionConfig, target: Target) -> List[RawFragment]:
    """First broad selector whose element text carries the currency marker."""
    for selector in config.generic_selectors:
        text = await session.query_text(selector)
        if text is None:
            continue
        text = normalize_text(text)
        if has_currency_marker(text, config.currency_marker):
            return [RawFragment(text=text, strategy=GENERIC, origin=selector)]
    return []


async def collect_body_max(session, config: ExtractionConfig, target: Target) -> List[RawFragment]:
    """
    Every "number + marker" on the page. Each one is checked against the
    relevance filter together with the text just before it on the same line
    ("Avgift: +5 kr"), never reaching back past the previous amount.
    The selector then keeps the largest.
    """
    body = await session.evaluate(BODY_TEXT_JS) or ""
    pattern = amount_pattern(config.currency_marker)

    fragments = []
    for line in body.splitlines():
        line = normalize_text(line)
        prev_end = 0
        for m in pattern.finditer(line):
            context = line[max(prev_end, m.start() - config.body_context_chars):m.end()]
            prev_end = m.end()
            if not is_acceptable(context, config.denylist):
                continue
            fragments.append(RawFragment(text=m.group(0).strip(), strategy=BODY_MAX, origin=context.strip()))
    return fragments


def label_text(phrase: Optional[str]) -> str:
    r"""Readable form of a label regex: 'total\s+vinstpott' -> 'total vinstpott'."""
    return re.sub(r"\\s[+*]?", " ", phrase or "").strip()
