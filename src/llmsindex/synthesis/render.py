"""Plain-text rendering of index blocks.

Every block is a list of lines ending with a blank separator line, so the
estimated size of a document is the sum of its block lengths.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from llmsindex.customization.models import GuidanceSection
from llmsindex.models import Link, Section
from llmsindex.utils.text import comparable, normalize_whitespace

NAVIGATION_HEADING = "Topic Indices"
RELATED_HEADING = "Related Topics"
DEFAULT_GUIDANCE_HEADING = "Guidance"


def render_header(title: str) -> List[str]:
    return [f"# {title}", ""]


def render_description(description: str | None) -> List[str]:
    if not description or not description.strip():
        return []
    lines = normalize_whitespace(description.splitlines()).split("\n")
    return [f"> {line}" for line in lines] + [""]


def render_preamble(preamble: str | None) -> List[str]:
    if not preamble or not preamble.strip():
        return []
    return normalize_whitespace(preamble.splitlines()).split("\n") + [""]


def render_guidance(guidance: GuidanceSection | None) -> List[str]:
    if guidance is None or not (guidance.intro or guidance.items):
        return []
    lines = [f"## {guidance.title or DEFAULT_GUIDANCE_HEADING}", ""]
    if guidance.intro:
        lines += [guidance.intro.strip(), ""]
    if guidance.items:
        lines += [f"- {item}" for item in guidance.items] + [""]
    return lines


def same_heading(name: str, title: str) -> bool:
    return comparable(name) == comparable(title)


def render_section(section: Section, document_title: str) -> List[str]:
    if not section.links:
        return []
    lines: List[str] = []
    if section.name and not same_heading(section.name, document_title):
        lines += [f"## {section.name}", ""]
    if section.description:
        lines += [section.description.strip(), ""]
    lines += [link.render() for link in section.links]
    lines.append("")
    return lines


def render_link_block(heading: str, links: Sequence[Link]) -> List[str]:
    if not links:
        return []
    return [f"## {heading}", ""] + [link.render() for link in links] + [""]


def render_navigation(links: Sequence[Link]) -> List[str]:
    return render_link_block(NAVIGATION_HEADING, links)


def render_related(links: Sequence[Link]) -> List[str]:
    return render_link_block(RELATED_HEADING, links)


def join_blocks(blocks: Iterable[List[str]]) -> str:
    lines = [line for block in blocks for line in block]
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n"
