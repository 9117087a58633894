"""Per-directory index assembly with budget-driven overflow."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import List, Sequence, Set

from llmsindex.customization.models import SectionDefinition
from llmsindex.models import FileRecord, GeneratedDocument, Link, Section
from llmsindex.synthesis import render
from llmsindex.synthesis.budget import (
    BudgetStatus,
    classify,
    estimate_lines,
    offer_budget,
    should_overflow,
)
from llmsindex.synthesis.context import IndexContext
from llmsindex.utils import paths
from llmsindex.utils.text import pluralize

LOGGER = logging.getLogger(__name__)

OTHER_TOPICS = "Other Topics"


def select_entries(include: Sequence[str], offers: Sequence[str], priority: int) -> List[str]:
    """Negotiate which child entries a parent section surfaces.

    Explicit includes come first; offers then fill the remaining slots up to
    ``ceil(len(offers) * priority / 100)`` entries in total.
    """
    selected: List[str] = []
    seen: Set[str] = set()
    for entry in include:
        key = paths.normalize(entry).lower()
        if key and key not in seen:
            seen.add(key)
            selected.append(entry)

    budget = offer_budget(len(offers), priority)
    for offer in offers:
        if len(selected) >= budget:
            break
        key = paths.normalize(offer).lower()
        if key and key not in seen:
            seen.add(key)
            selected.append(offer)
    return selected


def _offer_rank(name: str, offers: Sequence[str]) -> int | None:
    name = name.lower()
    stem = posixpath.splitext(name)[0]
    for rank, offer in enumerate(offers):
        offer = paths.normalize(offer).lower()
        if offer in (name, stem):
            return rank
    return None


def order_by_offers(
    records: Sequence[FileRecord], directory: str, offers: Sequence[str]
) -> List[FileRecord]:
    """Move offered documents to the front in offer order, keeping the rest."""
    ranked = []
    rest = []
    for record in records:
        rank = _offer_rank(paths.relative_to(record.relative_path, directory), offers)
        if rank is None:
            rest.append(record)
        else:
            ranked.append((rank, record))
    ranked.sort(key=lambda item: item[0])
    return [record for _, record in ranked] + rest


@dataclass(slots=True)
class AssemblyResult:
    primary: GeneratedDocument
    extended: GeneratedDocument | None = None
    status: BudgetStatus = BudgetStatus.OK
    estimated_lines: int = 0
    local_topics: int = 0
    sections: List[Section] = field(default_factory=list)


class ContentAssembler:
    """Builds the primary index, and possibly an extended index, per directory."""

    def __init__(self, context: IndexContext) -> None:
        self.context = context
        self.config = context.config

    def assemble(self, directory: str, records: Sequence[FileRecord]) -> AssemblyResult:
        ctx = self.context
        title = ctx.title(directory)
        children = ctx.sorted_children(directory)
        leaf = not children

        local = [ctx.apply_node_override(directory, record) for record in records]
        sections, linked, referenced = self.custom_sections(directory)
        local = [record for record in local if record.relative_path not in linked]
        local = order_by_offers(local, directory, ctx.store.offers(directory))
        local_sections = self.local_sections(directory, local, labeled=bool(sections))

        head = [
            render.render_header(title),
            render.render_description(ctx.description(directory)),
            render.render_preamble(ctx.store.preamble(directory)),
            render.render_guidance(ctx.store.guidance(directory)),
        ]
        custom_blocks = [render.render_section(section, title) for section in sections]
        navigation = [
            ctx.index_link(child, directory, short=True)
            for child in children
            if child not in referenced
        ]
        related = render.render_related(self.related_links(directory))

        local_blocks = [render.render_section(section, title) for section in local_sections]
        estimated = estimate_lines(
            [*head, *custom_blocks, *local_blocks, render.render_navigation(navigation), related]
        )

        extended = None
        if should_overflow(
            estimated,
            hard=self.config.hard_budget,
            local_documents=len(local),
            child_indices=len(children),
        ):
            extended = self._extended_document(
                directory, title, self.local_sections(directory, local, labeled=False)
            )
            navigation.insert(
                0,
                Link(
                    title=f"{title}: Additional Topics",
                    url=ctx.links.index_url(directory, directory, self.config.extended_filename),
                    description=pluralize(len(local), "additional topic"),
                ),
            )
            local_blocks = []
            LOGGER.info(
                "%s: %d estimated lines over hard budget %d, moved %d topics to %s",
                directory or ".",
                estimated,
                self.config.hard_budget,
                len(local),
                self.config.extended_filename,
            )

        blocks = [
            *head,
            *custom_blocks,
            *local_blocks,
            render.render_navigation(navigation),
            related,
        ]
        final_lines = estimate_lines(blocks)
        status = classify(
            final_lines,
            soft=self.config.soft_budget,
            hard=self.config.hard_budget,
            leaf=leaf,
        )
        if status is BudgetStatus.OVER_HARD:
            LOGGER.warning("%s: %d lines, over hard budget", directory or ".", final_lines)
        elif status is BudgetStatus.OVER_SOFT:
            LOGGER.warning("%s: %d lines, over soft budget", directory or ".", final_lines)

        primary = GeneratedDocument(
            directory=directory,
            path=ctx.output_path(directory),
            kind="primary",
            content=render.join_blocks(blocks),
            estimated_lines=final_lines,
            leaf=leaf,
        )
        return AssemblyResult(
            primary=primary,
            extended=extended,
            status=status,
            estimated_lines=estimated,
            local_topics=len(local),
            sections=sections,
        )

    def local_sections(
        self, directory: str, records: Sequence[FileRecord], *, labeled: bool
    ) -> List[Section]:
        """Split local documents by toc category.

        Uncategorized documents come first, under "Other Topics" when labeled
        and without a heading otherwise; each category follows by name.
        """
        ctx = self.context
        uncategorized = [record for record in records if not record.category]
        categories = sorted(
            {record.category for record in records if record.category}, key=str.lower
        )
        sections: List[Section] = []
        if uncategorized:
            sections.append(
                Section(
                    name=OTHER_TOPICS if labeled else None,
                    links=[ctx.document_link(record, directory) for record in uncategorized],
                )
            )
        for category in categories:
            links = [
                ctx.document_link(record, directory)
                for record in records
                if record.category == category
            ]
            sections.append(Section(name=category, links=links))
        return sections

    def custom_sections(self, directory: str) -> tuple[List[Section], Set[str], Set[str]]:
        """Resolve section definitions into sorted, non-empty sections.

        Also returns the document keys the sections link and the child
        directories they reference.
        """
        sections: List[Section] = []
        linked: Set[str] = set()
        referenced: Set[str] = set()
        for definition in self.context.store.sections(directory):
            if definition.is_child_reference:
                section, keys = self._child_reference(directory, definition)
                referenced.add(paths.join(directory, definition.path or ""))
            else:
                section, keys = self._standalone(directory, definition)
            linked |= keys
            if section.links:
                sections.append(section)
        sections.sort(key=lambda section: (-section.priority, (section.name or "").lower()))
        return sections, linked, referenced

    def _child_reference(
        self, directory: str, definition: SectionDefinition
    ) -> tuple[Section, Set[str]]:
        ctx = self.context
        child = paths.join(directory, definition.path or "")
        links: List[Link] = []
        keys: Set[str] = set()
        if child in ctx.tree:
            links.append(ctx.index_link(child, directory))
            keys.add(child)

        entries = select_entries(
            definition.include or [], ctx.store.offers(child), definition.priority
        )
        for entry in entries:
            resolved = ctx.resolve_entry(paths.join(child, entry), directory)
            if resolved is not None and resolved[1] not in keys:
                links.append(resolved[0])
                keys.add(resolved[1])

        section = Section(
            name=definition.name or ctx.title(child),
            links=links,
            description=definition.description
            or ctx.store.short_description(child)
            or ctx.store.description_override(child),
            priority=definition.priority,
        )
        return section, keys

    def _standalone(
        self, directory: str, definition: SectionDefinition
    ) -> tuple[Section, Set[str]]:
        links: List[Link] = []
        keys: Set[str] = set()
        for entry in definition.include or []:
            resolved = self.context.resolve_entry(entry, directory)
            if resolved is not None and resolved[1] not in keys:
                links.append(resolved[0])
                keys.add(resolved[1])
        section = Section(
            name=definition.name,
            links=links,
            description=definition.description,
            priority=definition.priority,
        )
        return section, keys

    def related_links(self, directory: str) -> List[Link]:
        topics = sorted(
            self.context.store.related(directory),
            key=lambda topic: (-(topic.weight or 0.0), paths.normalize(topic.path)),
        )
        links: List[Link] = []
        for topic in topics:
            resolved = self.context.resolve_entry(topic.path, directory)
            if resolved is None:
                continue
            link = resolved[0]
            if topic.reason:
                link.description = topic.reason
            elif topic.keywords:
                link.description = "Keywords: " + ", ".join(topic.keywords)
            links.append(link)
        return links

    def _extended_document(
        self, directory: str, title: str, local_sections: List[Section]
    ) -> GeneratedDocument:
        ctx = self.context
        primary_url = ctx.links.index_url(directory, directory, self.config.index_filename)
        blocks = [
            render.render_header(f"{title}: Additional Topics"),
            render.render_description(f"More topics from [{title}]({primary_url})."),
            *(render.render_section(section, title) for section in local_sections),
        ]
        return GeneratedDocument(
            directory=directory,
            path=ctx.output_path(directory, self.config.extended_filename),
            kind="extended",
            content=render.join_blocks(blocks),
            estimated_lines=estimate_lines(blocks),
        )
