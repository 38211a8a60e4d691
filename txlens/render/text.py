"""
Plain-text rendering sink for terminals (simplified mode used by the CLI).
"""

from __future__ import annotations

from txlens.display.presentation import (
    Block,
    ItemList,
    Paragraph,
    PresentationModel,
    RawJson,
    TagRow,
)


def _render_block(block: Block, include_raw: bool) -> list[str]:
    if isinstance(block, TagRow):
        return ["  " + " | ".join(t.text for t in block.tags)]
    if isinstance(block, Paragraph):
        return [f"  {block.text}"]
    if isinstance(block, ItemList):
        lines = [f"  {block.heading}:"] if block.heading else []
        lines.extend(f"    - {item}" for item in block.items)
        return lines
    if isinstance(block, RawJson):
        if not include_raw:
            return ["  (raw JSON hidden; use --raw to show it)"]
        return ["  " + line for line in block.text.splitlines()]
    raise TypeError(f"unsupported block: {type(block).__name__}")


def render_text(model: PresentationModel, *, include_raw: bool = False) -> str:
    lines: list[str] = []
    for section in model.sections:
        lines.append(f"== {section.title} ==")
        for block in section.blocks:
            lines.extend(_render_block(block, include_raw))
        if section.callout:
            lines.append(f"  > {section.callout}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
