"""
HTML rendering sink.

Every interpolated string passes through html.escape: addresses, type tags,
error messages and event data all come from the chain and are untrusted.
"""

from __future__ import annotations

from html import escape

from txlens.display.presentation import (
    Block,
    ItemList,
    Paragraph,
    PresentationModel,
    RawJson,
    Section,
    Tag,
    TagRow,
)

_TONE_CLASSES = {
    "success": "badge-success",
    "fail": "badge-fail",
}

_STYLE = """
body { font-family: system-ui, sans-serif; max-width: 960px; margin: 2rem auto; padding: 0 1rem; }
.flex-row { display: flex; flex-wrap: wrap; gap: .5rem; margin: .5rem 0; }
.tag { background: #eef1f5; border-radius: 4px; padding: .2rem .5rem; word-break: break-all; }
.badge-success { color: #1b7f3b; }
.badge-fail { color: #b42318; }
.callout { border-left: 3px solid #4263eb; padding: .5rem .75rem; margin-top: .75rem; background: #f5f7ff; }
.result-block { border: 1px solid #dde1e6; border-radius: 6px; padding: 1rem; margin: 1rem 0; }
.status-error { color: #b42318; }
.status-warning { color: #9a6700; }
#api-key-container.collapsed input { display: none; }
pre { overflow-x: auto; }
"""


def _tone_class(tone: str) -> str:
    return _TONE_CLASSES.get(tone, "")


def _render_tag(tag: Tag) -> str:
    classes = " ".join(c for c in ("tag", _tone_class(tag.tone)) if c)
    return f'<span class="{classes}">{escape(tag.text)}</span>'


def render_block(block: Block) -> str:
    if isinstance(block, TagRow):
        return f'<div class="flex-row">{"".join(_render_tag(t) for t in block.tags)}</div>'
    if isinstance(block, Paragraph):
        css = _tone_class(block.tone)
        attr = f' class="{css}"' if css else ""
        return f"<p{attr}>{escape(block.text)}</p>"
    if isinstance(block, ItemList):
        heading = f"<p><strong>{escape(block.heading)}</strong></p>" if block.heading else ""
        items = "".join(f"<li>{escape(item)}</li>" for item in block.items)
        return f'{heading}<ul class="summary-list">{items}</ul>'
    if isinstance(block, RawJson):
        return (
            '<div class="raw-response"><details>'
            f"<summary>{escape(block.summary)}</summary>"
            f"<pre>{escape(block.text)}</pre>"
            "</details></div>"
        )
    raise TypeError(f"unsupported block: {type(block).__name__}")


def render_section(section: Section) -> str:
    body = "\n".join(render_block(b) for b in section.blocks)
    callout = f'<div class="callout">{escape(section.callout)}</div>' if section.callout else ""
    return f'<section class="result-block"><h3>{escape(section.title)}</h3>{body}{callout}</section>'


def render_html(model: PresentationModel) -> str:
    """Render all sections; the caller embeds the fragment in the results area."""
    return "\n".join(render_section(s) for s in model.sections)


def _api_key_field(api_key: str | None, hint: str) -> str:
    """API key input; collapses to a "saved" indicator once a key is populated."""
    collapsed = bool(api_key and api_key.strip())
    container_class = ' class="collapsed"' if collapsed else ""
    return (
        f'<div id="api-key-container"{container_class}>'
        '<label for="api-key-input">API key (optional)</label> '
        f'<input id="api-key-input" name="api_key" type="password" autocomplete="off" '
        f'placeholder="{escape(hint)}" value="{escape(api_key or "")}">'
        f'<span id="api-key-saved" aria-hidden="{"false" if collapsed else "true"}">API key saved</span> '
        '<button id="api-key-edit" type="button" '
        "onclick=\"document.getElementById('api-key-container').classList.remove('collapsed')\">"
        "Edit</button>"
        "</div>"
    )


def render_page(
    *,
    status: str = "",
    tone: str = "",
    model: PresentationModel | None = None,
    digest: str = "",
    api_key: str | None = None,
    api_key_hint: str = "",
) -> str:
    """Full lookup page: form, status area and (when a model is given) the results area."""
    status_class = f' class="status-{escape(tone)}"' if tone else ""
    results_hidden = "" if model is not None else " hidden"
    results = render_html(model) if model is not None else ""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        "<title>Sui transaction lookup</title>"
        f"<style>{_STYLE}</style></head><body>"
        "<h1>Sui transaction lookup</h1>"
        '<form id="lookup-form" method="post" action="/lookup" '
        "onsubmit=\"document.getElementById('submit-button').disabled = true\">"
        '<label for="digest-input">Transaction digest</label> '
        f'<input id="digest-input" name="digest" value="{escape(digest)}" required> '
        f"{_api_key_field(api_key, api_key_hint)}"
        '<button id="submit-button" type="submit">Look up</button>'
        "</form>"
        f'<p id="status"{status_class}>{escape(status)}</p>'
        f'<div id="results"{results_hidden}>{results}</div>'
        "</body></html>"
    )
