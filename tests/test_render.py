"""
Tests for the HTML and plain-text sinks.
"""

from __future__ import annotations

from conftest import full_transaction
from txlens.display.presentation import (
    ItemList,
    Paragraph,
    PresentationModel,
    RawJson,
    Section,
    Tag,
    TagRow,
    build_presentation,
)
from txlens.render import render_html, render_page, render_text
from txlens.render.html import render_block
from txlens.sui_rpc.models import EnrichedResult


def _model(base=None):
    return build_presentation(EnrichedResult(base=base if base is not None else full_transaction()))


def test_chain_data_is_escaped():
    hostile = "<script>alert(1)</script>"
    tx = full_transaction(events=[{"type": f"0x2::x::{hostile}", "sender": hostile}])
    tx["effects"]["status"] = {"status": "failure", "error": hostile}
    html = render_html(_model(tx))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_block_kinds():
    assert render_block(TagRow((Tag("a"), Tag("ok", "success")))) == (
        '<div class="flex-row"><span class="tag">a</span>'
        '<span class="tag badge-success">ok</span></div>'
    )
    assert render_block(Paragraph("Error: x", "fail")) == '<p class="badge-fail">Error: x</p>'
    assert render_block(Paragraph("plain")) == "<p>plain</p>"
    assert render_block(ItemList(("one", "two"), heading="H")) == (
        '<p><strong>H</strong></p><ul class="summary-list"><li>one</li><li>two</li></ul>'
    )
    raw = render_block(RawJson('{"a": "<b>"}'))
    assert "<details><summary>Toggle raw JSON</summary>" in raw
    assert "&lt;b&gt;" in raw


def test_render_html_sections_and_callouts():
    model = PresentationModel((
        Section("First", (Paragraph("p"),), "callout one"),
        Section("Raw response", (RawJson("{}"),)),
    ))
    html = render_html(model)
    assert html.count('<section class="result-block">') == 2
    assert '<div class="callout">callout one</div>' in html
    assert html.count('class="callout"') == 1


def test_page_without_results_hides_results_area():
    page = render_page(status="Please enter a transaction digest.", tone="error")
    assert '<div id="results" hidden></div>' in page
    assert '<p id="status" class="status-error">Please enter a transaction digest.</p>' in page
    assert 'action="/lookup"' in page
    assert "submit-button" in page


def test_page_with_results():
    page = render_page(status="ok", tone="success", model=_model(), digest="abc")
    assert '<div id="results">' in page
    assert "Gas + balance" in page
    assert 'value="abc"' in page


def test_api_key_field_collapses_when_populated():
    empty = render_page(api_key_hint="paste <key>")
    assert '<div id="api-key-container">' in empty
    assert 'aria-hidden="true"' in empty
    assert 'placeholder="paste &lt;key&gt;"' in empty

    filled = render_page(api_key="k-123")
    assert '<div id="api-key-container" class="collapsed">' in filled
    assert 'aria-hidden="false"' in filled
    assert 'value="k-123"' in filled


def test_render_text():
    text = render_text(_model())
    assert text.startswith("== Transaction ==\n")
    assert "== Gas + balance ==" in text
    assert "  Gas breakdown:" in text
    assert "    - Net gas cost: 0.002505 SUI" in text
    assert "  > 1 created, 2 mutated, and 0 transferred objects." in text
    assert "(raw JSON hidden; use --raw to show it)" in text
    assert text.endswith("\n")


def test_render_text_with_raw():
    text = render_text(_model(), include_raw=True)
    assert "raw JSON hidden" not in text
    assert '"balanceSnapshots": []' in text
