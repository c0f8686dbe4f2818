import pytest

from starframe.models import ButtonAction, FrameButton, FrameDocument
from starframe.render import render_document, render_frame


def _buttons(n):
    return [FrameButton(label=f"B{i}", action="post", target=f"/t?{i}") for i in range(1, n + 1)]


def test_render_starts_with_doctype_and_has_single_core_tags():
    html = render_frame("Title", "Desc", "https://img/x.png", _buttons(2))

    assert html.startswith("<!DOCTYPE html>")
    assert html.count('property="og:title"') == 1
    assert html.count('property="og:description"') == 1
    assert html.count('name="fc:frame"') == 1
    assert html.count('name="fc:frame:image"') == 1
    assert '<meta name="fc:frame" content="vNext" />' in html
    assert '<meta name="fc:frame:image" content="https://img/x.png" />' in html


def test_render_numbers_buttons_in_order():
    html = render_frame("T", "D", "img", _buttons(4))

    for i in range(1, 5):
        assert f'<meta name="fc:frame:button:{i}" content="B{i}" />' in html
        assert f'<meta name="fc:frame:button:{i}:action" content="post" />' in html
        assert f'<meta name="fc:frame:button:{i}:target" content="/t?{i}" />' in html
    assert html.index("fc:frame:button:1") < html.index("fc:frame:button:2") < html.index("fc:frame:button:4")
    assert "fc:frame:button:5" not in html


def test_render_omits_target_when_absent():
    html = render_frame("T", "D", "img", [FrameButton(label="Refresh", action=ButtonAction.POST)])

    assert '<meta name="fc:frame:button:1:action" content="post" />' in html
    assert "fc:frame:button:1:target" not in html


def test_render_without_buttons():
    html = render_frame("T", "D", "img", [])

    assert "fc:frame:button" not in html


def test_render_rejects_more_than_four_buttons():
    with pytest.raises(ValueError):
        render_frame("T", "D", "img", _buttons(5))


def test_frame_document_caps_buttons():
    with pytest.raises(ValueError):
        FrameDocument(title="T", buttons=tuple(_buttons(5)))


def test_render_escapes_interpolated_text():
    html = render_frame('Say "hi" <b>', "it's & done", "img", [FrameButton(label='a"b', action="link", target="x?a=1&b=2")])

    assert 'content="Say &quot;hi&quot; &lt;b&gt;"' in html
    assert 'content="it&#x27;s &amp; done"' in html
    assert 'content="a&quot;b"' in html
    assert 'content="x?a=1&amp;b=2"' in html
    assert "<b>" not in html


def test_render_is_idempotent():
    document = FrameDocument(title="T", description="D", image="img", buttons=tuple(_buttons(3)), body_html="<pre>x</pre>")

    assert render_document(document) == render_document(document)
    assert render_document(document) == render_frame("T", "D", "img", _buttons(3), body_html="<pre>x</pre>")


def test_body_html_is_embedded_verbatim():
    html = render_frame("T", "D", "img", [], body_html="<pre>1. Aries</pre>")

    assert html.endswith("<body><pre>1. Aries</pre></body></html>")
