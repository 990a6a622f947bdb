from __future__ import annotations

import pytest

from htmlstrip import codec
from htmlstrip.config import TagPair
from htmlstrip.restore import count_unrestored, restore_spans
from htmlstrip.utils.errors import DecodeError

PAIRS = [TagPair(start="{%", end="%}"), TagPair(start="{{", end="}}")]


def test_raw_tokens_restored() -> None:
    text = "<p>" + codec.encode("NS", 0, b"{% x %}") + codec.encode("NS", 1, b"{{ y }}") + "</p>"
    result = restore_spans(text, PAIRS, "NS")
    assert result.text == "<p>{% x %}{{ y }}</p>"
    assert result.raw_counts == [1, 1]
    assert result.escaped_counts == [0, 0]
    assert result.total == 2


def test_escaped_tokens_restored() -> None:
    text = '<a href="&lt;!-- ___NS_0___ eyUgeCAlfQ== --&gt;">x</a>'
    result = restore_spans(text, PAIRS, "NS")
    assert result.text == '<a href="{% x %}">x</a>'
    assert result.escaped_counts == [1, 0]


def test_both_forms_in_one_document() -> None:
    token = codec.encode("NS", 0, b"{% u %}")
    text = f'<a title="&lt;!-- ___NS_0___ eyUgeCAlfQ== --&gt;">{token}</a>'
    result = restore_spans(text, PAIRS, "NS")
    assert result.text == '<a title="{% x %}">{% u %}</a>'


def test_other_namespace_left_alone() -> None:
    token = codec.encode("OTHER", 0, b"{% x %}")
    assert restore_spans(token, PAIRS, "NS").text == token


def test_undecodable_raw_token_aborts() -> None:
    with pytest.raises(DecodeError):
        restore_spans("<!-- ___NS_0___ %%%% -->", PAIRS, "NS")


def test_undecodable_escaped_token_aborts() -> None:
    text = codec.encode("NS", 0, b"ok") + "&lt;!-- ___NS_0___ %%%% --&gt;"
    with pytest.raises(DecodeError):
        restore_spans(text, PAIRS, "NS")


def test_earlier_pair_restored_inside_later_payload() -> None:
    inner = codec.encode("NS", 0, b"{% x %}")
    outer = codec.encode("NS", 1, f'{{{{ "{inner}" }}}}'.encode())
    result = restore_spans(f"<p>{outer}</p>", PAIRS, "NS")
    assert result.text == '<p>{{ "{% x %}" }}</p>'
    assert result.raw_counts == [0, 1]
    assert result.nested == 1
    assert result.total == 2


def test_unrestored_counts_only_created_placeholders() -> None:
    source = "<p>{% x %} ___NS_0___</p>"
    mangled = "<p><!-- ___NS_0___ eyUgeCAlfQ== --!> ___NS_0___</p>"
    restored = restore_spans(mangled, PAIRS, "NS")
    assert restored.text == mangled
    assert count_unrestored(source, mangled, restored, PAIRS, "NS") == [1, 0]


def test_document_markers_are_not_unrestored() -> None:
    source = "<p>{% a %}___NS_0___{% b %}</p>"
    mutated = (
        "<p>" + codec.encode("NS", 0, b"{% a %}") + "___NS_0___" + codec.encode("NS", 0, b"{% b %}")
    ) + "</p>"
    restored = restore_spans(mutated, PAIRS, "NS")
    assert restored.text == source
    assert count_unrestored(source, mutated, restored, PAIRS, "NS") == [0, 0]
