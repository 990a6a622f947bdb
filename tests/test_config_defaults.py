from htmlstrip.config import TagPair, load_config


def test_default_values() -> None:
    cfg = load_config()
    assert cfg.namespace == "HTML_STRIP"
    assert cfg.strip_selectors == ["script", "noscript", 'link[rel="preload"][as="style"]']
    assert cfg.tag_pairs == [TagPair(start="{%", end="%}")]
    assert cfg.parser == "html.parser"
    assert cfg.formatter == "minimal"
    assert cfg.fail_on_residual is True
