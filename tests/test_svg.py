import json

import pytest

from svg import (
    assemble_sprite,
    load_optimizer_config,
    normalize_symbol,
    optimize_sprite,
)
from utils import IconsError, MalformedSvgError

MINIMAL = b'<svg viewBox="0 0 10 10"><path d="M0 0"/></svg>'

STANDALONE = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
    b'version="1.1" width="24" height="24" viewBox="0 0 24 24" fill="none">'
    b'<path d="M1 1h22v22H1z"/></svg>\n'
)


def test_minimal_svg_becomes_symbol():
    assert (
        normalize_symbol(MINIMAL, "a")
        == '<symbol id="a" viewBox="0 0 10 10"><path d="M0 0"/></symbol>'
    )


def test_namespaces_and_sizing_are_stripped_from_root():
    symbol = normalize_symbol(STANDALONE, "check")

    assert symbol.startswith('<symbol id="check"')
    assert "xmlns" not in symbol
    assert "version=" not in symbol
    assert " width=" not in symbol
    assert " height=" not in symbol
    assert 'viewBox="0 0 24 24"' in symbol
    assert 'fill="none"' in symbol
    assert '<path d="M1 1h22v22H1z"/>' in symbol
    assert symbol.endswith("</symbol>")


def test_text_input_with_encoding_declaration():
    symbol = normalize_symbol(STANDALONE.decode("utf-8"), "check")
    assert symbol.startswith('<symbol id="check"')


def test_existing_id_is_replaced():
    symbol = normalize_symbol(b'<svg id="old" viewBox="0 0 1 1"/>', "new")
    assert symbol == '<symbol id="new" viewBox="0 0 1 1"/>'


def test_nested_svg_keeps_its_attributes():
    symbol = normalize_symbol(
        b'<svg width="10" height="10"><svg width="5" height="5"/></svg>', "outer"
    )
    assert symbol == '<symbol id="outer"><svg width="5" height="5"/></symbol>'


def test_output_is_trimmed():
    symbol = normalize_symbol(b"\n\n  <svg viewBox='0 0 1 1'/>  \n", "a")
    assert symbol == '<symbol id="a" viewBox="0 0 1 1"/>'


def test_missing_svg_element():
    with pytest.raises(MalformedSvgError) as e:
        normalize_symbol(b"<div><p>hello</p></div>", "broken", "broken.svg")
    assert e.value.file == "broken.svg"
    assert "broken.svg" in str(e.value)


def test_unparsable_file():
    with pytest.raises(MalformedSvgError):
        normalize_symbol(b"this is not xml", "broken")


def test_assemble_sprite():
    document = assemble_sprite(['<symbol id="a"/>', '<symbol id="b"/>'])
    assert document == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<!-- This file is generated by icons build -->\n"
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="0" height="0">\n'
        "<defs>\n"
        '<symbol id="a"/>\n'
        '<symbol id="b"/>\n'
        "</defs>\n"
        "</svg>\n"
    )


def test_optimize_keeps_symbols():
    document = assemble_sprite(
        [
            normalize_symbol(STANDALONE, "a"),
            normalize_symbol(STANDALONE, "b"),
        ]
    )
    optimized = optimize_sprite(document)

    assert 'id="a"' in optimized
    assert 'id="b"' in optimized
    assert optimized.count("<symbol") == 2


def test_optimize_ignores_unknown_options(caplog):
    document = assemble_sprite([normalize_symbol(STANDALONE, "a")])
    optimized = optimize_sprite(document, {"not_a_scour_option": True})

    assert 'id="a"' in optimized
    assert "not_a_scour_option" in caplog.text


def test_optimizer_config_found_in_parent(tmp_path):
    (tmp_path / "scour.json").write_text(json.dumps({"indent_type": "none"}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert load_optimizer_config(nested) == {"indent_type": "none"}


def test_invalid_optimizer_config(tmp_path):
    (tmp_path / "scour.json").write_text("{not json")
    with pytest.raises(IconsError):
        load_optimizer_config(tmp_path)
