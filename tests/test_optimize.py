import logging

import pytest

from conftest import local_name, parse_svg

from svgbatch import optimize
from svgbatch.decor.canvas import paint_ref_id
from svgbatch.decor.compose import generate_one
from svgbatch.optimize import PLUGINS, optimize_svg, scour_options


def test_scour_options_follow_plugins():
    opts = scour_options(["removeComments", "cleanupAttrs"])
    assert opts.strip_comments is True
    assert opts.strip_xml_prolog is False
    assert opts.indent_type == "none"
    assert opts.newlines is False
    assert opts.strip_ids is False
    assert opts.shorten_ids is False

    assert scour_options(["removeXMLProcInst"]).strip_xml_prolog is True
    assert scour_options([]).strip_comments is False


def test_removes_doctype_and_comments(base_svg):
    out = optimize_svg(base_svg)
    assert "<!DOCTYPE" not in out
    assert "test logo" not in out
    root = parse_svg(out)
    assert any(el.get("id") == "logo-disc" for el in root.iter())


def test_prolog_kept_unless_requested(base_svg):
    assert optimize_svg(base_svg).lstrip().startswith("<?xml")
    out = optimize_svg(base_svg, plugins=["removeDoctype", "removeXMLProcInst"])
    assert not out.lstrip().startswith("<?xml")


def test_cleanup_removes_indentation(base_svg):
    out = optimize_svg(base_svg)
    assert not any(line.startswith((" ", "\t")) for line in out.splitlines())


def test_optimize_never_grows(base_svg):
    out = optimize_svg(base_svg)
    assert len(out) <= len(base_svg)


def test_already_optimized_input_unchanged(base_svg):
    once = optimize_svg(base_svg)
    assert optimize_svg(once) == once


def test_generated_document_keeps_references(base_svg, seeded):
    raw = generate_one(base_svg)
    out = optimize_svg(raw)
    assert len(out) <= len(raw)

    root = parse_svg(out)
    assert local_name(root.tag) == "svg"
    ids = {el.get("id") for el in root.iter() if el.get("id")}
    refs = [paint_ref_id(el.get("fill")) for el in root.iter()]
    refs = [r for r in refs if r]
    assert refs
    assert all(r in ids for r in refs)


def test_multipass_repeats_until_stable(base_svg, monkeypatch):
    calls = []
    real = optimize.scour.scourString

    def counting(svg, options=None):
        calls.append(svg)
        return real(svg, options)

    monkeypatch.setattr(optimize.scour, "scourString", counting)

    optimize_svg(base_svg, multipass=False)
    assert len(calls) == 1

    calls.clear()
    optimize_svg(base_svg, multipass=True)
    assert 2 <= len(calls) <= optimize.MAX_PASSES


def test_plugin_subset_keeps_doctype(base_svg):
    out = optimize_svg(base_svg, plugins=["removeComments"])
    assert "<!DOCTYPE svg" in out
    assert "test logo" not in out
    parse_svg(out)


def test_comments_kept_without_plugin(base_svg):
    out = optimize_svg(base_svg, plugins=["removeDoctype"])
    assert "test logo" in out


def test_unknown_plugin():
    with pytest.raises(ValueError):
        optimize_svg("<svg/>", plugins=["removeEverything"])


def test_plugin_names():
    assert {"removeDoctype", "removeComments", "cleanupAttrs", "removeXMLProcInst"} == set(PLUGINS)


def test_logs_sizes(base_svg, caplog):
    with caplog.at_level(logging.INFO, logger="svgbatch.optimize"):
        out = optimize_svg(base_svg)
    assert f"Original Size: {len(base_svg)}" in caplog.text
    assert f"Optimized Size: {len(out)}" in caplog.text
