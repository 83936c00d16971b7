# File: tests/test_script_identifier.py
import hashlib

import pytest

from script_scout.crawler.models import ScriptKind
from script_scout.crawler.script_identifier import (
    INLINE_PREFIX,
    identify_script,
    inline_script_id,
    is_inline_id,
)
from script_scout.errors import UrlParseError

PAGE = "https://site.com/shop/index.html"


def test_external_script_resolves_against_page():
    ref = identify_script("js/app.js", None, PAGE)
    assert ref.kind is ScriptKind.EXTERNAL
    assert ref.id == "https://site.com/shop/js/app.js"
    assert ref.source is None


def test_external_root_relative_and_absolute():
    assert identify_script("/app.js", None, PAGE).id == "https://site.com/app.js"
    assert identify_script("https://cdn.example/lib.js", None, PAGE).id == "https://cdn.example/lib.js"
    assert identify_script("//cdn.example/lib.js", None, PAGE).id == "https://cdn.example/lib.js"


def test_src_wins_over_inline_text():
    ref = identify_script("/app.js", "console.log(1)", PAGE)
    assert ref.kind is ScriptKind.EXTERNAL


def test_inline_id_is_sha256_of_text():
    code = "console.log('hi');"
    ref = identify_script(None, code, PAGE)
    assert ref.kind is ScriptKind.INLINE
    assert ref.id == INLINE_PREFIX + hashlib.sha256(code.encode("utf-8")).hexdigest()
    assert ref.source == code


def test_inline_without_text_hashes_empty_string():
    ref = identify_script(None, None, PAGE)
    assert ref.id == inline_script_id("")
    assert ref.source == ""


def test_same_inline_text_on_different_pages_gives_same_id():
    a = identify_script(None, "var a = 1;", "https://site.com/a")
    b = identify_script(None, "var a = 1;", "https://site.com/b")
    assert a == b


def test_distinct_inline_texts_give_distinct_ids():
    samples = ["var a = 1;", "var a = 2;", "var a = 1; ", "", "\n", "function f() {}"]
    ids = {identify_script(None, s, PAGE).id for s in samples}
    assert len(ids) == len(samples)


def test_external_and_inline_namespaces_never_collide():
    external = identify_script("https://site.com/a.js", None, PAGE)
    inline = identify_script(None, "https://site.com/a.js", PAGE)
    assert external.id != inline.id
    assert not is_inline_id(external.id)
    assert is_inline_id(inline.id)
    # a src that mimics the inline prefix still resolves to a URL
    spoof = identify_script(inline.id, None, PAGE)
    assert spoof.kind is ScriptKind.EXTERNAL
    assert not is_inline_id(spoof.id)


def test_unresolvable_src_raises():
    with pytest.raises(UrlParseError):
        identify_script("http://[::1/x.js", None, PAGE)
