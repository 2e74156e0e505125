from planedit.plan.normalize import BULLET_RE, coerce_step, normalize_steps, strip_marker

def test_strip_marker_variants():
    assert strip_marker("1. Buy milk") == "Buy milk"
    assert strip_marker("2) Bake bread") == "Bake bread"
    assert strip_marker("- Walk") == "Walk"
    assert strip_marker("* Walk") == "Walk"
    assert strip_marker("• Walk") == "Walk"
    assert strip_marker("  plain text  ") == "plain text"
    assert strip_marker("") == ""
    assert strip_marker("-") == ""

def test_strip_marker_leaves_no_marker_or_padding():
    samples = ["  12. Cook rice ", "-Soak beans", "•   Chop onions\t", "3)Rest", "Serve warm"]
    for s in samples:
        out = strip_marker(s)
        assert out == out.strip()
        assert not BULLET_RE.match(out)

def test_strip_marker_removes_a_single_marker():
    assert strip_marker("1. - nested") == "- nested"

def test_coerce_step_shapes():
    assert coerce_step("Do X") == "Do X"
    assert coerce_step({"title": "Plan meals"}) == "Plan meals"
    assert coerce_step({"text": "", "content": "Shop"}) == "Shop"
    assert coerce_step({"value": 3}) == "3"
    assert coerce_step(42) == "42"
    assert coerce_step(None) == ""

def test_coerce_step_field_priority():
    entry = {"value": "v", "step": "s", "description": "d", "title": "t", "content": "c", "text": "x"}
    assert coerce_step(entry) == "x"
    del entry["text"]
    assert coerce_step(entry) == "c"

def test_coerce_step_never_returns_null_literal():
    for entry in (None, {}, {"text": None}, {"text": ""}):
        out = coerce_step(entry)
        assert out not in ("None", "null", "undefined")

def test_coerce_step_never_raises():
    class Weird:
        def __str__(self):
            raise RuntimeError("nope")
    assert coerce_step(Weird()) == ""

def test_normalize_steps_cleans_json_debris():
    raw = ['"steps": [', '"1. Buy milk",', '"Bake bread"', "],", "{", "  "]
    assert normalize_steps(raw) == ["Buy milk", "Bake bread"]

def test_normalize_steps_coerces_objects():
    assert normalize_steps([{"text": "- A"}, None, "B"]) == ["A", "B"]

def test_normalize_steps_is_idempotent():
    raw = ['"2. Soak beans",', "* Cook rice", "Pick 3 dinners", ',"- Serve"', "plain"]
    once = normalize_steps(raw)
    assert normalize_steps(once) == once
    assert "Pick 3 dinners" in once
