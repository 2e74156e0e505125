from planedit.plan.prompts import build_plan_prompt, build_run_prompt, format_steps

def test_plan_prompt_wraps_request():
    p = build_plan_prompt("Plan 3 vegetarian dinners under 30 minutes")
    assert p.endswith("User request: Plan 3 vegetarian dinners under 30 minutes")
    assert '"steps": [' in p
    assert "4–8 steps max." in p
    assert "max 18 words" in p
    assert "Here are the steps" in p  # interdit explicitement
    assert "valid JSON" in p

def test_plan_prompt_keeps_braces_in_request():
    p = build_plan_prompt('Use {"budget": 20}')
    assert 'User request: Use {"budget": 20}' in p

def test_format_steps_numbers_in_order():
    assert format_steps(["A", {"text": "B"}, "C"]) == "1. A\n2. B\n3. C"

def test_run_prompt_embeds_request_and_steps():
    p = build_run_prompt("Plan my week", ["Cook on Monday", "Rest on Friday"])
    assert "The original request is:\nPlan my week\n" in p
    assert "1. Cook on Monday\n2. Rest on Friday" in p
    assert "hard constraints" in p
    assert "Notes & assumptions" in p
    assert "200–300 words" in p
    assert 'Do NOT mention "steps", "plan"' in p
    assert "Do NOT restate or list the steps themselves." in p

def test_run_prompt_without_steps():
    p = build_run_prompt("", [])
    assert "The original request is:\n\n" in p
