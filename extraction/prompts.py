from __future__ import annotations

from domain.canonical import FIELD_SPECS, FieldKind, FieldSpec

DASHBOARD_SYSTEM_PROMPT = """
You are an expert at reading e-commerce analytics dashboards from screenshots.

Your goal:
- Extract the store performance metrics visible in the screenshot
- Return ONLY valid JSON with the exact keys requested
- Numbers MUST be plain JSON numbers (no currency symbols, no thousands separators, no % signs)
- Scores are percentages between 0 and 100
""".strip()


def _type_hint(spec: FieldSpec) -> str:
    if spec.prompt_hint:
        return spec.prompt_hint
    if spec.kind is FieldKind.TEXT:
        return "string"
    if spec.clamp_range is not None:
        lo, hi = spec.clamp_range
        return f"number {lo}-{hi}"
    return "number"


def build_dashboard_prompt() -> str:
    key_lines = "\n".join(f"- {field} ({_type_hint(spec)})" for field, spec in FIELD_SPECS.items())

    return f"""
Analyze this analytics dashboard screenshot. Extract the data and return a JSON object.
Use EXACTLY these keys:
{key_lines}

IMPORTANT:
1. If a specific value is missing from the image, make your best reasonable guess based on the visible data, or default to 0 for numbers and "Unknown" for strings.
2. Return ONLY the JSON object. No markdown or extra text.
""".strip()
