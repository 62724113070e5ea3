"""Prompt builders for health-checkup document extraction."""

RESPONSE_FORMAT_EXAMPLE = (
    '{"date": "YYYY-MM-DD", "items": [{"name": "項目名", "value": "値", "unit": "単位"}]}'
)


def build_system_prompt() -> str:
    """Return the extraction instruction for a Japanese health-checkup document."""
    return (
        "この健康診断書の画像から、測定日(YYYY-MM-DD)と、検査項目・測定値・単位を抽出し、"
        "指定のJSON形式のみを出力してください。"
    )


def build_extraction_prompt() -> str:
    """Return the full instruction text, including the required JSON shape.

    The text is identical for every request; the provider sees the schema as
    plain instruction text rather than a structured-output definition.
    """
    return f"{build_system_prompt()}\n\n返却形式:\n{RESPONSE_FORMAT_EXAMPLE}"
