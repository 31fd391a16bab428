"""Starter .size-label.toml template."""

DEFAULT_TOML = """\
# size-label configuration
# Environment variables (INPUT_SIZES, IGNORED, INPUT_PATTERN) override these values.

[sizes]
# Lower bound of counted characters -> tier; the label becomes size/<tier>
"1" = "XXS"
"10" = "XS"
"100" = "S"
"1000" = "M"
"5000" = "L"
"10000" = "XL"
"20000" = "XXL"

[ignore]
# Files excluded from counting; '!' re-includes a path
# patterns = ["**/*.lock", "docs/**", "!docs/keep.md"]

[analysis]
# pattern = "[\\\\u0400-\\\\u04FF]"   # characters counted on added lines

[github]
# api_url = "https://api.github.com"
"""
