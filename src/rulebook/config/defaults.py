"""Default configuration values and starter .rulebook.toml template."""

DEFAULT_TOML = """\
# rulebook configuration
version = "1.0"

[engine]
coercion = "truthy"       # truthy | strict — how clause outcomes become booleans
# rule_types = ["myproject.rules:RangeRule"]   # appended after the built-ins

[output]
format = "terminal"       # terminal | json
show_values = true
"""
