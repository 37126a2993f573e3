"""Starter .aca.toml template."""

DEFAULT_TOML = """\
# aca-utils configuration
version = "1.0"

[scan]
# include = ["**/*.properties", "**/*.yml", "**/*.yaml", "**/*.conf",
#            "**/*.ini", "**/*.txt", "**/*.env", "**/*.json"]
# exclude = ["**/.git/**", "**/node_modules/**", "**/dist/**"]
skip_comments = false     # true: do not look for IPs/ports inside # and ; comments

[output]
format = "csv"            # ip-port: csv | table | json
flip_format = "table"     # flip-adapters: table | json

[flip]
properties_path = "env/{env}/parameters.properties"
branch_template = "toggle/adapters-{env}"
dry_run = true

[store]
# path = "~/.aca-utils/adapters.txt"
"""
