"""Default configuration values.

The template default lives on the ``Config`` model, so it is not
repeated in the YAML below.
"""

DEFAULT_TEMPLATE = "{cwd} {git_branch} $ "

DEFAULT_CONFIG_YAML = """
color: true
git_timeout: 2.0
styles: {}
"""
