"""Building blocks for a group chat bot: service switches, base16384, small-talk plugins, fortunes, lookups and a Flask control panel."""

__version__ = "0.1.0"