"""Configuration: the draft parser and the settings loader."""
