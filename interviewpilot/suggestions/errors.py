"""Errors raised by the follow-up suggestion layer."""


class SuggestionError(Exception):
    """Follow-up suggestions could not be generated."""
