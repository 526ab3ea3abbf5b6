from enum import StrEnum


class SourceProperty(StrEnum):
    """Pull request text source an artifact key was found in."""

    TITLE = "title"
    BODY = "body"
    COMMIT_MESSAGE = "commit_message"
    LABEL = "label"
