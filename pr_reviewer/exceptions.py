"""Exceptions raised by the reviewer election tool."""


class ReviewerError(Exception):
    """Base class for all errors raised by pr_reviewer."""


class ConfigError(ReviewerError):
    """Configuration file is invalid or could not be written."""


class GitHubAPIError(ReviewerError):
    """A request to the GitHub API failed."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class RepositoryNotFoundError(ReviewerError):
    """No GitHub repository could be determined for the working directory."""
