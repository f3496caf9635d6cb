# SPDX-License-Identifier: MIT
"""Exception hierarchy for remotion-media tools.

Every tool converts these (and transport / filesystem errors) into a
structured error payload at its boundary.
"""


class RemotionMediaError(Exception):
    """Base class for all remotion-media errors."""


class ConfigurationError(RemotionMediaError):
    """A required credential or setting is missing or malformed."""


class UpstreamRejectedError(RemotionMediaError):
    """The generation API answered a submission with a non-success envelope."""

    def __init__(self, code: int | None, msg: str):
        self.code = code
        self.msg = msg
        super().__init__(msg)


class TranscriptionError(RemotionMediaError):
    """The local transcription binary failed or produced no subtitle file."""


class CatalogError(RemotionMediaError):
    """The catalog service answered with an error status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Airtable API error ({status_code}): {body}")
