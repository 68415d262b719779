"""
Error taxonomy shared by the relays and the HTTP layer.

Every error is caught at the route boundary in api_main.py and mapped
to a small `{"error": ..., "detail"?: ...}` body.
"""


class LifestyleScoreError(Exception):
    """Base class for all errors raised by this service."""


class ValidationError(LifestyleScoreError):
    """Request body is malformed or out of bounds (400 "Invalid body")."""


class ConfigurationError(LifestyleScoreError):
    """A required setting, usually the OpenAI credential, is missing."""


class UpstreamError(LifestyleScoreError):
    """The completion service failed: transport error, timeout or non-2xx status."""


class MalformedUpstreamPayload(LifestyleScoreError):
    """
    The completion service answered, but the content is not valid JSON.

    analyze_node catches this and answers with a fixed fallback result,
    so it never reaches the caller.
    """
