"""Hosts extracting text spans from concrete source formats."""

from .javascript import Finding, JavaScriptHost, SourceParseError

__all__ = ["Finding", "JavaScriptHost", "SourceParseError"]
