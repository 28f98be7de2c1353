"""Configuration module for appdoc."""

from appdoc.config.settings import DocumentConfig, Settings, get_settings, load_document_config

__all__ = ["DocumentConfig", "Settings", "get_settings", "load_document_config"]
