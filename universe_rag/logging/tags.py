# universe_rag/logging/tags.py
"""
Central place for defining logging subsystem tags.

Changing a tag here updates it project-wide.
"""

UNIVERSE = "[UNIVERSE]"
HTTP = "[HTTP]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
