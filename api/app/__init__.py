__version__ = "0.4.0"

__release_notes__ = """
Multi-file question paper uploads (PDF, DOC, DOCX and images) with magic-byte
type checks, the study assistant chat relay, and paper browse filters.
"""
